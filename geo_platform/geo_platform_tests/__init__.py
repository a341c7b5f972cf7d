"""
geo_service tests

Covers the GuessMyGeo backend:

- Authentication service (registration, login, superuser, profile, avatar)
- Actions service (recording, filtered selection, removal)
- HTTP routes, error mapping and bearer-token resolution (`main.py`)
- Settings validation and session token helpers
"""
