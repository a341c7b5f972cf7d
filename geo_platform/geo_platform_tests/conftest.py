"""
Shared fixtures. Environment variables are set before the service modules are
imported so the cached Settings pick up the test configuration.
"""
import os
import tempfile

from passlib.hash import pbkdf2_sha256

SUPERUSER = "root"
SUPERUSER_PASSWORD = "sup3r-secret"  # pragma: allowlist secret

_test_dir = tempfile.mkdtemp(prefix="geo_service_tests_")

os.environ.update({
    "PORT": "3000",
    "STAGE": "test",
    "PG_HOST": "localhost",
    "PG_PORT": "5432",
    "PG_DB": "guessmygeo",
    "PG_USER": "guessmygeo",
    "PG_PASS": "guessmygeo",
    "DATABASE_URL": f"sqlite:///{os.path.join(_test_dir, 'test.db')}",
    "SUPERUSER": SUPERUSER,
    "SUPERUSER_PASS": pbkdf2_sha256.hash(SUPERUSER_PASSWORD),
    "JWT_SECRET": "test-jwt-secret-with-enough-length-for-hs256",
    "JWT_EXPIRATION": "3600",
    "UPLOADS_DIR": os.path.join(_test_dir, "uploads"),
    "LOG_LEVEL": "WARNING",
})

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402

from geo_platform.geo_platform.geo_service.auth import create_access_token, hash_password, ADMIN_PRIVILEGE  # noqa: E402
from geo_platform.geo_platform.geo_service.config import get_settings  # noqa: E402
from geo_platform.geo_platform.geo_service.db import Base, engine  # noqa: E402
from geo_platform.geo_platform.geo_service.models import User  # noqa: E402
from geo_platform.geo_platform.geo_service.utils.avatar_storage import AvatarStorage  # noqa: E402


@pytest.fixture(autouse=True)
def reset_database():
    # Drop all tables and recreate them before each test
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)


@pytest.fixture
def settings():
    return get_settings()


@pytest.fixture
def db_session():
    """Create a database session for testing."""
    session = Session(bind=engine)
    yield session
    session.close()


@pytest.fixture
def make_user(db_session):
    """Insert a user directly, bypassing the service."""
    def _make_user(username="alice", password="pw1", email=None, avatar=None):
        user = User(
            username=username,
            password=hash_password(password),
            name="Alice",
            surname="Liddell",
            email=email or f"{username}@example.com",
            avatar=avatar,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user
    return _make_user


@pytest.fixture
def avatar_storage(tmp_path):
    return AvatarStorage(str(tmp_path / "uploads"))


@pytest.fixture
def client():
    from geo_platform.geo_platform.geo_service.main import app

    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth_header_for(settings):
    def _auth_header_for(username, privilege=None):
        token = create_access_token(username, settings, privilege=privilege)
        return {"Authorization": f"Bearer {token}"}
    return _auth_header_for


@pytest.fixture
def admin_header(auth_header_for):
    return auth_header_for(SUPERUSER, privilege=ADMIN_PRIVILEGE)


@pytest.fixture
def superuser_credentials():
    return SUPERUSER, SUPERUSER_PASSWORD
