"""
Request dependencies: services, bearer token and current user resolution.
"""
from typing import Optional

import jwt
from fastapi import Depends, Header
from sqlalchemy.orm import Session

from .auth import ADMIN_PRIVILEGE, decode_access_token
from .config import Settings, get_settings
from .db import get_db
from .exceptions import ForbiddenError, UnauthorizedError
from .models import User
from .services.actions_service import ActionsService
from .services.auth_service import AuthService
from .services.store import store_operation
from .utils.avatar_storage import AvatarStorage


def get_avatar_storage(settings: Settings = Depends(get_settings)) -> AvatarStorage:
    return AvatarStorage(settings.UPLOADS_DIR)


def get_auth_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    avatar_storage: AvatarStorage = Depends(get_avatar_storage),
) -> AuthService:
    return AuthService(db, settings, avatar_storage)


def get_actions_service(db: Session = Depends(get_db)) -> ActionsService:
    return ActionsService(db)


def get_token_payload(
    settings: Settings = Depends(get_settings),
    authorization: Optional[str] = Header(default=None, alias="Authorization"),
) -> dict:
    if not authorization or not authorization.lower().startswith("bearer "):
        raise UnauthorizedError("Not authenticated")
    token = authorization.split(" ", 1)[1].strip()
    try:
        return decode_access_token(token, settings)
    except jwt.PyJWTError as exc:
        raise UnauthorizedError("Invalid token") from exc


def get_current_user(
    payload: dict = Depends(get_token_payload),
    db: Session = Depends(get_db),
) -> User:
    with store_operation(db):
        user = db.query(User).filter(User.username == payload["username"]).first()
    if not user:
        raise UnauthorizedError("User not found")
    return user


def require_admin(payload: dict = Depends(get_token_payload)) -> dict:
    if payload.get("privilege") != ADMIN_PRIVILEGE:
        raise ForbiddenError("Admin privilege required")
    return payload
