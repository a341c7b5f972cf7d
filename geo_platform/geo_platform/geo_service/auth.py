from passlib.context import CryptContext
from datetime import datetime, timedelta, timezone
from typing import Optional
import jwt

from .config import Settings

ALGORITHM = "HS256"
ADMIN_PRIVILEGE = "admin"

# Use pbkdf2_sha256 to avoid external bcrypt backend issues in some environments
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # not a hash this context understands
        return False


def create_access_token(username: str, settings: Settings, privilege: Optional[str] = None) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "username": username,
        "iat": now,
        "exp": now + timedelta(seconds=settings.JWT_EXPIRATION),
    }
    if privilege:
        payload["privilege"] = privilege
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=ALGORITHM)


def decode_access_token(token: str, settings: Settings) -> dict:
    """
    Verify signature and expiry of a session token.

    Raises:
        jwt.PyJWTError: If the token is malformed, tampered with or expired
    """
    payload = jwt.decode(
        token,
        settings.JWT_SECRET,
        algorithms=[ALGORITHM],
        options={"require": ["exp", "username"]},
    )
    return payload
