"""
Auth Router - registration, login and profile endpoints.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, File, Query, Response, UploadFile, status

from ..deps import get_auth_service, get_avatar_storage, get_current_user, require_admin
from ..exceptions import InvalidUploadError
from ..models import User
from ..schemas import (
    AuthCredentials,
    AvatarResponse,
    InfoEdit,
    PassChange,
    PasswordResetRequest,
    PasswordResetResponse,
    Token,
    UserOut,
    UserRegister,
)
from ..services.auth_service import AuthService
from ..utils.avatar_storage import AvatarStorage, allowed_file

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(candidate: UserRegister, service: AuthService = Depends(get_auth_service)):
    service.register(candidate)
    return Response(status_code=status.HTTP_201_CREATED)


@router.post("/login", response_model=Token, response_model_exclude_none=True)
def login(credentials: AuthCredentials, service: AuthService = Depends(get_auth_service)):
    return service.login(credentials)


@router.post("/password-reset", response_model=PasswordResetResponse)
def password_reset(payload: PasswordResetRequest, service: AuthService = Depends(get_auth_service)):
    email, token = service.request_password_reset_token(payload.username)

    # Email dispatch is not wired; log the token instead (simulate email)
    logger.info("[DEV] Password reset token for %s <%s>: %s", payload.username, email, token)

    return PasswordResetResponse(message="A password reset link has been sent.", email=email)


@router.get("/users", response_model=List[UserOut])
def search_users(
    search: str = Query("", description="Case-insensitive substring of the username"),
    _admin: dict = Depends(require_admin),
    service: AuthService = Depends(get_auth_service),
):
    return service.search_users(search)


@router.get("/me", response_model=UserOut)
def me(user: User = Depends(get_current_user)):
    return user


@router.patch("/info", response_model=Token, response_model_exclude_none=True)
def edit_info(
    info: InfoEdit,
    user: User = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
):
    return service.edit_info(user, info)


@router.patch("/password", status_code=status.HTTP_204_NO_CONTENT)
def change_password(
    pass_change: PassChange,
    user: User = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
):
    service.change_password(user, pass_change)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/avatar", response_model=AvatarResponse, status_code=status.HTTP_201_CREATED)
def upload_avatar(
    avatar: UploadFile = File(...),
    user: User = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
    storage: AvatarStorage = Depends(get_avatar_storage),
):
    if not avatar.filename or not allowed_file(avatar.filename):
        raise InvalidUploadError("Avatar must be a png, jpg, jpeg, gif or webp image.")

    filename = storage.save(avatar.filename, avatar.file)
    return AvatarResponse(filename=service.upload_avatar(user, filename))


@router.delete("/avatar", status_code=status.HTTP_204_NO_CONTENT)
def remove_avatar(
    user: User = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
):
    service.remove_avatar(user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
