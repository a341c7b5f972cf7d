from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from typing import Optional
from datetime import datetime

from .models import ActionType


# Auth
class UserRegister(BaseModel):
    username: str = Field(..., min_length=1, max_length=64)
    password: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    surname: str = Field(..., min_length=1)
    email: EmailStr


class AuthCredentials(BaseModel):
    username: str
    password: str


class Token(BaseModel):
    jwt: str
    privilege: Optional[str] = None


class PasswordResetRequest(BaseModel):
    username: str


class PasswordResetResponse(BaseModel):
    message: str
    email: str


class InfoEdit(BaseModel):
    username: str = Field(..., min_length=1, max_length=64)
    name: str = Field(..., min_length=1)
    surname: str = Field(..., min_length=1)
    email: EmailStr


class PassChange(BaseModel):
    # omitted when the caller authenticated with a password-reset token
    current_password: Optional[str] = None
    new_password: str = Field(..., min_length=1)


class AvatarResponse(BaseModel):
    filename: str


class UserOut(BaseModel):
    username: str
    name: str
    surname: str
    email: str
    avatar: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


# Actions
class ActionRecord(BaseModel):
    type: ActionType
    component: str = Field(..., min_length=1)
    value: Optional[str] = None
    url: str = Field(..., min_length=1)


class ActionsFilter(BaseModel):
    limit: int = Field(..., ge=1, description="Pagination limit")
    search: Optional[str] = Field(None, description="Substring of the owning user's username")

    @field_validator('search')
    @classmethod
    def blank_search_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        return v


class ActionOut(BaseModel):
    id: str
    type: ActionType
    component: str
    value: Optional[str] = None
    url: str
    performed_at: datetime
    username: str
