"""
Service error taxonomy and its HTTP rendering.
"""
import logging
from http import HTTPStatus
from typing import Optional

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    code = "app_error"
    status = HTTPStatus.BAD_REQUEST

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail or self.status.phrase
        super().__init__(self.detail)

    def to_dict(self) -> dict:
        return {"detail": self.detail, "error": self.code}


class ConflictError(AppError):
    code = "conflict"
    status = HTTPStatus.CONFLICT


class UnauthorizedError(AppError):
    code = "unauthorized"
    status = HTTPStatus.UNAUTHORIZED


class ForbiddenError(AppError):
    code = "forbidden"
    status = HTTPStatus.FORBIDDEN


class NotFoundError(AppError):
    code = "not_found"
    status = HTTPStatus.NOT_FOUND


class InvalidUploadError(AppError):
    code = "invalid_upload"
    status = HTTPStatus.UNPROCESSABLE_ENTITY


class StorageFailure(AppError):
    """Backing store or file system failed; never user-correctable."""

    code = "storage_failure"
    status = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail or "Internal server error")


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if isinstance(exc, StorageFailure):
        logger.error(
            "Storage failure on %s %s: %r",
            request.method, request.url.path, exc.__cause__ or exc
        )
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthorizedError) else None
    return JSONResponse(status_code=exc.status, content=exc.to_dict(), headers=headers)
