# apps/api/app/core/errors.py
"""Error taxonomy shared by services and routes.

Every error carries an HTTP status and a machine-readable ``tag`` that is
rendered as ``{"status": tag, "error": message}`` by the handler in
``app.main``. Services raise these before touching the document, so a
rejected request never leaves a partial write behind.
"""
from __future__ import annotations

from fastapi import HTTPException, status


class AppError(HTTPException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_tag = "internal_error"

    def __init__(self, message: str, tag: str | None = None):
        self.tag = tag or self.default_tag
        self.message = message
        super().__init__(status_code=self.status_code, detail=message)

    def to_body(self) -> dict:
        return {"status": self.tag, "error": self.message}


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_tag = "not_found"


class UnauthorizedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_tag = "unauthorized"


class UnverifiedError(UnauthorizedError):
    default_tag = "unverified"


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_tag = "forbidden"


class ConflictError(AppError):
    """Uniqueness or staffing-integrity violation; ``tag`` is the reason code."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_tag = "conflict"

    def __init__(self, reason: str, message: str | None = None):
        super().__init__(message or reason.replace("_", " "), tag=reason)

    @property
    def reason(self) -> str:
        return self.tag


class InternalError(AppError):
    pass
