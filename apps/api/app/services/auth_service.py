# apps/api/app/services/auth_service.py
# Login / refresh / token doğrulama. Kullanıcı başına tek oturum: her login
# accessToken + refreshToken'ı kullanıcı kaydının üzerine yazar.
from __future__ import annotations

from typing import Any

from app.core.errors import (
    ForbiddenError,
    InternalError,
    NotFoundError,
    UnauthorizedError,
    UnverifiedError,
)
from app.core.logging import get_logger
from app.core.security import (
    PasswordCheckError,
    TokenExpired,
    TokenInvalid,
    create_access_token,
    create_refresh_token,
    decode_access_token,
    decode_refresh_token,
    verify_password,
)
from app.db.document_store import DocumentStore

logger = get_logger(__name__)

SENSITIVE_FIELDS = ("password", "accessToken", "refreshToken")


def sanitize_user(user: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in user.items() if k not in SENSITIVE_FIELDS}


def login(store: DocumentStore, email: str, password: str) -> dict[str, Any]:
    with store.with_write_lock() as db:
        user = db.find("users", email=email)
        if not user:
            raise NotFoundError("user does not exist", tag="user_not_found")
        if not user.get("verified"):
            raise UnverifiedError("user is not verified")
        try:
            matched = verify_password(password, user.get("password") or "")
        except PasswordCheckError as e:
            logger.error("auth.login.verify_error user_id=%s error=%s", user.get("id"), e)
            raise InternalError("password verification failed", tag="password_verify_error") from e
        if not matched:
            raise UnauthorizedError("incorrect password", tag="password_mismatch")

        access_token = create_access_token(user["id"])
        refresh_token = create_refresh_token(user["id"])
        db.update("users", user["id"], {"accessToken": access_token, "refreshToken": refresh_token})
        logger.info("auth.login user_id=%s", user["id"])
        return {"user": sanitize_user(user), "accessToken": access_token, "refreshToken": refresh_token}


def refresh(store: DocumentStore, refresh_token: str | None) -> dict[str, str]:
    if not refresh_token:
        raise ForbiddenError("refresh token not provided", tag="token_missing")
    with store.with_write_lock() as db:
        user = db.find("users", refreshToken=refresh_token)
        if not user:
            raise ForbiddenError("refresh token not recognised", tag="token_unknown")
        try:
            claims = decode_refresh_token(refresh_token)
        except (TokenExpired, TokenInvalid) as e:
            raise ForbiddenError("refresh token is invalid", tag="token_invalid") from e
        if claims.get("id") != user.get("id"):
            raise ForbiddenError("refresh token is invalid", tag="token_invalid")

        access_token = create_access_token(user["id"])
        db.update("users", user["id"], {"accessToken": access_token})
        logger.info("auth.refresh user_id=%s", user["id"])
        return {"accessToken": access_token}


def authenticate(store: DocumentStore, token: str | None) -> dict[str, Any]:
    """Bearer token -> stored user record (callers must not leak its secrets)."""
    if not token:
        raise UnauthorizedError("authentication token not provided", tag="token_missing")
    try:
        claims = decode_access_token(token)
    except TokenExpired as e:
        raise ForbiddenError("authentication token expired", tag="token_expired") from e
    except TokenInvalid as e:
        raise ForbiddenError("authentication token is invalid", tag="token_invalid") from e

    with store.read() as db:
        user = db.get("users", claims.get("id"))
        if not user:
            raise ForbiddenError("user does not exist", tag="user_not_found")
        return dict(user)


def require_role(caller: dict[str, Any], *roles: str) -> None:
    if caller.get("role") not in roles:
        raise ForbiddenError(f"only {'/'.join(roles)} may perform this action")
