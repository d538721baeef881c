# apps/api/app/core/security.py
# Parola hash'leme (passlib) ve JWT access/refresh token üretimi (python-jose).
# bcrypt_sha256 uzun şifreleri önce SHA256 ile önişler; "bcrypt" ve
# "pbkdf2_sha256" eski/seed kayıtları doğrulamak için listede duruyor.

from __future__ import annotations

from datetime import timedelta
from typing import Any
from uuid import uuid4

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from app.core.config import settings
from app.core.time import utcnow

pwd_context = CryptContext(
    schemes=["bcrypt_sha256", "bcrypt", "pbkdf2_sha256"],
    deprecated="auto",
)

# Aşırı uzun girdiler için makul bir üst sınır
MAX_PASSWORD_LEN = 4096


class PasswordCheckError(Exception):
    """The stored hash could not be processed (distinct from a mismatch)."""


class TokenExpired(Exception):
    pass


class TokenInvalid(Exception):
    pass


def get_password_hash(password: str) -> str:
    if not isinstance(password, str):
        password = str(password or "")
    if len(password) > MAX_PASSWORD_LEN:
        password = password[:MAX_PASSWORD_LEN]
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    False on mismatch; PasswordCheckError when the hash is missing or its
    scheme is unknown, so callers can answer 500 instead of 401.
    """
    if not hashed_password:
        raise PasswordCheckError("no password hash stored")
    try:
        return pwd_context.verify(plain_password or "", hashed_password)
    except (ValueError, TypeError) as e:
        raise PasswordCheckError(str(e)) from e


def _sign(claims: dict[str, Any], key: str) -> str:
    return jwt.encode({**claims, "jti": uuid4().hex}, key, algorithm=settings.JWT_ALGO)


def create_access_token(user_id: Any) -> str:
    exp = utcnow() + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    return _sign({"id": user_id, "exp": exp}, settings.JWT_SECRET)


def create_refresh_token(user_id: Any) -> str:
    # Süresiz: sunucu tarafında yalnızca imza ve kayıtlı token eşleşmesi kontrol edilir
    return _sign({"id": user_id}, settings.refresh_secret)


def _decode(token: str, key: str) -> dict[str, Any]:
    try:
        return jwt.decode(token, key, algorithms=[settings.JWT_ALGO])
    except ExpiredSignatureError as e:
        raise TokenExpired(str(e)) from e
    except JWTError as e:
        raise TokenInvalid(str(e)) from e


def decode_access_token(token: str) -> dict[str, Any]:
    return _decode(token, settings.JWT_SECRET)


def decode_refresh_token(token: str) -> dict[str, Any]:
    return _decode(token, settings.refresh_secret)
