# app/core/security.py
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

from jose import jwt, JWTError
from passlib.context import CryptContext

from app.core.config import settings

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")

ACCESS_PURPOSE = "access"


# -------------------------
# Password hashing
# -------------------------
def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    if not password_hash:
        return False
    return pwd_context.verify(password, password_hash)


# -------------------------
# JWT helpers
# -------------------------
def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def _require_jwt_secret() -> None:
    if not settings.JWT_SECRET or not settings.JWT_SECRET.strip():
        raise RuntimeError("JWT_SECRET must be set (auth is required).")


def encode_token(
    claims: dict[str, Any],
    *,
    purpose: str = ACCESS_PURPOSE,
    expires_minutes: int | None = None,
) -> str:
    """
    Sign `claims` into a JWT. `purpose`, `iat` and `exp` are always set here
    and override anything the caller passed under the same names.
    """
    _require_jwt_secret()

    now = _now_utc()
    minutes = settings.ACCESS_TOKEN_EXPIRE_MINUTES if expires_minutes is None else expires_minutes
    exp = now + timedelta(minutes=minutes)

    payload = dict(claims)
    payload.update(
        {
            "purpose": purpose,
            "iat": int(now.timestamp()),
            "exp": int(exp.timestamp()),
        }
    )
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> dict[str, Any]:
    _require_jwt_secret()
    # Let callers decide how to handle JWTError
    return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])


def verify_token_purpose(token: str, expected_purpose: str) -> dict[str, Any]:
    try:
        payload = decode_token(token)
    except JWTError:
        raise ValueError("Invalid or expired token")

    if payload.get("purpose") != expected_purpose:
        raise ValueError("Invalid token purpose")

    return payload
