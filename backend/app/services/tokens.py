# app/services/tokens.py
from __future__ import annotations

from typing import Any, Protocol

from app.core.security import ACCESS_PURPOSE, encode_token, verify_token_purpose


class TokenService(Protocol):
    def sign(self, claims: dict[str, Any]) -> str: ...


class JwtTokenService:
    """
    Stateless session tokens. Nothing is stored server-side; a token stays
    valid until its `exp`.
    """

    def __init__(self, expires_minutes: int | None = None):
        self.expires_minutes = expires_minutes

    def sign(self, claims: dict[str, Any]) -> str:
        return encode_token(claims, purpose=ACCESS_PURPOSE, expires_minutes=self.expires_minutes)

    def verify(self, token: str) -> dict[str, Any]:
        """Raises ValueError for a bad signature, an expired token or a non-access token."""
        return verify_token_purpose(token, expected_purpose=ACCESS_PURPOSE)
