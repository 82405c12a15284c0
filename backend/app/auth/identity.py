# app/auth/identity.py
"""
Authenticated identity model.

An Identity is the minimal principal a verified session token resolves to.
It is handed explicitly to the operations that need "who is calling?"
instead of being read from mutable request state.

The Identity object is INTERNAL ONLY and should not be returned directly
to clients.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Identity:
    """
    Attributes:
        id: Internal user id the token was issued for.
    """

    id: int

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> Identity:
        """
        Build an identity from verified token claims.

        Prefers the ``id`` claim and falls back to ``sub``.

        Raises:
            ValueError: if neither claim holds an integer user id.
        """
        raw = claims.get("id")
        if raw is None:
            raw = claims.get("sub")
        if raw is None or isinstance(raw, bool):
            raise ValueError("Token missing user id")
        try:
            user_id = int(raw)
        except (TypeError, ValueError):
            raise ValueError("Token carries a malformed user id")
        return cls(id=user_id)

    def to_debug_dict(self) -> dict[str, Any]:
        """Safe subset for logs."""
        return {"id": self.id}
