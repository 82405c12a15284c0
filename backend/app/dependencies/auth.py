# app/dependencies/auth.py
from __future__ import annotations

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.auth.identity import Identity
from app.core.database import get_db
from app.services.auth import AuthController
from app.services.tokens import JwtTokenService
from app.services.users import SqlUserStore

bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str = "Could not validate credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_token_service() -> JwtTokenService:
    return JwtTokenService()


def get_auth_controller(
    db: Session = Depends(get_db),
    tokens: JwtTokenService = Depends(get_token_service),
) -> AuthController:
    return AuthController(users=SqlUserStore(db), tokens=tokens)


def get_current_identity(
    creds: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    tokens: JwtTokenService = Depends(get_token_service),
) -> Identity:
    """
    Validates:
      - Authorization: Bearer <token>
      - token signature + exp + purpose
    Returns:
      - Identity carrying the user id the token was issued for

    Whether that user still exists is the caller's concern.
    """
    if not creds or creds.scheme.lower() != "bearer":
        raise _unauthorized("Missing Authorization header")

    try:
        claims = tokens.verify(creds.credentials)
        return Identity.from_claims(claims)
    except ValueError:
        raise _unauthorized("Invalid or expired token")
