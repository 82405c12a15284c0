# app/services/auth.py
"""
Authentication controller: register, login and profile lookup.

Every operation returns either a success value or an ``AuthFailure``; nothing
is raised to the caller. Expected outcomes (blank fields, duplicate email,
bad credentials, unknown user) are produced by the controller's own checks.
Anything a collaborator raises is converted to an ``INTERNAL`` failure at a
single point per operation.
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy.exc import DBAPIError

from app.auth.identity import Identity
from app.schemas.user import UserOut
from app.services.tokens import TokenService
from app.services.users import UserStore

logger = logging.getLogger(__name__)

MSG_FIELDS_REQUIRED = "All fields are required"
MSG_EMAIL_IN_USE = "Email already in use"
MSG_INVALID_CREDENTIALS = "Invalid Credentials"
MSG_USER_NOT_FOUND = "User not found"

MSG_REGISTER_FAILED = "Error registering user"
MSG_LOGIN_FAILED = "Error logging in user"
MSG_PROFILE_FAILED = "Error fetching user profile"


class AuthErrorKind(str, enum.Enum):
    VALIDATION = "VALIDATION_ERROR"
    CONFLICT = "CONFLICT"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    NOT_FOUND = "NOT_FOUND"
    INTERNAL = "INTERNAL_ERROR"


_STATUS_BY_KIND: dict[AuthErrorKind, int] = {
    AuthErrorKind.VALIDATION: 400,
    AuthErrorKind.CONFLICT: 400,
    AuthErrorKind.INVALID_CREDENTIALS: 400,
    AuthErrorKind.NOT_FOUND: 404,
    AuthErrorKind.INTERNAL: 500,
}


@dataclass(frozen=True)
class AuthFailure:
    kind: AuthErrorKind
    message: str
    # Low-level diagnostic text; only ever set for INTERNAL.
    error: str | None = None

    @property
    def status_code(self) -> int:
        return _STATUS_BY_KIND[self.kind]

    def to_body(self) -> dict[str, str]:
        body = {"message": self.message}
        if self.kind is AuthErrorKind.INTERNAL and self.error:
            body["error"] = self.error
        return body


@dataclass(frozen=True)
class AuthSession:
    user: UserOut
    token: str

    @property
    def id(self) -> int:
        return self.user.id

    def to_body(self) -> dict[str, Any]:
        return {"id": self.id, "user": self.user, "token": self.token}


def _is_blank(value: str | None) -> bool:
    return value is None or not str(value).strip()


def _diagnostic(exc: Exception) -> str:
    # DBAPIError text embeds the SQL statement; only the driver message goes to clients.
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return str(exc.orig)
    return str(exc)


def session_claims(user_id: int) -> dict[str, Any]:
    return {"sub": str(user_id), "id": user_id}


class AuthController:
    def __init__(self, users: UserStore, tokens: TokenService):
        self.users = users
        self.tokens = tokens

    def _issue(self, user: Any) -> AuthSession:
        summary = UserOut.model_validate(user)
        token = self.tokens.sign(session_claims(summary.id))
        return AuthSession(user=summary, token=token)

    def register(
        self,
        full_name: str | None,
        email: str | None,
        password: str | None,
        profile_image_url: str | None = None,
    ) -> AuthSession | AuthFailure:
        if _is_blank(full_name) or _is_blank(email) or _is_blank(password):
            return AuthFailure(AuthErrorKind.VALIDATION, MSG_FIELDS_REQUIRED)

        try:
            if self.users.find_by_email(email) is not None:
                logger.info("Registration rejected, email already in use: email=%s", email)
                return AuthFailure(AuthErrorKind.CONFLICT, MSG_EMAIL_IN_USE)

            user = self.users.create(
                full_name=full_name,
                email=email,
                password=password,
                profile_image_url=profile_image_url,
            )
            session = self._issue(user)
        except Exception as exc:
            logger.exception("Registration failed: email=%s", email)
            return AuthFailure(AuthErrorKind.INTERNAL, MSG_REGISTER_FAILED, _diagnostic(exc))

        logger.info("Registered user: id=%s", session.id)
        return session

    def login(self, email: str | None, password: str | None) -> AuthSession | AuthFailure:
        if _is_blank(email) or _is_blank(password):
            return AuthFailure(AuthErrorKind.VALIDATION, MSG_FIELDS_REQUIRED)

        try:
            user = self.users.find_by_email(email)
            # Unknown email and wrong password must be indistinguishable to the caller.
            if user is None or not self.users.compare_password(user, password):
                logger.info("Login rejected: email=%s", email)
                return AuthFailure(AuthErrorKind.INVALID_CREDENTIALS, MSG_INVALID_CREDENTIALS)

            session = self._issue(user)
        except Exception as exc:
            logger.exception("Login failed: email=%s", email)
            return AuthFailure(AuthErrorKind.INTERNAL, MSG_LOGIN_FAILED, _diagnostic(exc))

        logger.info("Logged in user: id=%s", session.id)
        return session

    def get_profile(self, identity: Identity) -> UserOut | AuthFailure:
        try:
            user = self.users.find_by_id(identity.id)
            if user is None:
                return AuthFailure(AuthErrorKind.NOT_FOUND, MSG_USER_NOT_FOUND)
            return UserOut.model_validate(user)
        except Exception as exc:
            logger.exception("Profile lookup failed: %s", identity.to_debug_dict())
            return AuthFailure(AuthErrorKind.INTERNAL, MSG_PROFILE_FAILED, _diagnostic(exc))
