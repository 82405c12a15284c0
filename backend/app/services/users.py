# app/services/users.py
"""
User store.

Responsibilities:
- Lookup by email or id
- Creating users (the plaintext password is hashed here, never stored)
- Checking a candidate password against the stored hash

The authentication controller only talks to the ``UserStore`` protocol, so
tests can swap in an in-memory double.
"""
from __future__ import annotations

import logging
from typing import Protocol

from sqlalchemy.orm import Session

from app.core.security import hash_password, verify_password
from app.models.user import User

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class UserStore(Protocol):
    def find_by_email(self, email: str) -> User | None: ...

    def find_by_id(self, user_id: int) -> User | None: ...

    def create(
        self,
        *,
        full_name: str,
        email: str,
        password: str,
        profile_image_url: str | None = None,
    ) -> User: ...

    def compare_password(self, user: User, candidate: str) -> bool: ...


class SqlUserStore:
    """SQLAlchemy-backed ``UserStore``. The unique index on users.email is the final guard."""

    def __init__(self, db: Session):
        self.db = db

    def find_by_email(self, email: str) -> User | None:
        return self.db.query(User).filter(User.email == normalize_email(email)).first()

    def find_by_id(self, user_id: int) -> User | None:
        return self.db.get(User, user_id)

    def create(
        self,
        *,
        full_name: str,
        email: str,
        password: str,
        profile_image_url: str | None = None,
    ) -> User:
        user = User(
            full_name=full_name.strip(),
            email=normalize_email(email),
            password_hash=hash_password(password),
            profile_image_url=(profile_image_url or "").strip() or None,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(user)

        logger.info("Created user: id=%s, email=%s", user.id, user.email)
        return user

    def compare_password(self, user: User, candidate: str) -> bool:
        return verify_password(candidate, user.password_hash)
