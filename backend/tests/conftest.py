import os

# Must be set before importing app.main (it calls require_jwt_secret() at import time)
# and app.core.database (it builds the engine at import time).
os.environ.setdefault("JWT_SECRET", "test_jwt_secret")
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.base import Base
from app.core import config as app_config
from app.core.security import hash_password

# Import models so they register with SQLAlchemy metadata.
from app.models.user import User  # noqa: F401

from app.core.database import get_db
from app.services.auth import session_claims
from app.services.tokens import JwtTokenService


@pytest.fixture(scope="session")
def db_engine():
    # In-memory SQLite for fast, isolated tests.
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        hide_parameters=True,
    )
    Base.metadata.create_all(bind=engine)
    return engine


@pytest.fixture()
def db_session(db_engine):
    # The in-memory DB persists across tests (StaticPool); reset schema per test.
    Base.metadata.drop_all(bind=db_engine)
    Base.metadata.create_all(bind=db_engine)

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(autouse=True)
def _reset_mutable_settings():
    """
    Tests sometimes tweak global settings (app_config.settings.*). Restore them
    after each test to avoid cross-test coupling.
    """
    keys = ["JWT_SECRET", "ACCESS_TOKEN_EXPIRE_MINUTES"]
    original = {k: getattr(app_config.settings, k) for k in keys}
    try:
        yield
    finally:
        for k, v in original.items():
            setattr(app_config.settings, k, v)


@pytest.fixture()
def app(db_session):
    app_config.settings.JWT_SECRET = app_config.settings.JWT_SECRET or "test_jwt_secret"

    from app.main import app as fastapi_app

    def override_get_db():
        yield db_session

    fastapi_app.dependency_overrides[get_db] = override_get_db
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture()
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def user(db_session):
    """An existing account whose password is "correctpass"."""
    u = User(
        full_name="Test User",
        email="test@example.com",
        password_hash=hash_password("correctpass"),
        profile_image_url="https://img.example.com/test.png",
    )
    db_session.add(u)
    db_session.commit()
    db_session.refresh(u)
    return u


@pytest.fixture()
def token_for():
    def _token_for(user_id: int) -> str:
        return JwtTokenService().sign(session_claims(user_id))

    return _token_for


@pytest.fixture()
def auth_headers(user, token_for):
    return {"Authorization": f"Bearer {token_for(user.id)}"}
