"""Pytest configuration and fixtures"""
import os
from typing import Generator

# Settings are read at import time; configure before importing the app
os.environ.setdefault("JWT_SECRET", "test-access-secret")
os.environ.setdefault("JWT_REFRESH_SECRET", "test-refresh-secret")
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from eternal_admin.api.deps import get_token_codec
from eternal_admin.database import Base, get_db
from eternal_admin.main import app
from eternal_admin.records import AdminRecord
from eternal_admin.repositories import AdminRepository, RefreshTokenRepository
from eternal_admin.services import SessionManager
from eternal_admin.utils.jwt_utils import TokenCodec

TEST_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

SUPER_ADMIN_EMAIL = "admin@example.com"
SUPER_ADMIN_PASSWORD = "admin123"


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Create a fresh database for each test"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db: Session) -> Generator[TestClient, None, None]:
    """Create test client with database session override"""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def codec() -> TokenCodec:
    """The codec the application signs with"""
    return get_token_codec()


@pytest.fixture
def manager(db: Session, codec: TokenCodec) -> SessionManager:
    return SessionManager(
        admins=AdminRepository(db),
        ledger=RefreshTokenRepository(db),
        codec=codec,
        bcrypt_rounds=4,
    )


@pytest.fixture
def super_admin(manager: SessionManager) -> AdminRecord:
    """The seeded SUPER_ADMIN account"""
    return manager.create_admin(
        email=SUPER_ADMIN_EMAIL,
        password=SUPER_ADMIN_PASSWORD,
        name="Administrator",
        role="SUPER_ADMIN",
    ).value


@pytest.fixture
def editor(manager: SessionManager) -> AdminRecord:
    return manager.create_admin(
        email="editor@example.com",
        password="editor-pass",
        name="Editor",
        role="EDITOR",
    ).value


@pytest.fixture
def super_admin_tokens(client: TestClient, super_admin: AdminRecord) -> dict:
    """accessToken / refreshToken pair from a real login"""
    response = client.post(
        "/api/auth/login",
        json={"email": SUPER_ADMIN_EMAIL, "password": SUPER_ADMIN_PASSWORD},
    )
    assert response.status_code == 200
    return response.json()["data"]


@pytest.fixture
def super_admin_headers(super_admin_tokens: dict) -> dict:
    return {"Authorization": f"Bearer {super_admin_tokens['accessToken']}"}
