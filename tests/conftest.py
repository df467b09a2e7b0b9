"""
Pytest configuration and fixtures.
Provides test settings, database, client, and common test utilities.
"""

from typing import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine
from sqlmodel.pool import StaticPool

from accounts.core.config import Settings
from accounts.db.session import get_session
from accounts.main import create_app
from accounts.models.user import User, UserRole
from accounts.schemas.user import RegisterInput
from accounts.services.user_service import UserService

USER_PASSWORD = "testpassword123"
ADMIN_PASSWORD = "adminpassword123"


@pytest.fixture(name="settings")
def settings_fixture() -> Settings:
    """Settings built explicitly so the tests never depend on the environment."""
    return Settings(  # type: ignore[call-arg]
        _env_file=None,
        DATABASE_URL="sqlite://",
        JWT_SECRET="test-secret",
        JWT_MAXAGE=60,
        PORT=8000,
        DEBUG=True,
    )


@pytest.fixture(name="session")
def session_fixture() -> Generator[Session, None, None]:
    """
    Create a test database session.
    Uses an in-memory SQLite database for fast tests.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)

    with Session(engine) as session:
        yield session


@pytest.fixture(name="app")
def app_fixture(settings: Settings) -> FastAPI:
    return create_app(settings)


@pytest.fixture(name="client")
def client_fixture(app: FastAPI, session: Session) -> Generator[TestClient, None, None]:
    """
    Create a test client with dependency overrides.
    """

    def get_session_override() -> Generator[Session, None, None]:
        yield session

    app.dependency_overrides[get_session] = get_session_override

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture(name="test_user")
def test_user_fixture(session: Session) -> User:
    """
    Create a test user.
    """
    user_in = RegisterInput(
        name="Test User",
        email="test@example.com",
        password=USER_PASSWORD,
        password_confirm=USER_PASSWORD,
    )
    return UserService.create(session, user_in)


@pytest.fixture(name="test_admin")
def test_admin_fixture(session: Session) -> User:
    """
    Create a test admin user.
    """
    user_in = RegisterInput(
        name="Admin User",
        email="admin@example.com",
        password=ADMIN_PASSWORD,
        password_confirm=ADMIN_PASSWORD,
    )
    return UserService.create(session, user_in, role=UserRole.ADMIN)


def login(client: TestClient, settings: Settings, email: str, password: str) -> str:
    response = client.post(
        f"{settings.API_V1_PREFIX}/auth/login",
        json={"email": email, "password": password},
    )
    assert response.status_code == 200
    # Tests authenticate with explicit headers, not the login cookie
    client.cookies.clear()
    return response.json()["token"]


@pytest.fixture(name="user_token")
def user_token_fixture(client: TestClient, settings: Settings, test_user: User) -> str:
    """
    Get an access token for a regular user.
    """
    return login(client, settings, "test@example.com", USER_PASSWORD)


@pytest.fixture(name="admin_token")
def admin_token_fixture(client: TestClient, settings: Settings, test_admin: User) -> str:
    """
    Get an access token for an admin user.
    """
    return login(client, settings, "admin@example.com", ADMIN_PASSWORD)
