"""Pytest configuration and fixtures."""

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from src.database import Base, get_db
from src.main import app


class AuthHeaders(dict):
    """Dict subclass that also stores the signed-up user's id and email."""

    def __init__(self, *args, user_id: str | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


# Use test database - PostgreSQL when DATABASE_URL is set, SQLite locally
if os.getenv("DATABASE_URL", "").startswith("postgresql"):
    SQLALCHEMY_DATABASE_URL = os.environ["DATABASE_URL"].rsplit("/", 1)[0] + "/flashdeck_test"
else:
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    from src import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def sign_up(client, email: str, name: str) -> AuthHeaders:
    response = client.post(
        "/api/auth/sign-up/email",
        json={"email": email, "password": "testpass123", "name": name},
    )
    assert response.status_code == 201
    data = response.json()
    # Requests must authenticate through the headers we hand out, not the cookie jar
    client.cookies.clear()
    return AuthHeaders(
        {"Authorization": f"Bearer {data['token']}"},
        user_id=data["user"]["id"],
        email=email,
    )


@pytest.fixture
def auth_headers(client):
    """Create a user and return auth headers with user info."""
    return sign_up(client, "test@example.com", "Test User")


@pytest.fixture
def other_auth_headers(client):
    """A second, unrelated user."""
    return sign_up(client, "other@example.com", "Other User")


@pytest.fixture
def deck(client, auth_headers):
    """A deck owned by the ``auth_headers`` user."""
    response = client.post(
        "/decks", headers=auth_headers, json={"name": "Spanish", "description": "Basics"}
    )
    assert response.status_code == 201
    return response.json()
