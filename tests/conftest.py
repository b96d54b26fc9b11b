"""Pytest configuration and fixtures."""

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from mockflow.database import Base, get_db
from mockflow.main import app
from mockflow.models.user import User
from mockflow.services.access_control import Requester


class AuthHeaders(dict):
    """Dict subclass that also stores the user's id and email."""

    def __init__(self, *args, user_id: int | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace("/mockflow", "/mockflow_test")
else:
    # Running locally - use SQLite
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

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


@pytest.fixture
def make_user(client):
    """Factory that registers a user and returns auth headers for them."""

    def _make_user(email: str, name: str | None = None) -> AuthHeaders:
        response = client.post(
            "/api/v1/auth/register",
            json={"email": email, "password": "testpass123", "name": name},
        )
        assert response.status_code == 201
        data = response.json()
        return AuthHeaders(
            {"Authorization": f"Bearer {data['access_token']}"},
            user_id=data["user"]["id"],
            email=data["user"]["email"],
        )

    return _make_user


@pytest.fixture
def auth_headers(make_user):
    """Create the primary test user and return auth headers with user info."""
    return make_user("test@example.com", "Test User")


@pytest.fixture
def other_headers(make_user):
    """Create a second user, used as a share grantee."""
    return make_user("other@example.com", "Other User")


@pytest.fixture
def create_mockup(client):
    """Factory that creates a mockup through the API and returns its JSON."""

    def _create_mockup(headers: dict, **overrides) -> dict:
        payload = {
            "name": "Demo",
            "type": "chat",
            "platform": "whatsapp",
            "data": {"messages": [{"id": "1", "senderId": "contact", "content": "Hello!"}]},
        }
        payload.update(overrides)
        response = client.post("/api/v1/mockups", headers=headers, json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _create_mockup


@pytest.fixture
def owner(db):
    """A user created directly in the database, for service-level tests."""
    user = User(email="owner@example.com", name="Owner", password_hash="fake")
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def owner_requester(owner):
    """Requester acting as the ``owner`` fixture."""
    return Requester(id=owner.id, email=owner.email, name=owner.name)
