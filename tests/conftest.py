"""Pytest configuration and fixtures."""

import os

import pytest
from fastapi.testclient import TestClient

from studio_api.config import Settings
from studio_api.database import Base, Database, get_db
from studio_api.main import create_app

TEST_USER = {"email": "test@example.com", "password": "Testpass1!", "name": "Test User"}


class RegisteredUser(dict):
    """Registration payload that also stores the created user's id."""

    def __init__(self, *args, user_id: int | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id


# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace("/studio_site", "/studio_site_test")
else:
    # Running locally - use SQLite
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"


def build_settings(**overrides) -> Settings:
    """Settings for a test app; keyword arguments override the defaults."""
    values = {
        "database_url": SQLALCHEMY_DATABASE_URL,
        "environment": "test",
        "session_secret": "test-session-secret-with-enough-length",
        "static_dir": None,
        "frontend_origins": [],
        "rate_limit_storage_uri": "memory://",
        "api_rate_limit": "100 per 15 minutes",
        "auth_rate_limit": "5 per 15 minutes",
        "trust_proxy_headers": False,
        "run_migrations_on_startup": False,
    }
    values.update(overrides)
    return Settings(**values)


test_settings = build_settings()
database = Database(test_settings)
app = create_app(test_settings, database)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        # For PostgreSQL, create the test database
        from sqlalchemy_utils import create_database, database_exists

        # Create test database if it doesn't exist
        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    database.create_all()
    yield
    # Don't drop database - just leave it for next run (each test cleans up after itself)


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = database.session()

    yield session

    # Clean up all data and rate-limit counters after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()
    app.state.rate_limiter.reset()


@pytest.fixture
def test_database():
    """The Database handle the test app was built with."""
    return database


@pytest.fixture
def settings():
    return test_settings


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override. Cookies persist across requests."""

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
def auth_user(client):
    """Register a user; the client fixture carries their session cookie afterwards."""
    response = client.post("/api/auth/register", json=TEST_USER)
    assert response.status_code == 201
    user_id = response.json()["user"]["id"]

    return RegisteredUser(TEST_USER, user_id=user_id)


@pytest.fixture
def make_client():
    """Build a client for an app created with overridden settings, sharing the test database."""
    opened = []

    def factory(raise_server_exceptions: bool = True, **overrides):
        custom_app = create_app(build_settings(**overrides), database)
        test_client = TestClient(custom_app, raise_server_exceptions=raise_server_exceptions)
        test_client.__enter__()
        opened.append(test_client)
        return test_client

    yield factory

    for test_client in opened:
        test_client.__exit__(None, None, None)


@pytest.fixture
def settings_factory():
    """Build standalone Settings with test defaults."""
    return build_settings
