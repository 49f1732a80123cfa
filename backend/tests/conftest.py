"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules:
a controllable clock, test settings, a service container wired with cheap
password hashing and a stub AI assistant, and an HTTP client with a
registered user.
"""

import pytest
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

from argon2 import PasswordHasher as Argon2Hasher
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import ServiceContainer
from modules.auth.passwords import PasswordHasher
from shared.config import Settings


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"

TEST_EMAIL = "user@example.com"
TEST_PASSWORD = "secret123"


class FakeClock:
    """
    Manually advanced clock.

    ``time()`` feeds the rate limiters (epoch seconds); ``now()`` feeds
    token and service code (aware datetime). Both read the same instant.
    """

    def __init__(self, start: datetime = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)):
        self.current = start

    def now(self) -> datetime:
        return self.current

    def time(self) -> float:
        return self.current.timestamp()

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from any local .env file."""
    return Settings(
        _env_file=None,
        jwt_secret=TEST_JWT_SECRET,
        anthropic_api_key="",
        debug=False,
        log_level="WARNING",
    )


@pytest.fixture
def password_hasher() -> PasswordHasher:
    """Argon2 with minimal cost parameters so tests stay fast."""
    return PasswordHasher(Argon2Hasher(time_cost=1, memory_cost=8, parallelism=1))


@pytest.fixture
def assistant() -> AsyncMock:
    """Stub finance assistant; no upstream model calls in tests."""
    mock = AsyncMock()
    mock.answer.return_value = "You spent 42.00 on food this month."
    mock.suggest_questions.return_value = ["What is my current balance?"]
    return mock


@pytest.fixture
def container(settings, clock, password_hasher, assistant) -> ServiceContainer:
    return ServiceContainer(
        settings=settings,
        clock=clock.time,
        now=clock.now,
        password_hasher=password_hasher,
        assistant=assistant,
    )


@pytest.fixture
def app(container):
    return create_app(container)


@pytest.fixture
def client(app):
    """Test client with the app's startup (category seeding) already run."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def registered_user(client) -> dict:
    """Register the default test user and return the response body."""
    response = client.post(
        "/api/auth/register",
        json={"email": TEST_EMAIL, "password": TEST_PASSWORD, "name": "Test User"},
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def auth_headers(registered_user) -> dict[str, str]:
    """Authorization headers for the registered test user."""
    return {"Authorization": f"Bearer {registered_user['token']}"}


@pytest.fixture
def other_auth_headers(client) -> dict[str, str]:
    """Authorization headers for a second, unrelated user."""
    response = client.post(
        "/api/auth/register",
        json={"email": "other@example.com", "password": "other-pass", "name": "Other"},
    )
    assert response.status_code == 201
    return {"Authorization": f"Bearer {response.json()['token']}"}
