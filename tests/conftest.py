"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
Tests run against in-memory storage with rate limiting off; individual tests
turn features back on through the ``configure`` fixture.
"""

import os
from datetime import datetime, timedelta, timezone

import jwt  # PyJWT
import pytest

# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"

os.environ["JWT_SECRET"] = TEST_JWT_SECRET
os.environ["ENVIRONMENT"] = "test"
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["AI_PROVIDER"] = "gemini"
os.environ["GOOGLE_API_KEY"] = "test-google-key"

from api.dependencies import reset_container  # noqa: E402
from shared.config import get_settings  # noqa: E402


def create_test_token(
    user_id: str = "test-user-123",
    email: str = "test@example.com",
    expired: bool = False,
    token_type: str = "session",
    secret: str = TEST_JWT_SECRET,
) -> str:
    """
    Create a test session token.

    Args:
        user_id: User ID to include in the token
        email: Email to include in the token
        expired: If True, creates an expired token
        token_type: Value of the ``typ`` claim
        secret: Signing secret

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)

    payload = {
        "sub": user_id,
        "email": email,
        "typ": token_type,
        "exp": int(exp.timestamp()),
        "iat": int((now - timedelta(hours=2)).timestamp()) if expired else int(now.timestamp()),
    }
    return jwt.encode(payload, secret, algorithm="HS256")


@pytest.fixture(autouse=True)
def reset_services():
    """Fresh settings and service container before and after each test."""
    get_settings.cache_clear()
    reset_container()
    yield
    get_settings.cache_clear()
    reset_container()


@pytest.fixture
def configure(monkeypatch):
    """
    Override settings through environment variables for one test.

    Usage:
        def test_something(configure):
            configure(ENVIRONMENT="development")
    """

    def _configure(**env: str) -> None:
        for key, value in env.items():
            monkeypatch.setenv(key, value)
        get_settings.cache_clear()
        reset_container()

    return _configure


@pytest.fixture
def test_user_id() -> str:
    """Provide a consistent test user ID."""
    return "test-user-123"


@pytest.fixture
def test_user_email() -> str:
    """Provide a consistent test user email."""
    return "test@example.com"


@pytest.fixture
def auth_token(test_user_id: str, test_user_email: str) -> str:
    """Create a valid auth token for testing."""
    return create_test_token(user_id=test_user_id, email=test_user_email)


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers with a valid token."""
    return {"Authorization": f"Bearer {auth_token}"}
