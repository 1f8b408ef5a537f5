"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest
from datetime import datetime, timezone, timedelta
from jose import jwt

from api.config import get_settings as get_api_settings
from api.dependencies import reset_container
from modules.app_settings.service import reset_settings_provider
from modules.auth.admin import reset_admin_allow_list
from modules.auth.service import reset_session_provider
from modules.i18n import reset_language_preference
from modules.routing import reset_route_dispatcher
from shared.config import get_settings
from shared.database import reset_client_cache


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"


def create_test_token(
    user_id: str = "test-user-123",
    email: str = "test@example.com",
    expired: bool = False,
    email_verified: bool = True,
    secret: str = TEST_JWT_SECRET,
    null_confirmation: bool = False,
) -> str:
    """
    Create a Supabase-style JWT for authentication tests.

    Args:
        user_id: User ID to include in the token
        email: Email to include in the token
        expired: If True, creates an expired token
        email_verified: Whether the email should be marked as confirmed
        secret: Signing secret
        null_confirmation: If True, sends `email_confirmed_at` as null
            instead of leaving the claim out of an unverified token

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)

    payload = {
        "sub": user_id,
        "email": email,
        "aud": "authenticated",
        "role": "authenticated",
        "exp": int(exp.timestamp()),
        "iat": int(now.timestamp()),
    }
    if email_verified:
        payload["email_confirmed_at"] = now.isoformat()
    elif null_confirmation:
        payload["email_confirmed_at"] = None
    return jwt.encode(payload, secret, algorithm="HS256")


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset cached settings and module singletons around each test."""

    def reset():
        get_settings.cache_clear()
        get_api_settings.cache_clear()
        reset_client_cache()
        reset_language_preference()
        reset_session_provider()
        reset_settings_provider()
        reset_admin_allow_list()
        reset_route_dispatcher()
        reset_container()

    reset()
    yield
    reset()


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


@pytest.fixture
def make_token():
    """Factory for test tokens with custom claims."""
    return create_test_token
