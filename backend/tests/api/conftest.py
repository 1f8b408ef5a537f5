"""
Fixtures for API tests.

Dependencies are replaced through app.dependency_overrides so no test
talks to Supabase.
"""

import pytest
from fastapi import Depends
from unittest.mock import MagicMock

from api import app
from api.config import get_settings as get_api_settings
from api.dependencies import (
    get_allow_list,
    get_profile_repository,
    get_request_session_provider,
    get_settings_provider,
)
from api.middleware.auth import get_optional_user
from modules.app_settings import AppSettings, StaticSettingsProvider
from modules.auth import StaticAdminAllowList, TokenSessionProvider

TEST_JWT_SECRET = "test-secret-key-for-testing-only"


@pytest.fixture
def jwt_secret(monkeypatch):
    """Configure the API's JWT secret through the environment."""
    monkeypatch.setenv("PORTAL_SUPABASE_JWT_SECRET", TEST_JWT_SECRET)
    get_api_settings.cache_clear()
    return TEST_JWT_SECRET


@pytest.fixture
def settings_provider():
    return StaticSettingsProvider(AppSettings())


@pytest.fixture
def admin_ids():
    """User IDs on the admin allow-list."""
    return []


@pytest.fixture
def profile_repository():
    repository = MagicMock()
    repository.get_profile_by_id.return_value = None
    return repository


@pytest.fixture
def overrides(settings_provider, admin_ids, profile_repository):
    """Wire in-memory providers into the app for one test."""
    app.dependency_overrides[get_settings_provider] = lambda: settings_provider
    app.dependency_overrides[get_allow_list] = lambda: StaticAdminAllowList(admin_ids)
    app.dependency_overrides[get_profile_repository] = lambda: profile_repository

    def sessions(user=Depends(get_optional_user)):
        return TokenSessionProvider(user, profile_repository)

    app.dependency_overrides[get_request_session_provider] = sessions
    yield app.dependency_overrides
    app.dependency_overrides.clear()
