"""
Shared test fixtures.

This module provides common test infrastructure used across all test modules.
Helpers live in tests/helpers.py.
"""

import pytest

# Import the app package first so route modules resolve their api imports
import api  # noqa: F401
from api.dependencies import reset_container
from modules.auth.service import AuthService
from shared.config import get_settings

from tests.helpers import (
    InMemoryCredentialRepository,
    available_store,
    create_test_settings,
    create_test_token,
    create_token_service,
    unavailable_store,
)


@pytest.fixture(autouse=True)
def reset_services():
    """Reset the service container and cached settings around each test."""
    reset_container()
    get_settings.cache_clear()
    yield
    reset_container()
    get_settings.cache_clear()


@pytest.fixture
def settings():
    return create_test_settings()


@pytest.fixture
def tokens():
    return create_token_service()


@pytest.fixture
def credential_repo():
    return InMemoryCredentialRepository()


@pytest.fixture
def auth_service(credential_repo, tokens, settings):
    """Auth service over an in-memory store that is available."""
    return AuthService(
        repository=credential_repo,
        tokens=tokens,
        store=available_store(),
        settings=settings,
    )


@pytest.fixture
def demo_auth_service(credential_repo, tokens, settings):
    """Auth service whose store is unavailable (demo mode)."""
    return AuthService(
        repository=credential_repo,
        tokens=tokens,
        store=unavailable_store(),
        settings=settings,
    )


@pytest.fixture
def test_user_id() -> str:
    """Provide a consistent test user ID."""
    return "test-user-123"


@pytest.fixture
def auth_token(test_user_id: str) -> str:
    """Create a valid auth token for testing."""
    return create_test_token(user_id=test_user_id)


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers with a valid token."""
    return {"Authorization": f"Bearer {auth_token}"}
