"""
Tests for the session guard dependencies.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from fastapi.security import HTTPAuthorizationCredentials

from api.middleware.auth import AuthError, authenticate, get_current_user
from modules.auth.exceptions import UserNotFoundError
from shared.exceptions import ServiceUnavailableError
from shared.models import Principal

from tests.helpers import create_test_token, create_token_service


USER = Principal(id="test-user-123", name="Ann", email="a@x.com")


def credentials(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


@pytest.fixture
def auth():
    service = MagicMock()
    service.resolve_principal = AsyncMock(return_value=USER)
    return service


class TestAuthenticate:
    @pytest.mark.asyncio
    async def test_resolves_real_token(self, auth):
        principal = await authenticate(create_test_token(), create_token_service(), auth)

        assert principal == USER
        auth.resolve_principal.assert_awaited_once_with("test-user-123")

    @pytest.mark.asyncio
    async def test_demo_token_never_reaches_store(self, auth):
        principal = await authenticate(
            create_test_token(user_id="demo_99"), create_token_service(), auth
        )

        assert principal.is_demo is True
        auth.resolve_principal.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_token(self, auth):
        with pytest.raises(AuthError) as exc_info:
            await authenticate(None, create_token_service(), auth)
        assert exc_info.value.status_code == 401
        assert exc_info.value.detail["error"] == "MISSING_TOKEN"

    @pytest.mark.asyncio
    async def test_unknown_user(self, auth):
        auth.resolve_principal.side_effect = UserNotFoundError("test-user-123")
        with pytest.raises(AuthError) as exc_info:
            await authenticate(create_test_token(), create_token_service(), auth)
        assert exc_info.value.detail["message"] == "User not found"

    @pytest.mark.asyncio
    async def test_store_unavailable(self, auth):
        auth.resolve_principal.side_effect = ServiceUnavailableError("Database not connected")
        with pytest.raises(AuthError) as exc_info:
            await authenticate(create_test_token(), create_token_service(), auth)
        assert exc_info.value.detail["error"] == "STORE_UNAVAILABLE"


class TestGetCurrentUser:
    @pytest.mark.asyncio
    async def test_reads_bearer_credentials(self, auth):
        user = await get_current_user(
            credentials(create_test_token()), create_token_service(), auth
        )
        assert user == USER

    @pytest.mark.asyncio
    async def test_no_credentials(self, auth):
        with pytest.raises(AuthError) as exc_info:
            await get_current_user(None, create_token_service(), auth)
        assert exc_info.value.detail["error"] == "MISSING_TOKEN"
