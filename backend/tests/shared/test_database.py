"""Tests for shared/database.py."""

import os

import httpx
import pytest
from unittest.mock import patch, MagicMock
from postgrest.exceptions import APIError

from shared.database import (
    StoreHandle,
    get_supabase_client,
    reset_client_cache,
)
from shared.exceptions import ServiceUnavailableError

from tests.helpers import unreachable_client


# Environment variables for integration tests
SUPABASE_URL = os.environ.get("AGENTIC_SUPABASE_URL", "")
SUPABASE_SERVICE_ROLE_KEY = os.environ.get("AGENTIC_SUPABASE_SERVICE_ROLE_KEY", "")


class TestSupabaseClient:
    def setup_method(self):
        """Reset cache before each test."""
        reset_client_cache()

    @patch("shared.database.create_client")
    @patch("shared.database.get_settings")
    def test_get_supabase_client_creates_client(self, mock_settings, mock_create):
        """Should create client with service role key."""
        mock_settings.return_value.supabase_url = "https://test.supabase.co"
        mock_settings.return_value.supabase_service_role_key = "test-key"
        mock_create.return_value = MagicMock()

        client = get_supabase_client()

        mock_create.assert_called_once_with(
            "https://test.supabase.co",
            "test-key",
        )
        assert client is not None

    @patch("shared.database.create_client")
    @patch("shared.database.get_settings")
    def test_get_supabase_client_caches_client(self, mock_settings, mock_create):
        """Should cache the client and not recreate it."""
        mock_settings.return_value.supabase_url = "https://test.supabase.co"
        mock_settings.return_value.supabase_service_role_key = "test-key"
        mock_create.return_value = MagicMock()

        client1 = get_supabase_client()
        client2 = get_supabase_client()

        mock_create.assert_called_once()
        assert client1 is client2

    @patch("shared.database.get_settings")
    def test_get_supabase_client_raises_without_config(self, mock_settings):
        """Should raise if configuration is missing."""
        mock_settings.return_value.supabase_url = ""
        mock_settings.return_value.supabase_service_role_key = ""

        with pytest.raises(RuntimeError, match="configuration missing"):
            get_supabase_client()

    @patch("shared.database.create_client")
    @patch("shared.database.get_settings")
    def test_reset_client_cache(self, mock_settings, mock_create):
        """Should reset the cache and allow new client creation."""
        mock_settings.return_value.supabase_url = "https://test.supabase.co"
        mock_settings.return_value.supabase_service_role_key = "test-key"
        mock_create.side_effect = [MagicMock(name="client1"), MagicMock(name="client2")]

        client1 = get_supabase_client()
        reset_client_cache()
        client2 = get_supabase_client()

        assert mock_create.call_count == 2
        assert client1 is not client2


class TestStoreHandle:
    def setup_method(self):
        reset_client_cache()

    def test_available_with_client(self):
        client = MagicMock()
        store = StoreHandle(client)
        assert store.is_available() is True
        assert store.client is client

    def test_unavailable_without_client(self):
        store = StoreHandle(None)
        assert store.is_available() is False
        with pytest.raises(ServiceUnavailableError):
            store.client

    @patch("shared.database.get_settings")
    def test_from_settings_without_config(self, mock_settings):
        """Missing configuration yields an unavailable handle, not an error."""
        mock_settings.return_value.supabase_url = ""
        mock_settings.return_value.supabase_service_role_key = ""

        assert StoreHandle.from_settings().is_available() is False

    @patch("shared.database.create_client")
    @patch("shared.database.get_settings")
    def test_from_settings_when_client_creation_fails(self, mock_settings, mock_create):
        mock_settings.return_value.supabase_url = "https://test.supabase.co"
        mock_settings.return_value.supabase_service_role_key = "test-key"
        mock_create.side_effect = ValueError("Invalid API key")

        assert StoreHandle.from_settings().is_available() is False

    @patch("shared.database.create_client")
    @patch("shared.database.get_settings")
    def test_from_settings_with_config(self, mock_settings, mock_create):
        mock_settings.return_value.supabase_url = "https://test.supabase.co"
        mock_settings.return_value.supabase_service_role_key = "test-key"
        mock_create.return_value = MagicMock()

        assert StoreHandle.from_settings().is_available() is True

    def test_ping(self):
        client = MagicMock()
        assert StoreHandle(client).ping() is True
        client.table.assert_called_once_with("users")

    def test_ping_failure(self):
        client = MagicMock()
        client.table.return_value.select.return_value.limit.return_value.execute.side_effect = (
            ConnectionError("refused")
        )
        assert StoreHandle(client).ping() is False

    def test_ping_without_client(self):
        assert StoreHandle(None).ping() is False

    def test_connect_error_marks_unreachable(self):
        store = StoreHandle(unreachable_client())

        with pytest.raises(ServiceUnavailableError):
            store.execute(store.client.table("users").select("id"))

        assert store.is_available() is False
        assert store.ping() is False

    def test_unreachable_store_is_retried_after_interval(self):
        now = [100.0]
        store = StoreHandle(unreachable_client(), retry_after=5.0, clock=lambda: now[0])
        store.mark_unreachable(httpx.ConnectError("Connection refused"))

        now[0] = 104.9
        assert store.is_available() is False
        now[0] = 105.0
        assert store.is_available() is True

    def test_successful_query_clears_outage(self):
        client = MagicMock()
        store = StoreHandle(client)
        store.mark_unreachable(httpx.ConnectError("Connection refused"))

        assert store.ping() is True
        assert store.is_available() is True

    def test_api_errors_do_not_mark_unreachable(self):
        """The store answered; a rejected query says nothing about reachability."""
        query = MagicMock()
        query.execute.side_effect = APIError({"message": "duplicate key", "code": "23505"})
        store = StoreHandle(MagicMock())

        with pytest.raises(APIError):
            store.execute(query)
        assert store.is_available() is True


# =============================================================================
# Integration Tests - Require real Supabase credentials
# =============================================================================


@pytest.mark.skipif(
    not SUPABASE_URL or not SUPABASE_SERVICE_ROLE_KEY,
    reason="AGENTIC_SUPABASE_URL and AGENTIC_SUPABASE_SERVICE_ROLE_KEY environment variables not set"
)
class TestSupabaseIntegration:
    """Integration tests requiring real Supabase credentials.

    These tests are skipped by default. To run them:
        AGENTIC_SUPABASE_URL=https://xxx.supabase.co AGENTIC_SUPABASE_SERVICE_ROLE_KEY=xxx \
            pytest backend/tests/shared/test_database.py -v -k Integration
    """

    def setup_method(self):
        reset_client_cache()

    def test_store_answers_ping(self):
        """The users table from the migrations must be reachable."""
        store = StoreHandle.from_settings()
        assert store.is_available() is True
        assert store.ping() is True
