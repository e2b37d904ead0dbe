"""Tests for the chat history endpoints."""

import pytest
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

from fastapi.testclient import TestClient

from api import app
from api.dependencies import get_auth_service, get_chat_service, get_token_service
from modules.chats.exceptions import ChatNotFoundError
from modules.chats.interfaces import IChatService
from shared.exceptions import ServiceUnavailableError
from shared.models import Principal

from tests.helpers import create_test_token, create_thread, create_token_service


USER = Principal(id="test-user-123", name="Ann", email="a@x.com")


@pytest.fixture
def chat_service():
    service = MagicMock(spec=IChatService)
    service.save_chat = AsyncMock()
    service.list_chats = AsyncMock(return_value=[])
    service.delete_chat = AsyncMock(return_value=None)
    return service


@pytest.fixture
def client(chat_service):
    auth = MagicMock()
    auth.resolve_principal = AsyncMock(return_value=USER)
    tokens = create_token_service()
    app.dependency_overrides[get_token_service] = lambda: tokens
    app.dependency_overrides[get_auth_service] = lambda: auth
    app.dependency_overrides[get_chat_service] = lambda: chat_service
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestChatEndpoints:
    def test_requires_auth(self, client):
        assert client.get("/api/chats").status_code == 401
        assert client.post("/api/chats", json={"chat_id": "c"}).status_code == 401
        assert client.delete("/api/chats/c").status_code == 401

    def test_save_chat(self, client, chat_service, auth_headers):
        chat_service.save_chat.return_value = create_thread(owner_id=USER.id)

        response = client.post(
            "/api/chats",
            headers=auth_headers,
            json={
                "chat_id": "chat-1",
                "title": "Sales analysis",
                "messages": [{"text": "Can you analyze the sales data?", "is_user": True}],
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "Chat saved successfully"
        assert data["chat"]["owner_id"] == USER.id

        principal, request = chat_service.save_chat.call_args[0]
        assert principal.id == USER.id
        assert request.chat_id == "chat-1"

    def test_save_chat_requires_chat_id(self, client, auth_headers):
        response = client.post("/api/chats", headers=auth_headers, json={"title": "x"})
        assert response.status_code == 400

    def test_list_chats(self, client, chat_service, auth_headers):
        chat_service.list_chats.return_value = [
            create_thread(chat_id="b", owner_id=USER.id, last_updated=datetime(2025, 1, 2, tzinfo=timezone.utc)),
            create_thread(chat_id="a", owner_id=USER.id, last_updated=datetime(2025, 1, 1, tzinfo=timezone.utc)),
        ]

        response = client.get("/api/chats", headers=auth_headers)

        assert response.status_code == 200
        assert [c["chat_id"] for c in response.json()["chats"]] == ["b", "a"]

    def test_delete_chat(self, client, chat_service, auth_headers):
        response = client.delete("/api/chats/chat-1", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["message"] == "Chat deleted successfully"
        chat_service.delete_chat.assert_awaited_once()

    def test_delete_missing_chat(self, client, chat_service, auth_headers):
        chat_service.delete_chat.side_effect = ChatNotFoundError("nope")

        response = client.delete("/api/chats/nope", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["message"] == "Chat not found"

    def test_store_unavailable(self, client, chat_service, auth_headers):
        """Clients fall back to their local cache on 503."""
        chat_service.list_chats.side_effect = ServiceUnavailableError()

        response = client.get("/api/chats", headers=auth_headers)

        assert response.status_code == 503
        assert response.json()["success"] is False

    def test_demo_token_gets_503(self, client, chat_service):
        chat_service.list_chats.side_effect = ServiceUnavailableError(
            "Chat history is not stored for demo sessions", code="DEMO_MODE"
        )
        token = create_test_token(user_id="demo_1")

        response = client.get("/api/chats", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 503
        principal = chat_service.list_chats.call_args[0][0]
        assert principal.is_demo is True
