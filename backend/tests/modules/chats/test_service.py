import pytest
from datetime import datetime, timezone
from unittest.mock import MagicMock

from modules.chats.exceptions import ChatNotFoundError
from modules.chats.models import ChatMessage, SaveChatRequest
from modules.chats.repository import ChatRepository
from modules.chats.service import ChatService
from shared.database import StoreHandle
from shared.exceptions import ServiceUnavailableError
from shared.models import Principal

from tests.helpers import (
    available_store,
    create_thread,
    unavailable_store,
    unreachable_client,
)


NOW = datetime(2025, 12, 15, 10, 30, tzinfo=timezone.utc)

USER = Principal(id="user-123", name="Ann", email="a@x.com")
DEMO = Principal(id="demo_1", name="Demo User", email="demo@agentic.com", is_demo=True)


class TestChatService:
    @pytest.fixture
    def repo(self):
        repo = MagicMock(spec=ChatRepository)
        repo.upsert.side_effect = lambda thread: thread
        return repo

    @pytest.fixture
    def service(self, repo):
        return ChatService(repository=repo, store=available_store(), clock=lambda: NOW)

    @pytest.mark.asyncio
    async def test_save_sets_owner_from_principal(self, service, repo):
        request = SaveChatRequest(
            chat_id="chat-1",
            title="Sales analysis",
            messages=[ChatMessage(text="Hello", is_user=True)],
        )

        saved = await service.save_chat(USER, request)

        assert saved.owner_id == "user-123"
        assert saved.last_updated == NOW
        repo.upsert.assert_called_once()

    @pytest.mark.asyncio
    async def test_save_fills_defaults(self, service):
        saved = await service.save_chat(USER, SaveChatRequest(chat_id="chat-1"))

        assert saved.title == "New Chat"
        assert saved.date == "Dec 15"
        assert saved.time == "10:30 AM"

    @pytest.mark.asyncio
    async def test_list_is_scoped_to_principal(self, service, repo):
        repo.list_for_owner.return_value = [create_thread(owner_id="user-123")]

        threads = await service.list_chats(USER)

        repo.list_for_owner.assert_called_once_with("user-123")
        assert len(threads) == 1

    @pytest.mark.asyncio
    async def test_delete_missing(self, service, repo):
        repo.delete.return_value = False
        with pytest.raises(ChatNotFoundError):
            await service.delete_chat(USER, "nope")

    @pytest.mark.asyncio
    async def test_delete(self, service, repo):
        repo.delete.return_value = True
        await service.delete_chat(USER, "chat-1")
        repo.delete.assert_called_once_with("user-123", "chat-1")

    @pytest.mark.asyncio
    async def test_demo_principal_is_unavailable(self, service, repo):
        """Demo sessions have no server-side history."""
        with pytest.raises(ServiceUnavailableError) as exc_info:
            await service.list_chats(DEMO)
        assert exc_info.value.code == "DEMO_MODE"
        repo.list_for_owner.assert_not_called()

    @pytest.mark.asyncio
    async def test_store_down(self, repo):
        service = ChatService(repository=repo, store=unavailable_store())
        with pytest.raises(ServiceUnavailableError):
            await service.save_chat(USER, SaveChatRequest(chat_id="chat-1"))

    @pytest.mark.asyncio
    async def test_store_stops_answering(self):
        """A configured store that fails to connect is a 503-class error."""
        store = StoreHandle(unreachable_client())
        service = ChatService(repository=ChatRepository(store), store=store)

        with pytest.raises(ServiceUnavailableError):
            await service.list_chats(USER)
        with pytest.raises(ServiceUnavailableError):
            await service.save_chat(USER, SaveChatRequest(chat_id="chat-1"))
