"""
Chat history service implementation.

Stores whole chat threads per principal. Demo principals and an
unavailable store are answered with ServiceUnavailableError so clients
fall back to their local cache.
"""

import logging
from datetime import datetime
from typing import Callable

from shared.database import StoreHandle
from shared.exceptions import ServiceUnavailableError
from shared.models import Principal

from modules.auth.tokens import utc_now

from .exceptions import ChatNotFoundError
from .interfaces import IChatService
from .models import ChatThread, SaveChatRequest
from .repository import ChatRepository

logger = logging.getLogger(__name__)


class ChatService(IChatService):
    """Chat service with Supabase backend."""

    def __init__(
        self,
        repository: ChatRepository,
        store: StoreHandle,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._repo = repository
        self._store = store
        self._clock = clock

    async def save_chat(self, principal: Principal, request: SaveChatRequest) -> ChatThread:
        self._require_store(principal)

        now = self._clock()
        thread = ChatThread(
            chat_id=request.chat_id,
            owner_id=principal.id,
            title=request.title or "New Chat",
            messages=request.messages,
            files=request.files,
            date=request.date or f"{now:%b} {now.day}",
            time=request.time or f"{now:%I:%M %p}",
            last_updated=now,
        )
        saved = self._repo.upsert(thread)
        logger.debug(f"Saved chat {saved.chat_id} for {principal.id}")
        return saved

    async def list_chats(self, principal: Principal) -> list[ChatThread]:
        self._require_store(principal)
        return self._repo.list_for_owner(principal.id)

    async def delete_chat(self, principal: Principal, chat_id: str) -> None:
        self._require_store(principal)
        if not self._repo.delete(principal.id, chat_id):
            raise ChatNotFoundError(chat_id)
        logger.debug(f"Deleted chat {chat_id} for {principal.id}")

    def _require_store(self, principal: Principal) -> None:
        if principal.is_demo:
            raise ServiceUnavailableError(
                "Chat history is not stored for demo sessions",
                code="DEMO_MODE",
            )
        if not self._store.is_available():
            raise ServiceUnavailableError()
