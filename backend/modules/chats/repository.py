"""
Chat repository for database access.

Encapsulates Supabase queries for the ``chats`` table. The table has a
unique constraint on (chat_id, owner_id) and an index on
(owner_id, last_updated desc).
"""

from typing import Any

from shared.repository import BaseRepository
from .models import ChatMessage, ChatThread, FileReference

CHATS_TABLE = "chats"


class ChatRepository(BaseRepository[ChatThread]):
    """
    Repository for chat threads.

    Note: This repository does NOT perform authorization checks.
    The service layer always scopes queries by owner.
    """

    def upsert(self, thread: ChatThread) -> ChatThread:
        """
        Insert or replace a thread atomically on (chat_id, owner_id).

        Message lists are not merged; the stored row becomes exactly ``thread``.
        """
        data = thread.model_dump(mode="json")
        result = self._execute(
            self._db.table(CHATS_TABLE)
            .upsert(data, on_conflict="chat_id,owner_id")
        )
        if not result.data:
            return thread
        return self._map_to_thread(result.data[0])

    def list_for_owner(self, owner_id: str) -> list[ChatThread]:
        result = self._execute(
            self._db.table(CHATS_TABLE)
            .select("*")
            .eq("owner_id", owner_id)
            .order("last_updated", desc=True)
        )
        return [self._map_to_thread(row) for row in result.data]

    def delete(self, owner_id: str, chat_id: str) -> bool:
        """
        Delete a thread.

        Returns:
            True if a row was deleted.
        """
        result = self._execute(
            self._db.table(CHATS_TABLE)
            .delete()
            .eq("owner_id", owner_id)
            .eq("chat_id", chat_id)
        )
        return bool(result.data)

    # -------------------------------------------------------------------------
    # Mapping helpers
    # -------------------------------------------------------------------------

    def _map_to_thread(self, data: dict[str, Any]) -> ChatThread:
        """Map database row to ChatThread model."""
        return ChatThread(
            chat_id=data["chat_id"],
            owner_id=str(data["owner_id"]),
            title=data.get("title") or "New Chat",
            messages=[ChatMessage(**m) for m in data.get("messages") or []],
            files=[FileReference(**f) for f in data.get("files") or []],
            date=data.get("date"),
            time=data.get("time"),
            last_updated=data["last_updated"],
        )
