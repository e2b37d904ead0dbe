"""
Chats module interfaces.

IChatService is the server-side API used by the routes. IChatStore and
IChatCache are the two stores the client-side persistence coordinator
keeps consistent.
"""

from typing import Protocol, runtime_checkable

from shared.models import Principal

from .models import ChatThread, SaveChatRequest


@runtime_checkable
class IChatService(Protocol):
    """Server-side chat history operations for a verified principal."""

    async def save_chat(self, principal: Principal, request: SaveChatRequest) -> ChatThread:
        """
        Insert or replace the thread keyed by (chat_id, principal.id).

        Raises:
            ServiceUnavailableError: If the store is down or the principal is a demo identity
        """
        ...

    async def list_chats(self, principal: Principal) -> list[ChatThread]:
        """The principal's threads, most recently updated first."""
        ...

    async def delete_chat(self, principal: Principal, chat_id: str) -> None:
        """
        Delete one thread.

        Raises:
            ChatNotFoundError: If the principal has no such thread
        """
        ...


@runtime_checkable
class IChatStore(Protocol):
    """
    Authoritative remote store as seen by the coordinator.

    Implementations raise RemoteUnavailableError for every kind of failure.
    """

    async def save(self, thread: ChatThread) -> ChatThread: ...

    async def list_for_owner(self, owner_id: str) -> list[ChatThread]: ...

    async def delete(self, owner_id: str, chat_id: str) -> None: ...


@runtime_checkable
class IChatCache(Protocol):
    """Local key-value cache of threads, addressed by owner ID."""

    def get(self, owner_id: str) -> list[ChatThread]: ...

    def set(self, owner_id: str, threads: list[ChatThread]) -> None: ...

    def delete(self, owner_id: str) -> None: ...
