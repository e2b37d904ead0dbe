"""
Chats module.

Server-side chat history storage plus the client-side coordinator that
keeps a local cache consistent with the server.

Public API:
- IChatService: Server-side chat operations
- IChatStore / IChatCache: The two stores the coordinator reconciles
- ChatPersistenceCoordinator: Dual-store save/list/delete/reconcile
- RemoteChatStore: IChatStore over the HTTP API
- InMemoryChatCache / FileChatCache: IChatCache implementations
"""

from .interfaces import IChatService, IChatStore, IChatCache
from .models import (
    FileReference,
    ChatMessage,
    ChatThread,
    SaveChatRequest,
    ChatResponse,
    ChatListResponse,
    SaveResult,
    DeleteResult,
    ReconcileResult,
)
from .exceptions import ChatNotFoundError, RemoteUnavailableError
from .cache import InMemoryChatCache, FileChatCache
from .client import RemoteChatStore
from .coordinator import ChatPersistenceCoordinator

__all__ = [
    # Interfaces
    "IChatService",
    "IChatStore",
    "IChatCache",
    # Models
    "FileReference",
    "ChatMessage",
    "ChatThread",
    "SaveChatRequest",
    "ChatResponse",
    "ChatListResponse",
    "SaveResult",
    "DeleteResult",
    "ReconcileResult",
    # Exceptions
    "ChatNotFoundError",
    "RemoteUnavailableError",
    # Implementations
    "InMemoryChatCache",
    "FileChatCache",
    "RemoteChatStore",
    "ChatPersistenceCoordinator",
]
