"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
Supabase client access through the store handle.
"""

from datetime import datetime, timezone
from typing import Any, TypeVar, Generic
from supabase import Client

from .database import StoreHandle


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db (resolved through the StoreHandle)
    - Generic type parameter for model type hints

    Subclasses should implement domain-specific data access methods
    and handle dict-to-Pydantic model mapping internally.

    Example:
        class ChatRepository(BaseRepository[ChatThread]):
            def list_for_owner(self, owner_id: str) -> list[ChatThread]:
                query = self._db.table("chats").select("*").eq("owner_id", owner_id)
                result = self._execute(query)
                return [self._map_to_thread(row) for row in result.data]
    """

    def __init__(self, store: StoreHandle) -> None:
        """
        Initialize the repository with a store handle.

        Args:
            store: Handle to the document store.
        """
        self._store = store

    @property
    def _db(self) -> Client:
        return self._store.client

    def _execute(self, query: Any) -> Any:
        """
        Execute a built query through the store handle.

        Raises:
            ServiceUnavailableError: If the store did not answer
        """
        return self._store.execute(query)

    @staticmethod
    def _now_iso() -> str:
        return datetime.now(timezone.utc).isoformat()
