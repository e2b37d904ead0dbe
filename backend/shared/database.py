"""
Database client factory and store handle for Supabase.

Services never check connectivity ad hoc; they receive a StoreHandle and
ask it whether the store is available before taking the real path.
"""

import logging
import time
from typing import Any, Callable, Optional

import httpx
from supabase import create_client, Client

from .config import get_settings
from .exceptions import ServiceUnavailableError

logger = logging.getLogger(__name__)

# Module-level client cache
_service_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """
    Get Supabase client with service role (bypasses RLS).

    Returns:
        Supabase client configured with service role key

    Raises:
        RuntimeError: If the Supabase configuration is missing
    """
    global _service_client

    if _service_client is None:
        settings = get_settings()
        if not settings.supabase_url or not settings.supabase_service_role_key:
            raise RuntimeError(
                "Supabase configuration missing. "
                "Set AGENTIC_SUPABASE_URL and AGENTIC_SUPABASE_SERVICE_ROLE_KEY environment variables."
            )
        _service_client = create_client(
            settings.supabase_url,
            settings.supabase_service_role_key,
        )

    return _service_client


def reset_client_cache() -> None:
    """
    Reset the cached database client.

    Useful for testing or when configuration changes.
    """
    global _service_client
    _service_client = None


class StoreHandle:
    """
    Explicit handle to the document store.

    Wraps an optional Supabase client. A handle without a client reports
    itself unavailable, which is what switches services into their
    degraded paths. A configured client that fails at the transport level
    is marked unreachable and reported unavailable until ``retry_after``
    seconds have passed, or until a query succeeds again.
    """

    def __init__(
        self,
        client: Optional[Client] = None,
        retry_after: float = 5.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._client = client
        self._retry_after = retry_after
        self._clock = clock
        self._unreachable_until: Optional[float] = None

    @classmethod
    def from_settings(cls) -> "StoreHandle":
        """Build a handle from configuration, unavailable if unconfigured."""
        retry_after = get_settings().store_retry_seconds
        try:
            return cls(get_supabase_client(), retry_after=retry_after)
        except RuntimeError as e:
            logger.warning(f"Document store unavailable: {e}")
            return cls(None, retry_after=retry_after)
        except Exception as e:
            logger.error(f"Failed to create Supabase client: {e}")
            return cls(None, retry_after=retry_after)

    def is_available(self) -> bool:
        """Whether the real store can be used."""
        if self._client is None:
            return False
        if self._unreachable_until is None:
            return True
        return self._clock() >= self._unreachable_until

    def mark_unreachable(self, error: Exception) -> None:
        """Record a transport failure against a configured client."""
        if self._unreachable_until is None:
            logger.warning(f"Document store unreachable: {error}")
        self._unreachable_until = self._clock() + self._retry_after

    def mark_reachable(self) -> None:
        """Record a successful round trip."""
        if self._unreachable_until is not None:
            logger.info("Document store reachable again")
        self._unreachable_until = None

    @property
    def client(self) -> Client:
        """
        The underlying Supabase client.

        Raises:
            ServiceUnavailableError: If the store is not available
        """
        if self._client is None:
            raise ServiceUnavailableError()
        return self._client

    def execute(self, query: Any) -> Any:
        """
        Run a built query against the store.

        Raises:
            ServiceUnavailableError: If the request never got an answer
        """
        try:
            result = query.execute()
        except httpx.HTTPError as e:
            self.mark_unreachable(e)
            raise ServiceUnavailableError() from e
        self.mark_reachable()
        return result

    def ping(self) -> bool:
        """Run a cheap query to check the store actually answers."""
        if self._client is None:
            return False
        try:
            self.execute(self._client.table("users").select("id").limit(1))
            return True
        except Exception as e:
            logger.warning(f"Document store ping failed: {e}")
            return False
