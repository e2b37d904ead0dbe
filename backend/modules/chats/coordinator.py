"""
Chat persistence coordinator.

Keeps chat threads consistent between the authoritative remote store and
a local cache:

- save: one remote attempt; the cache always receives a copy, and is the
  only copy when the remote failed
- list: remote if reachable, else the cache; both sorted newest first
- delete: best effort remotely, always removed locally
- reconcile: push every cached thread to the remote, then clear the cache

Remote wins whenever it is reachable. Concurrent writers to the same
thread are not detected; the last whole-thread write wins.
"""

import logging
from datetime import datetime
from typing import Callable

from modules.auth.tokens import utc_now

from .exceptions import RemoteUnavailableError
from .interfaces import IChatCache, IChatStore
from .models import ChatThread, DeleteResult, ReconcileResult, SaveResult

logger = logging.getLogger(__name__)


def _newest_first(threads: list[ChatThread]) -> list[ChatThread]:
    return sorted(threads, key=lambda t: t.last_updated, reverse=True)


class ChatPersistenceCoordinator:
    """
    Dual-store chat persistence with local fallback.

    Example:
        remote = RemoteChatStore(settings.api_base_url, token)
        coordinator = ChatPersistenceCoordinator(remote, FileChatCache(".agentic_cache"))
        result = await coordinator.save_thread(thread)
        if result.saved_locally:
            ...  # show "saved locally" and call reconcile() later
    """

    def __init__(
        self,
        remote: IChatStore,
        cache: IChatCache,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._remote = remote
        self._cache = cache
        self._clock = clock

    async def save_thread(self, thread: ChatThread) -> SaveResult:
        """
        Save a whole thread.

        Never fails: when the remote is unreachable the thread is kept in
        the local cache and the result is marked ``saved_locally``.
        """
        thread = thread.model_copy(update={"last_updated": self._clock()})

        try:
            saved = await self._remote.save(thread)
        except RemoteUnavailableError as e:
            logger.warning(f"Remote save of chat {thread.chat_id} failed, keeping it locally: {e.message}")
            self._cache_put(thread)
            return SaveResult(
                message="Chat saved locally",
                chat_id=thread.chat_id,
                saved_locally=True,
            )

        # Backup copy so listings survive a later outage
        self._cache_put(saved)
        return SaveResult(message="Chat saved successfully", chat_id=saved.chat_id)

    async def list_threads(self, owner_id: str) -> list[ChatThread]:
        """An owner's threads, most recently updated first."""
        try:
            threads = await self._remote.list_for_owner(owner_id)
        except RemoteUnavailableError as e:
            logger.warning(f"Remote chat listing failed, using local cache: {e.message}")
            threads = self._cache.get(owner_id)
        return _newest_first(threads)

    async def delete_thread(self, owner_id: str, chat_id: str) -> DeleteResult:
        """Delete a thread. Reports success whether or not the remote answered."""
        deleted_remotely = True
        try:
            await self._remote.delete(owner_id, chat_id)
        except RemoteUnavailableError as e:
            logger.warning(f"Remote delete of chat {chat_id} failed: {e.message}")
            deleted_remotely = False

        remaining = [t for t in self._cache.get(owner_id) if t.chat_id != chat_id]
        self._cache.set(owner_id, remaining)

        return DeleteResult(
            message="Chat deleted successfully" if deleted_remotely else "Chat deleted locally",
            chat_id=chat_id,
            deleted_remotely=deleted_remotely,
        )

    async def reconcile(self, owner_id: str) -> ReconcileResult:
        """
        Push every cached thread to the remote, one at a time.

        Failures do not stop the pass. The cache is cleared once the pass
        completes, including threads that failed to sync.
        """
        result = ReconcileResult()

        for thread in self._cache.get(owner_id):
            try:
                await self._remote.save(thread)
                result.synced.append(thread.chat_id)
            except RemoteUnavailableError as e:
                logger.warning(f"Sync of chat {thread.chat_id} failed: {e.message}")
                result.failed.append(thread.chat_id)

        self._cache.delete(owner_id)

        if result.failed:
            # Known gap: these threads exist nowhere anymore
            logger.error(
                f"Dropped {len(result.failed)} unsynced chats for {owner_id}: {result.failed}"
            )
            result.success = False

        logger.info(f"Synced {len(result.synced)} chats for {owner_id}")
        return result

    def _cache_put(self, thread: ChatThread) -> None:
        threads = [t for t in self._cache.get(thread.owner_id) if t.chat_id != thread.chat_id]
        threads.append(thread)
        self._cache.set(thread.owner_id, threads)
