"""
Local chat caches.

The client keeps a copy of each owner's threads so saves and listings
keep working while the server is unreachable. The in-memory cache is for
tests and short-lived processes; the file cache persists one JSON file per
owner, like browser local storage keyed ``chats_<owner>``.
"""

import logging
from pathlib import Path
from urllib.parse import quote

from pydantic import TypeAdapter, ValidationError

from .interfaces import IChatCache
from .models import ChatThread

logger = logging.getLogger(__name__)

_threads_adapter = TypeAdapter(list[ChatThread])


class InMemoryChatCache(IChatCache):
    """Cache held in a dict for the lifetime of the process."""

    def __init__(self) -> None:
        self._entries: dict[str, list[ChatThread]] = {}

    def get(self, owner_id: str) -> list[ChatThread]:
        return list(self._entries.get(owner_id, []))

    def set(self, owner_id: str, threads: list[ChatThread]) -> None:
        self._entries[owner_id] = list(threads)

    def delete(self, owner_id: str) -> None:
        self._entries.pop(owner_id, None)


class FileChatCache(IChatCache):
    """Cache persisted as ``<directory>/chats_<owner>.json``."""

    def __init__(self, directory: str | Path) -> None:
        self._directory = Path(directory)

    def path_for(self, owner_id: str) -> Path:
        # Percent-encoding keeps distinct owners in distinct files
        safe_owner = quote(owner_id, safe="")
        return self._directory / f"chats_{safe_owner}.json"

    def get(self, owner_id: str) -> list[ChatThread]:
        path = self.path_for(owner_id)
        if not path.exists():
            return []
        try:
            return _threads_adapter.validate_json(path.read_bytes())
        except ValidationError:
            logger.warning(f"Ignoring unreadable chat cache {path}")
            return []

    def set(self, owner_id: str, threads: list[ChatThread]) -> None:
        self._directory.mkdir(parents=True, exist_ok=True)
        path = self.path_for(owner_id)
        tmp = path.with_suffix(".json.tmp")
        tmp.write_bytes(_threads_adapter.dump_json(threads, indent=2))
        tmp.replace(path)

    def delete(self, owner_id: str) -> None:
        self.path_for(owner_id).unlink(missing_ok=True)
