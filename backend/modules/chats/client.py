"""
HTTP client for the chat history API.

Implements IChatStore against ``/api/chats`` with a bearer token. Every
failure (connection errors, timeouts, error statuses, malformed bodies)
is raised as RemoteUnavailableError so the coordinator can fall back.
"""

import logging
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from .exceptions import RemoteUnavailableError
from .interfaces import IChatStore
from .models import ChatThread, SaveChatRequest

logger = logging.getLogger(__name__)


class RemoteChatStore(IChatStore):
    """
    Chat store backed by the server API.

    The owner is implied by the token; ``owner_id`` arguments only label
    log lines and results.
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Initialize the remote store.

        Args:
            base_url: Server root, e.g. ``http://localhost:5000``
            token: Session token sent as a bearer credential
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._timeout = timeout
        self._transport = transport

    async def save(self, thread: ChatThread) -> ChatThread:
        body = SaveChatRequest(
            chat_id=thread.chat_id,
            title=thread.title,
            messages=thread.messages,
            files=thread.files,
            date=thread.date,
            time=thread.time,
        )
        data = await self._request("POST", "/api/chats", json=body.model_dump(mode="json"))
        return self._parse(lambda: ChatThread(**data["chat"]))

    async def list_for_owner(self, owner_id: str) -> list[ChatThread]:
        data = await self._request("GET", "/api/chats")
        return self._parse(lambda: [ChatThread(**c) for c in data.get("chats", [])])

    async def delete(self, owner_id: str, chat_id: str) -> None:
        await self._request("DELETE", f"/api/chats/{chat_id}")

    async def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
                headers={"Authorization": f"Bearer {self._token}"},
            ) as client:
                response = await client.request(method, path, **kwargs)
        except httpx.TimeoutException:
            raise RemoteUnavailableError(
                "Request timeout. Server is taking too long to respond.", status_code=408
            )
        except httpx.HTTPError as e:
            raise RemoteUnavailableError(f"Cannot connect to the server at {self._base_url}: {e}")

        try:
            data = response.json()
        except ValueError:
            data = {}

        if response.is_error or not isinstance(data, dict) or not data.get("success", False):
            message = data.get("message") if isinstance(data, dict) else None
            raise RemoteUnavailableError(
                message or f"Server responded with status {response.status_code}",
                status_code=response.status_code,
            )

        return data

    @staticmethod
    def _parse(build):
        try:
            return build()
        except (KeyError, TypeError, ValidationError) as e:
            raise RemoteUnavailableError(f"Malformed response from server: {e}")
