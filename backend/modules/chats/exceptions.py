"""
Chats module exceptions.
"""

from typing import Optional

from shared.exceptions import ExternalServiceError, NotFoundError


class ChatNotFoundError(NotFoundError):
    """Raised when a thread does not exist for the owner."""

    def __init__(self, chat_id: str):
        super().__init__(
            "Chat not found",
            code="CHAT_NOT_FOUND",
            details={"chat_id": chat_id},
        )


class RemoteUnavailableError(ExternalServiceError):
    """
    Raised by a remote chat store on any failure.

    The coordinator turns this into a local-cache fallback; it never
    reaches the caller.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(
            message,
            service="chat-api",
            code="REMOTE_UNAVAILABLE",
            details={"status_code": status_code},
        )
        self.status_code = status_code
