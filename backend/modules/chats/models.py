"""
Chats module data models.

A chat thread is saved and replaced as a whole; messages are never
edited in place.
"""

from datetime import datetime, timezone
from typing import Optional
from pydantic import BaseModel, Field


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class FileReference(BaseModel):
    """Metadata of an uploaded file. The bytes live elsewhere."""

    name: str = Field(..., description="Original filename")
    filename: Optional[str] = Field(None, description="Stored filename")
    server_path: Optional[str] = Field(None, description="Stored path on the server")
    type: Optional[str] = Field(None, description="MIME type")
    size: int = Field(default=0, ge=0, description="Size in bytes")
    uploaded_at: Optional[datetime] = Field(None, description="Upload time")


class ChatMessage(BaseModel):
    """A single message in a thread."""

    text: str = ""
    is_user: bool = Field(..., description="True for user messages, False for the assistant")
    timestamp: datetime = Field(default_factory=_utc_now)
    files: list[FileReference] = Field(default_factory=list)

    model_config = {"frozen": True}


class ChatThread(BaseModel):
    """
    One conversation owned by one user.

    ``(chat_id, owner_id)`` identifies a thread; saving the same pair again
    replaces it.
    """

    chat_id: str = Field(..., min_length=1, description="Client-generated thread ID")
    owner_id: str = Field(..., min_length=1, description="Owning principal ID")
    title: str = Field(default="New Chat")
    messages: list[ChatMessage] = Field(default_factory=list)
    files: list[FileReference] = Field(default_factory=list)
    date: Optional[str] = Field(None, description="Display date, e.g. 'Dec 15'")
    time: Optional[str] = Field(None, description="Display time, e.g. '10:30 AM'")
    last_updated: datetime = Field(default_factory=_utc_now)


class SaveChatRequest(BaseModel):
    """Body of a save request. The owner comes from the session."""

    chat_id: str = Field(..., min_length=1)
    title: Optional[str] = None
    messages: list[ChatMessage] = Field(default_factory=list)
    files: list[FileReference] = Field(default_factory=list)
    date: Optional[str] = None
    time: Optional[str] = None


class ChatResponse(BaseModel):
    """A saved thread."""

    success: bool = True
    message: str
    chat: ChatThread


class ChatListResponse(BaseModel):
    """Threads of the current user, most recently updated first."""

    success: bool = True
    message: str = "Chats retrieved successfully"
    chats: list[ChatThread]


# -----------------------------------------------------------------------------
# Coordinator results
# -----------------------------------------------------------------------------


class SaveResult(BaseModel):
    """Outcome of a coordinated save."""

    success: bool = True
    message: str
    chat_id: str
    saved_locally: bool = Field(
        default=False,
        description="True when the server was unreachable and only the local cache holds the save",
    )


class DeleteResult(BaseModel):
    """Outcome of a coordinated delete. Always successful."""

    success: bool = True
    message: str
    chat_id: str
    deleted_remotely: bool = False


class ReconcileResult(BaseModel):
    """
    Outcome of pushing the local cache to the server.

    ``failed`` threads are cleared from the cache along with the synced ones.
    """

    success: bool = True
    synced: list[str] = Field(default_factory=list)
    failed: list[str] = Field(default_factory=list)
