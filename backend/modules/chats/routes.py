"""
Chat history API endpoints.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_chat_service
from api.models.errors import ErrorResponse
from api.middleware.auth import get_current_user
from modules.auth.models import MessageResponse
from shared.models import Principal

from .interfaces import IChatService
from .models import ChatListResponse, ChatResponse, SaveChatRequest

router = APIRouter(
    responses={
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    }
)


@router.post("", response_model=ChatResponse)
async def save_chat(
    request: SaveChatRequest,
    user: Principal = Depends(get_current_user),
    service: IChatService = Depends(get_chat_service),
) -> ChatResponse:
    """
    Save or replace a chat thread.

    The whole thread is replaced; messages are not merged.
    """
    chat = await service.save_chat(user, request)
    return ChatResponse(message="Chat saved successfully", chat=chat)


@router.get("", response_model=ChatListResponse)
async def list_chats(
    user: Principal = Depends(get_current_user),
    service: IChatService = Depends(get_chat_service),
) -> ChatListResponse:
    """List the current user's chats, most recent first."""
    return ChatListResponse(chats=await service.list_chats(user))


@router.delete("/{chat_id}", response_model=MessageResponse)
async def delete_chat(
    chat_id: str,
    user: Principal = Depends(get_current_user),
    service: IChatService = Depends(get_chat_service),
) -> MessageResponse:
    """Delete one of the current user's chats."""
    await service.delete_chat(user, chat_id)
    return MessageResponse(message="Chat deleted successfully")
