"""Support chat between users and admins."""
from typing import Annotated, List

from fastapi import APIRouter, Depends, HTTPException, status

from scripture_api.auth import get_current_admin_user, get_current_user_dependency
from scripture_api.models.schemas import AdminChatMessageCreate, ChatMessage, ChatMessageCreate
from scripture_api.repositories.chat import ChatRepository
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/chat", tags=["chat"])

CurrentUser = Annotated[dict, Depends(get_current_user_dependency)]
AdminUserDep = Annotated[dict, Depends(get_current_admin_user)]

ADMIN_SENDER_NAME = "Admin"


@router.get("/messages", response_model=List[ChatMessage])
async def my_messages(current_user: CurrentUser):
    """The user's own messages plus admin replies and broadcasts, oldest first."""
    try:
        return ChatRepository.messages_for_user(current_user["id"])
    except Exception as e:
        logger.error(f"Error fetching chat messages for user {current_user['id']}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch messages")


@router.post("/messages", response_model=ChatMessage, status_code=status.HTTP_201_CREATED)
async def send_message(data: ChatMessageCreate, current_user: CurrentUser):
    try:
        return ChatRepository.create_message(
            data.message, "user", current_user.get("name"), current_user["id"]
        )
    except Exception as e:
        logger.error(f"Error sending message: {e}")
        raise HTTPException(status_code=500, detail="Failed to send message")


@router.post("/admin/messages", response_model=ChatMessage, status_code=status.HTTP_201_CREATED)
async def send_admin_message(data: AdminChatMessageCreate, current_admin: AdminUserDep):
    if not data.user_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="user_id is required for admin messages"
        )

    try:
        return ChatRepository.create_message(data.message, "admin", ADMIN_SENDER_NAME, data.user_id)
    except Exception as e:
        logger.error(f"Error sending admin message: {e}")
        raise HTTPException(status_code=500, detail="Failed to send admin message")


@router.get("/user/{user_id}/messages", response_model=List[ChatMessage])
async def user_conversation(user_id: int, current_admin: AdminUserDep):
    try:
        return ChatRepository.conversation(user_id)
    except Exception as e:
        logger.error(f"Error fetching messages for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch user messages")


@router.post("/admin/broadcast", response_model=ChatMessage, status_code=status.HTTP_201_CREATED)
async def broadcast(data: ChatMessageCreate, current_admin: AdminUserDep):
    """Message shown to every user (stored with no recipient)."""
    try:
        return ChatRepository.create_message(data.message, "admin", ADMIN_SENDER_NAME, None)
    except Exception as e:
        logger.error(f"Error sending broadcast message: {e}")
        raise HTTPException(status_code=500, detail="Failed to send broadcast message")
