"""Admin endpoints for user management and presence tracking."""
from typing import Annotated, List

from fastapi import APIRouter, Depends, HTTPException, status
from psycopg2 import IntegrityError

from scripture_api.auth import get_current_admin_user, get_current_user_dependency
from scripture_api.config import get_settings
from scripture_api.models.schemas import AdminUser, AdminUserUpdate, SuccessResponse
from scripture_api.repositories.presence import PresenceRepository

import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["admin"])

CurrentUser = Annotated[dict, Depends(get_current_user_dependency)]
AdminUserDep = Annotated[dict, Depends(get_current_admin_user)]


@router.get("/users", response_model=List[AdminUser])
async def list_users(current_admin: AdminUserDep):
    """All users with online status; stale sessions are marked offline first."""
    try:
        PresenceRepository.sweep_stale(get_settings().presence_timeout_minutes)
        return PresenceRepository.list_users()
    except Exception as e:
        logger.error(f"Error listing users: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch users")


@router.post("/users/presence", response_model=SuccessResponse)
async def update_presence(current_user: CurrentUser):
    """Heartbeat from any signed-in user."""
    try:
        PresenceRepository.mark_online(current_user["id"])
    except Exception as e:
        logger.error(f"Error updating presence for user {current_user['id']}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update user presence")
    return {"success": True}


@router.put("/users/{user_id}", response_model=AdminUser)
async def update_user(user_id: int, data: AdminUserUpdate, current_admin: AdminUserDep):
    try:
        user = PresenceRepository.update_user(user_id, data.name.strip(), data.email, data.role)
    except IntegrityError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="An account with this email already exists"
        )
    except Exception as e:
        logger.error(f"Error updating user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update user")

    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    logger.info(f"Admin {current_admin['id']} updated user {user_id}")
    return user
