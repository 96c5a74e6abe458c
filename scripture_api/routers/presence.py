"""Online presence routes."""
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from scripture_api.auth import get_current_user_dependency
from scripture_api.config import get_settings
from scripture_api.models.schemas import OnlineCount, PresenceUpdate, SuccessResponse
from scripture_api.repositories.presence import PresenceRepository
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/presence", tags=["presence"])

CurrentUser = Annotated[dict, Depends(get_current_user_dependency)]


@router.post("/update", response_model=SuccessResponse)
async def update_presence(data: PresenceUpdate, current_user: CurrentUser):
    try:
        if data.offline:
            PresenceRepository.mark_offline(current_user["id"])
        else:
            PresenceRepository.mark_online(current_user["id"])
    except Exception as e:
        logger.error(f"Error updating presence for user {current_user['id']}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update presence")
    return {"success": True}


@router.get("/online-count", response_model=OnlineCount)
async def online_count():
    """Number of users seen within the presence timeout."""
    try:
        PresenceRepository.sweep_stale(get_settings().presence_timeout_minutes)
        return {"count": PresenceRepository.online_count()}
    except Exception as e:
        logger.error(f"Error getting online count: {e}")
        raise HTTPException(status_code=500, detail="Failed to get online count")
