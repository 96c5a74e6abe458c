"""Routes for managing a user's verse highlights."""
from typing import Annotated, List

from fastapi import APIRouter, Depends, HTTPException, status

from scripture_api.auth import get_current_user_dependency
from scripture_api.models.schemas import (
    Highlight,
    HighlightCreate,
    HighlightCreated,
    HighlightUpdate,
    MessageResponse,
)
from scripture_api.repositories.highlights import HighlightsRepository
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/highlights", tags=["highlights"])

CurrentUser = Annotated[dict, Depends(get_current_user_dependency)]

NOT_OWNED = "Highlight not found or not owned by user"


@router.get("", response_model=List[Highlight])
async def list_highlights(current_user: CurrentUser):
    """Highlights of the current user with verse and version details, newest first."""
    try:
        return HighlightsRepository.list_for_user(current_user["id"])
    except Exception as e:
        logger.error(f"Error fetching highlights for user {current_user['id']}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch highlights"
        )


@router.post("", response_model=HighlightCreated)
async def create_highlight(data: HighlightCreate, current_user: CurrentUser):
    try:
        if not HighlightsRepository.verse_exists(data.verse_id):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Verse not found")

        created = HighlightsRepository.create(
            user_id=current_user["id"],
            verse_id=data.verse_id,
            color_hex=data.color_hex,
            highlighted_text=data.highlighted_text,
            start_offset=data.start_offset,
            end_offset=data.end_offset,
            note=data.note,
        )
        return {"id": created["id"], "note": created["note"], "message": "Highlight created successfully"}

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error creating highlight: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create highlight"
        )


@router.put("/{highlight_id}", response_model=MessageResponse)
async def update_highlight(highlight_id: int, data: HighlightUpdate, current_user: CurrentUser):
    """Partial update; only the fields present in the request body change."""
    fields = data.model_dump(exclude_unset=True)
    if not fields:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No fields to update")

    try:
        updated = HighlightsRepository.update(highlight_id, current_user["id"], fields)
    except Exception as e:
        logger.error(f"Error updating highlight {highlight_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update highlight"
        )

    if not updated:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_OWNED)
    return {"message": "Highlight updated successfully"}


@router.delete("/{highlight_id}", response_model=MessageResponse)
async def delete_highlight(highlight_id: int, current_user: CurrentUser):
    try:
        deleted = HighlightsRepository.delete(highlight_id, current_user["id"])
    except Exception as e:
        logger.error(f"Error deleting highlight {highlight_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete highlight"
        )

    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_OWNED)
    return {"message": "Highlight deleted successfully"}
