"""Routes for a user's study notes."""
from typing import Annotated, List

from fastapi import APIRouter, Depends, HTTPException, status

from scripture_api.auth import get_current_user_dependency
from scripture_api.models.schemas import MessageResponse, Note, NoteWrite
from scripture_api.repositories.user_notes import UserNotesRepository
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/notes", tags=["notes"])

CurrentUser = Annotated[dict, Depends(get_current_user_dependency)]


@router.get("", response_model=List[Note])
async def list_notes(current_user: CurrentUser):
    try:
        return UserNotesRepository.list_notes(current_user["id"])
    except Exception as e:
        logger.error(f"Error fetching notes for user {current_user['id']}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch notes"
        )


@router.post("", response_model=Note, status_code=status.HTTP_201_CREATED)
async def create_note(data: NoteWrite, current_user: CurrentUser):
    try:
        return UserNotesRepository.create_note(
            user_id=current_user["id"],
            title=data.title,
            content=data.content,
            verse_reference=data.verse_reference,
            tags=data.tags,
        )
    except Exception as e:
        logger.error(f"Error creating note: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create note"
        )


@router.put("/{note_id}", response_model=Note)
async def update_note(note_id: int, data: NoteWrite, current_user: CurrentUser):
    try:
        note = UserNotesRepository.update_note(
            note_id,
            current_user["id"],
            title=data.title,
            content=data.content,
            verse_reference=data.verse_reference,
            tags=data.tags,
        )
    except Exception as e:
        logger.error(f"Error updating note {note_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update note"
        )

    if note is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Note not found")
    return note


@router.delete("/{note_id}", response_model=MessageResponse)
async def delete_note(note_id: int, current_user: CurrentUser):
    try:
        deleted = UserNotesRepository.delete_note(note_id, current_user["id"])
    except Exception as e:
        logger.error(f"Error deleting note {note_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete note"
        )

    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Note not found")
    return {"message": "Note deleted successfully"}
