"""API routes for the book and chapter listings."""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from scripture_api.models.schemas import BookEntry, ChapterEntry
from scripture_api.services.bible_service import BibleService, get_bible_service

router = APIRouter(prefix="/api/books", tags=["books"])


@router.get("/", response_model=List[BookEntry])
async def list_books(service: BibleService = Depends(get_bible_service)):
    """Books present in the database, in canonical order."""
    return service.list_books()


@router.get("/chapters", response_model=List[ChapterEntry])
async def list_chapters(
    book: Optional[str] = Query(default=None),
    service: BibleService = Depends(get_bible_service),
):
    if not book or not book.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Book parameter is required")
    return service.list_chapters(book)
