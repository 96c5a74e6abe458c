"""API routes for chapter reading, verse of the day and verse search."""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from scripture_api.config import get_settings
from scripture_api.models.schemas import Verse
from scripture_api.services.bible_service import BibleService, get_bible_service
from scripture_api.utils.exceptions import ValidationError

router = APIRouter(prefix="/api/verses", tags=["verses"])

FALLBACK_HEADER = "X-Version-Fallback"
DEFAULT_VERSION = get_settings().default_version_code


def _mark_fallback(response: Response, fell_back: bool) -> None:
    if fell_back:
        response.headers[FALLBACK_HEADER] = "true"


@router.get("/", response_model=List[Verse])
async def chapter_verses(
    response: Response,
    book: Optional[str] = Query(default=None),
    chapter: Optional[int] = Query(default=None, ge=1),
    version: str = Query(default=DEFAULT_VERSION),
    service: BibleService = Depends(get_bible_service),
):
    """Verses of one chapter in the requested version, else in the default version."""
    if not book or chapter is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Book and chapter are required")

    try:
        verses, fell_back = service.chapter_verses(book, chapter, version)
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.detail) from exc

    _mark_fallback(response, fell_back)
    return verses


@router.get("/verse-of-day", response_model=Verse)
async def verse_of_day(
    response: Response,
    version: str = Query(default=DEFAULT_VERSION),
    service: BibleService = Depends(get_bible_service),
):
    verse, fell_back = service.verse_of_day(version)
    if verse is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No verses found")

    _mark_fallback(response, fell_back)
    return verse


@router.get("/search", response_model=List[Verse])
async def search_verses(
    response: Response,
    q: Optional[str] = Query(default=None, description="Text, book name or number to look for"),
    version: str = Query(default=DEFAULT_VERSION),
    service: BibleService = Depends(get_bible_service),
):
    """Up to 100 matching verses; searches every version when the requested one has no match."""
    verses, fell_back = service.search(q or "", version)
    _mark_fallback(response, fell_back)
    return verses
