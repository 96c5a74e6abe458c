"""API routes for Bible versions and version-scoped reading."""
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from scripture_api.models.schemas import BibleVersion, ParallelVerseText, Verse
from scripture_api.services.bible_service import BibleService, get_bible_service
from scripture_api.utils.exceptions import ValidationError

router = APIRouter(prefix="/api/bible-versions", tags=["bible-versions"])


@router.get("/", response_model=List[BibleVersion])
async def list_versions(
    language_code: Optional[str] = Query(default=None, description="ISO language code, e.g. 'te'"),
    service: BibleService = Depends(get_bible_service),
):
    """Active versions that have verse data, ordered by language then name."""
    return service.list_versions(language_code)


@router.get("/parallel/{book}/{chapter}", response_model=Dict[int, Dict[str, ParallelVerseText]])
async def parallel_verses(
    book: str,
    chapter: int,
    versions: Optional[str] = Query(default=None, description="Comma separated version codes"),
    service: BibleService = Depends(get_bible_service),
):
    if not versions or not versions.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Version codes are required")

    try:
        return service.parallel_verses(book, chapter, versions.split(","))
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.detail) from exc


@router.get("/{version_code}/books", response_model=List[str])
async def version_books(version_code: str, service: BibleService = Depends(get_bible_service)):
    return service.version_books(version_code)


@router.get("/{version_code}/books/{book}/chapters", response_model=List[int])
async def version_chapters(version_code: str, book: str, service: BibleService = Depends(get_bible_service)):
    try:
        return service.version_chapters(version_code, book)
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.detail) from exc


@router.get("/{version_code}/verses", response_model=List[Verse])
async def version_verses(
    version_code: str,
    book: Optional[str] = Query(default=None),
    chapter: Optional[int] = Query(default=None, ge=1),
    service: BibleService = Depends(get_bible_service),
):
    if not book or chapter is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Book and chapter are required")

    return service.version_verses(version_code, book, chapter)
