"""API routes for verse cross references."""
from fastapi import APIRouter, Depends, HTTPException, Path, status

from scripture_api.models.schemas import CrossReferenceResponse, CrossReferenceStatsResponse
from scripture_api.services.cross_reference_service import (
    CrossReferenceService,
    get_cross_reference_service,
)
from scripture_api.utils.exceptions import ValidationError

router = APIRouter(prefix="/api/cross-references", tags=["cross-references"])


@router.get("/stats", response_model=CrossReferenceStatsResponse)
async def cross_reference_stats(service: CrossReferenceService = Depends(get_cross_reference_service)):
    """Totals, unique endpoints and the ten books with the most outgoing references."""
    return {"success": True, **service.get_statistics()}


@router.get("/{book}/{chapter}/{verse}", response_model=CrossReferenceResponse)
async def cross_references_for_verse(
    book: str,
    chapter: int = Path(..., ge=1),
    verse: int = Path(..., ge=1),
    service: CrossReferenceService = Depends(get_cross_reference_service),
):
    try:
        references = service.get_for_verse(book, chapter, verse)
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.detail) from exc

    return {"success": True, "cross_references": references}
