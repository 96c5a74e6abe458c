"""Word meaning lookup route."""
from datetime import datetime, timezone
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from scripture_api.auth import get_current_user_dependency
from scripture_api.config import get_settings
from scripture_api.models.schemas import WordMeaningRequest, WordMeaningResponse, WordMeaningStatus
from scripture_api.services.word_meaning_service import WordMeaningService, get_word_meaning_service
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/word-meaning", tags=["word-meaning"])

CurrentUser = Annotated[dict, Depends(get_current_user_dependency)]


@router.get("/test", response_model=WordMeaningStatus)
async def word_meaning_status():
    return {
        "message": "Word meaning route is working",
        "google_search_available": get_settings().web_search_configured,
        "timestamp": datetime.now(timezone.utc),
    }


@router.post("", response_model=WordMeaningResponse)
async def word_meaning(
    data: WordMeaningRequest,
    current_user: CurrentUser,
    service: WordMeaningService = Depends(get_word_meaning_service),
):
    """Analyse a word; unexpected failures return a reduced fallback payload instead of an error."""
    if not data.word or not data.word.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Word is required")

    try:
        return await service.analyze(data.word, data.context)
    except Exception as e:
        logger.error(f"Error analysing word '{data.word}': {e}")
        return service.fallback(data.word)
