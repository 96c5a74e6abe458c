"""Routes for likes and comments on community posts."""
from typing import Annotated, List

from fastapi import APIRouter, Depends, HTTPException, status

from scripture_api.auth import get_current_user_dependency
from scripture_api.models.schemas import Comment, CommentCreate, LikeStatus, LikeToggleResponse, PostStats
from scripture_api.repositories.posts import PostInteractionsRepository
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/post-interactions", tags=["post-interactions"])

CurrentUser = Annotated[dict, Depends(get_current_user_dependency)]


@router.get("/{post_id}/stats", response_model=PostStats)
async def post_stats(post_id: int):
    try:
        return PostInteractionsRepository.get_stats(post_id)
    except Exception as e:
        logger.error(f"Error fetching stats for post {post_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch post stats"
        )


@router.post("/{post_id}/like", response_model=LikeToggleResponse)
async def toggle_like(post_id: int, current_user: CurrentUser):
    try:
        liked = PostInteractionsRepository.toggle_like(post_id, current_user["id"])
    except Exception as e:
        logger.error(f"Error toggling like on post {post_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to toggle like"
        )
    return {"liked": liked, "message": "Post liked" if liked else "Post unliked"}


@router.get("/{post_id}/like-status", response_model=LikeStatus)
async def like_status(post_id: int, current_user: CurrentUser):
    return {"liked": PostInteractionsRepository.has_liked(post_id, current_user["id"])}


@router.get("/{post_id}/comments", response_model=List[Comment])
async def list_comments(post_id: int):
    try:
        return PostInteractionsRepository.list_comments(post_id)
    except Exception as e:
        logger.error(f"Error fetching comments for post {post_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch comments"
        )


@router.post("/{post_id}/comments", response_model=Comment, status_code=status.HTTP_201_CREATED)
async def add_comment(post_id: int, data: CommentCreate, current_user: CurrentUser):
    comment = data.comment.strip()
    if not comment:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Comment cannot be empty")

    try:
        return PostInteractionsRepository.add_comment(post_id, current_user["id"], comment)
    except Exception as e:
        logger.error(f"Error adding comment to post {post_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to add comment"
        )
