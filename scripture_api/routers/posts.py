"""Routes for community posts."""
from typing import Annotated, List

from fastapi import APIRouter, Depends, HTTPException, status

from scripture_api.auth import get_current_user_dependency
from scripture_api.models.schemas import MessageResponse, Post, PostWrite
from scripture_api.repositories.posts import PostsRepository
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/posts", tags=["posts"])

CurrentUser = Annotated[dict, Depends(get_current_user_dependency)]


def _can_modify(post: dict, user: dict) -> bool:
    return post.get("author_id") == user["id"] or user.get("role") == "admin"


def _get_post_or_404(post_id: int) -> dict:
    post = PostsRepository.get_post(post_id)
    if post is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    return post


@router.get("", response_model=List[Post])
async def list_posts():
    try:
        return PostsRepository.list_posts()
    except Exception as e:
        logger.error(f"Error fetching posts: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch posts"
        )


@router.get("/latest", response_model=Post)
async def latest_post():
    try:
        posts = PostsRepository.list_posts(limit=1)
    except Exception as e:
        logger.error(f"Error fetching latest post: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch latest post"
        )

    if not posts:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No posts found")
    return posts[0]


@router.get("/{post_id}", response_model=Post)
async def get_post(post_id: int):
    return _get_post_or_404(post_id)


@router.post("", response_model=Post, status_code=status.HTTP_201_CREATED)
async def create_post(data: PostWrite, current_user: CurrentUser):
    try:
        post = PostsRepository.create_post(current_user["id"], data.title, data.content)
        logger.info(f"User {current_user['id']} created post {post['id']}")
        return post
    except Exception as e:
        logger.error(f"Error creating post: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create post"
        )


@router.put("/{post_id}", response_model=Post)
async def update_post(post_id: int, data: PostWrite, current_user: CurrentUser):
    """Only the author or an admin may edit a post."""
    post = _get_post_or_404(post_id)
    if not _can_modify(post, current_user):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to update this post"
        )
    return PostsRepository.update_post(post_id, data.title, data.content)


@router.delete("/{post_id}", response_model=MessageResponse)
async def delete_post(post_id: int, current_user: CurrentUser):
    post = _get_post_or_404(post_id)
    if not _can_modify(post, current_user):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to delete this post"
        )

    PostsRepository.delete_post(post_id)
    logger.info(f"User {current_user['id']} deleted post {post_id}")
    return {"message": "Post deleted successfully"}
