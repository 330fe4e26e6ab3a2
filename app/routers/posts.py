# =============================================================================
# app/routers/posts.py - Post (Project Update) Endpoints
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query

from app.auth import get_current_user, AuthUser
from app.config import settings
from core.models.follow import LikeState
from core.models.post import FeedPage, Post, PostCreate
from core.services.like_service import LikeService
from core.services.post_service import PostService
from core.services.project_service import ProjectService

router = APIRouter()


@router.post("/posts", response_model=Post, status_code=201)
async def create_post(
    request: PostCreate,
    user: AuthUser = Depends(get_current_user),
):
    """Post an update on one of your projects."""
    return PostService.create_post(user.id, request)


@router.get("/posts/feed", response_model=FeedPage)
async def get_feed(
    user: AuthUser = Depends(get_current_user),
    page: Annotated[int, Query(ge=1, description="Page number")] = 1,
    page_size: Annotated[int | None, Query(ge=1, le=100, description="Items per page")] = None,
):
    """
    Home feed: updates from the projects you follow, newest first.

    Empty when you don't follow anything yet.
    """
    page_size = page_size or settings.DEFAULT_PAGE_SIZE
    posts = PostService.get_feed_posts(user.id, page=page, page_size=page_size)

    return FeedPage(posts=posts, page=page, page_size=page_size)


@router.get("/projects/{project_id}/posts", response_model=list[Post])
async def get_project_posts(
    project_id: Annotated[UUID, Path(description="Project UUID")],
    limit: Annotated[int, Query(ge=1, le=100, description="Max posts")] = 50,
):
    """A project's updates, newest first."""
    ProjectService.get_project_by_id(project_id)
    return PostService.get_project_posts(project_id, limit=limit)


@router.delete("/posts/{post_id}")
async def delete_post(
    post_id: Annotated[UUID, Path(description="Post UUID")],
    user: AuthUser = Depends(get_current_user),
):
    """Delete an update. Creator only."""
    deleted = PostService.delete_post(post_id, user.id)

    return {
        "post_id": str(post_id),
        "deleted": deleted,
        "message": "Post deleted successfully",
    }


@router.post("/posts/{post_id}/like", response_model=LikeState)
async def toggle_like(
    post_id: Annotated[UUID, Path(description="Post UUID")],
    user: AuthUser = Depends(get_current_user),
):
    """
    Like or unlike a post.

    The first like of a post earns karma; unliking keeps it.
    """
    return LikeService.toggle_like(user.id, post_id)


@router.get("/posts/{post_id}/like", response_model=LikeState)
async def get_like_state(
    post_id: Annotated[UUID, Path(description="Post UUID")],
    user: AuthUser = Depends(get_current_user),
):
    """Whether you liked the post, and its like count."""
    return LikeService.get_like_state(user.id, post_id)
