# =============================================================================
# app/routers/follows.py - Follow Endpoints
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path

from app.auth import get_current_user, AuthUser
from core.models.follow import FollowState
from core.models.project import Project
from core.services.follow_service import FollowService

router = APIRouter()


@router.post("/projects/{project_id}/follow", response_model=FollowState)
async def toggle_follow(
    project_id: Annotated[UUID, Path(description="Project UUID")],
    user: AuthUser = Depends(get_current_user),
):
    """
    Follow or unfollow a project.

    Following puts the project's updates in your feed. The first follow of a
    project earns karma; unfollowing keeps it.
    """
    return FollowService.toggle_follow(user.id, project_id)


@router.get("/projects/{project_id}/follow", response_model=FollowState)
async def get_follow_state(
    project_id: Annotated[UUID, Path(description="Project UUID")],
    user: AuthUser = Depends(get_current_user),
):
    """Whether you follow the project, and its follower count."""
    return FollowService.get_follow_state(user.id, project_id)


@router.get("/follows", response_model=list[Project])
async def list_followed_projects(user: AuthUser = Depends(get_current_user)):
    """Projects you follow, most recently followed first."""
    return FollowService.get_followed_projects(user.id)
