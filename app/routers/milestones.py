# =============================================================================
# app/routers/milestones.py - Milestone Endpoints
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path

from app.auth import get_current_user, AuthUser
from core.models.milestone import Milestone, MilestoneCompletion, MilestoneCreate, MilestoneUpdate
from core.services.milestone_service import MilestoneService
from core.services.project_service import ProjectService

router = APIRouter()


@router.get("/projects/{project_id}/milestones", response_model=list[Milestone])
async def get_project_milestones(
    project_id: Annotated[UUID, Path(description="Project UUID")],
):
    """A project's roadmap: open milestones by target date, then completed ones."""
    ProjectService.get_project_by_id(project_id)
    return MilestoneService.get_project_milestones(project_id)


@router.post("/projects/{project_id}/milestones", response_model=Milestone, status_code=201)
async def create_milestone(
    project_id: Annotated[UUID, Path(description="Project UUID")],
    request: MilestoneCreate,
    user: AuthUser = Depends(get_current_user),
):
    """Add a milestone. Creator only."""
    return MilestoneService.create_milestone(project_id, user.id, request)


@router.patch("/milestones/{milestone_id}", response_model=Milestone)
async def update_milestone(
    milestone_id: Annotated[UUID, Path(description="Milestone UUID")],
    request: MilestoneUpdate,
    user: AuthUser = Depends(get_current_user),
):
    """Edit a milestone. Creator only."""
    return MilestoneService.update_milestone(milestone_id, user.id, request)


@router.post("/milestones/{milestone_id}/complete", response_model=Milestone)
async def complete_milestone(
    milestone_id: Annotated[UUID, Path(description="Milestone UUID")],
    request: MilestoneCompletion | None = None,
    user: AuthUser = Depends(get_current_user),
):
    """
    Mark a milestone done.

    Send {"is_completed": false} to reopen it.
    """
    is_completed = request.is_completed if request else True
    return MilestoneService.complete_milestone(milestone_id, user.id, is_completed)


@router.delete("/milestones/{milestone_id}")
async def delete_milestone(
    milestone_id: Annotated[UUID, Path(description="Milestone UUID")],
    user: AuthUser = Depends(get_current_user),
):
    """Remove a milestone. Creator only."""
    deleted = MilestoneService.delete_milestone(milestone_id, user.id)

    return {
        "milestone_id": str(milestone_id),
        "deleted": deleted,
        "message": "Milestone deleted successfully",
    }
