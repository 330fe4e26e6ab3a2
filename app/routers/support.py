# =============================================================================
# app/routers/support.py - Support Endpoints
# =============================================================================
# Sending encouragement, reading it on project pages, and the "My Support" tab.
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query

from app.auth import get_current_user, AuthUser
from core.models.project import Project
from core.models.support import (
    SupportAction,
    SupportMessageCreate,
    SupportMessagePublic,
    SupportMessageResult,
)
from core.services.project_service import ProjectService
from core.services.support_action_service import SupportActionService
from core.services.support_service import SupportService

router = APIRouter()


@router.post("/support/messages", response_model=SupportMessageResult, status_code=201)
async def send_support_message(
    request: SupportMessageCreate,
    user: AuthUser = Depends(get_current_user),
):
    """
    Send a message of support to a project.

    Every message earns the sender karma. The response carries the new
    karma total so the app can show progress right away.
    """
    return SupportService.send_support_message(user.id, request)


@router.get("/projects/{project_id}/support-messages", response_model=list[SupportMessagePublic])
async def get_project_support_messages(
    project_id: Annotated[UUID, Path(description="Project UUID")],
    limit: Annotated[int | None, Query(ge=1, le=100, description="Max messages")] = None,
):
    """Newest support messages. Anonymous senders are hidden."""
    ProjectService.get_project_by_id(project_id)
    return SupportService.get_project_support_messages(project_id, limit=limit)


@router.get("/support/actions", response_model=list[SupportAction])
async def list_my_support_actions(
    user: AuthUser = Depends(get_current_user),
    limit: Annotated[int, Query(ge=1, le=100, description="Max actions")] = 20,
):
    """Your support history, newest first."""
    return SupportActionService.list_user_support_actions(user.id, limit=limit)


@router.get("/support/projects", response_model=list[Project])
async def list_supported_projects(user: AuthUser = Depends(get_current_user)):
    """Projects you have supported, most recent first."""
    return SupportActionService.list_supported_projects(user.id)
