# =============================================================================
# app/routers/builders.py - Builder Profile Endpoints
# =============================================================================
# The signed-in user's own profile (/builders/me) and public creator pages.
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path

from app.auth import get_current_user, AuthUser
from core.models.builder import Builder, BuilderProfileUpdate, OnboardingRequest
from core.models.project import Project
from core.services.builder_service import BuilderService
from core.services.project_service import ProjectService

router = APIRouter()


@router.get("/builders/me", response_model=Builder)
async def get_my_profile(user: AuthUser = Depends(get_current_user)):
    """Get the signed-in user's builder profile."""
    return BuilderService.require_builder_profile(user.id)


@router.patch("/builders/me", response_model=Builder)
async def update_my_profile(
    request: BuilderProfileUpdate,
    user: AuthUser = Depends(get_current_user),
):
    """
    Save the "Edit Profile" form.

    All editable fields are written; blank optional fields are cleared and a
    leading @ is removed from the Twitter handle.
    """
    return BuilderService.update_builder_profile_full(user.id, request)


@router.post("/builders/me/onboarding", response_model=Builder)
async def complete_onboarding(
    request: OnboardingRequest,
    user: AuthUser = Depends(get_current_user),
):
    """Record whether the user is here to share projects or to support."""
    return BuilderService.complete_onboarding(user.id, request.is_creator)


@router.get("/builders/{builder_id}", response_model=Builder)
async def get_builder(
    builder_id: Annotated[UUID, Path(description="Builder profile UUID")],
):
    """Public creator profile."""
    return BuilderService.require_builder(builder_id)


@router.get("/builders/{builder_id}/projects", response_model=list[Project])
async def get_builder_projects(
    builder_id: Annotated[UUID, Path(description="Builder profile UUID")],
):
    """A creator's projects, newest first."""
    BuilderService.require_builder(builder_id)
    return ProjectService.get_projects_by_builder(builder_id)
