# =============================================================================
# app/routers/projects.py - Project Endpoints
# =============================================================================
# Discover listing, public project pages (by slug) and creator-only edits.
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query

from app.auth import get_current_user, get_current_user_optional, AuthUser
from app.config import settings
from core.models.project import (
    MoodUpdate,
    Project,
    ProjectCreate,
    ProjectList,
    ProjectPage,
    ProjectSort,
    ProjectUpdate,
)
from core.services.follow_service import FollowService
from core.services.project_service import ProjectService
from lib.slugs import generate_slug, is_valid_slug

router = APIRouter()


@router.get("/projects", response_model=ProjectList)
async def list_projects(
    search: Annotated[str | None, Query(description="Search project titles")] = None,
    sort: Annotated[ProjectSort, Query(description="trending or newest")] = ProjectSort.TRENDING,
    page: Annotated[int, Query(ge=1, description="Page number")] = 1,
    page_size: Annotated[int | None, Query(ge=1, le=100, description="Items per page")] = None,
):
    """
    Discover projects.

    Trending puts the most-followed projects first; newest sorts by creation
    time.
    """
    page_size = page_size or settings.DEFAULT_PAGE_SIZE
    projects, total = ProjectService.list_projects(
        search=search,
        sort=sort,
        page=page,
        page_size=page_size,
    )

    return ProjectList(
        projects=projects,
        total=total,
        page=page,
        page_size=page_size,
    )


@router.post("/projects", response_model=Project, status_code=201)
async def create_project(
    request: ProjectCreate,
    user: AuthUser = Depends(get_current_user),
):
    """
    Create a project.

    The public URL slug is generated from the title when not given. Creating
    a project makes the user a creator.
    """
    return ProjectService.create_project(user.id, request)


@router.get("/projects/slug-available")
async def check_slug_available(
    slug: Annotated[str | None, Query(description="Slug to check")] = None,
    title: Annotated[str | None, Query(description="Title to generate a slug from")] = None,
    exclude_project_id: Annotated[UUID | None, Query(description="Project being edited")] = None,
):
    """
    Check whether a public URL is free.

    Used by the create/edit forms as the user types. Pass either a slug or a
    title (the slug is then generated the same way create does).
    """
    candidate = slug if slug is not None else generate_slug(title or "")
    valid = is_valid_slug(candidate)

    return {
        "slug": candidate,
        "valid": valid,
        "available": valid and not ProjectService.check_slug_exists(candidate, exclude_project_id),
    }


@router.get("/projects/{slug}", response_model=ProjectPage)
async def get_project(
    slug: Annotated[str, Path(description="Public project slug")],
    viewer: AuthUser | None = Depends(get_current_user_optional),
):
    """
    Public project page. No sign-in needed so projects can be shared.

    Signed-in viewers also get is_following.
    """
    project = ProjectService.get_project(slug)
    if viewer is not None:
        project["is_following"] = FollowService.is_following_project(viewer.id, project["id"])
    return project


@router.patch("/projects/{project_id}", response_model=Project)
async def update_project(
    project_id: Annotated[UUID, Path(description="Project UUID")],
    request: ProjectUpdate,
    user: AuthUser = Depends(get_current_user),
):
    """Edit a project. Creator only."""
    return ProjectService.update_project(project_id, user.id, request)


@router.patch("/projects/{project_id}/mood", response_model=Project)
async def update_project_mood(
    project_id: Annotated[UUID, Path(description="Project UUID")],
    request: MoodUpdate,
    user: AuthUser = Depends(get_current_user),
):
    """Set how the project is going (green / yellow / red) or clear it."""
    return ProjectService.update_project_mood(project_id, user.id, request.mood)


@router.delete("/projects/{project_id}")
async def delete_project(
    project_id: Annotated[UUID, Path(description="Project UUID")],
    user: AuthUser = Depends(get_current_user),
):
    """Delete a project and everything attached to it. Creator only."""
    deleted = ProjectService.delete_project(project_id, user.id)

    return {
        "project_id": str(project_id),
        "deleted": deleted,
        "message": "Project deleted successfully",
    }
