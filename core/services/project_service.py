# =============================================================================
# core/services/project_service.py - Project Business Logic
# =============================================================================
# Handles project CRUD, public slugs and discover listings.
# Mutations are restricted to the builder who created the project.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from lib.slugs import generate_slug, is_valid_slug
from lib.supabase_client import SupabaseClient
from lib.utils import normalize_uuid, utc_now_iso
from core.models.builder import BuilderUpdate
from core.models.project import ProjectCreate, ProjectMood, ProjectSort, ProjectUpdate
from core.services.builder_service import BuilderService
from app.exceptions import (
    InvalidSlugError,
    NotProjectOwnerError,
    ProjectNotFoundError,
    SlugTakenError,
)

logger = logging.getLogger(__name__)

PROJECTS_TABLE = "projects"

# Columns that can't be null in the projects table
_REQUIRED_COLUMNS = ("title", "tagline", "public_slug")


class ProjectService:
    """
    Service for project management operations.

    Provides a clean interface between API routes and database.
    """

    # -------------------------------------------------------------------------
    # Slugs
    # -------------------------------------------------------------------------

    @staticmethod
    def check_slug_exists(
        slug: str,
        exclude_project_id: UUID | str | None = None,
    ) -> bool:
        """
        Check whether a public slug is already used.

        Args:
            slug: Slug to check
            exclude_project_id: Ignore this project (when editing its own slug)
        """
        client = SupabaseClient.get_client()

        response = (
            client.table(PROJECTS_TABLE)
            .select("id")
            .eq("public_slug", slug)
            .execute()
        )

        exclude = normalize_uuid(exclude_project_id) if exclude_project_id else None
        return any(str(row["id"]) != exclude for row in response.data or [])

    @staticmethod
    def _claim_slug(slug: str | None, exclude_project_id: UUID | str | None = None) -> str:
        if not slug or not is_valid_slug(slug):
            raise InvalidSlugError(slug or "")
        if ProjectService.check_slug_exists(slug, exclude_project_id):
            raise SlugTakenError(slug)
        return slug

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    @staticmethod
    def attach_builders(projects: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """Attach each project's creator card under "builder"."""
        builders = BuilderService.builders_by_id(p.get("builder_id") for p in projects)
        for project in projects:
            project["builder"] = builders.get(str(project.get("builder_id")))
        return projects

    @staticmethod
    def get_project(slug: str) -> dict[str, Any]:
        """
        Get a project by public slug, with its creator attached.

        Raises:
            ProjectNotFoundError: If no project has this slug
        """
        project = SupabaseClient.fetch_one(PROJECTS_TABLE, "public_slug", slug)
        if not project:
            raise ProjectNotFoundError(slug)
        return ProjectService.attach_builders([project])[0]

    @staticmethod
    def get_project_by_id(project_id: UUID | str) -> dict[str, Any]:
        """
        Get a project by ID, with its creator attached.

        Raises:
            ProjectNotFoundError: If the project doesn't exist
        """
        project = SupabaseClient.fetch_one(PROJECTS_TABLE, "id", project_id)
        if not project:
            raise ProjectNotFoundError(str(project_id))
        return ProjectService.attach_builders([project])[0]

    @staticmethod
    def get_projects_by_builder(builder_id: UUID | str) -> list[dict[str, Any]]:
        """A creator's projects, newest first."""
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(PROJECTS_TABLE)
                .select("*")
                .eq("builder_id", normalize_uuid(builder_id))
                .order("created_at", desc=True)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to list projects for builder {builder_id}: {e}")
            raise

        return ProjectService.attach_builders(response.data or [])

    @staticmethod
    def list_projects(
        search: str | None = None,
        sort: ProjectSort = ProjectSort.TRENDING,
        page: int = 1,
        page_size: int = 20,
    ) -> tuple[list[dict[str, Any]], int]:
        """
        Discover listing with optional title search and pagination.

        Args:
            search: Case-insensitive title substring
            sort: "trending" (most followers first) or "newest"
            page: Page number (1-indexed)
            page_size: Items per page

        Returns:
            Tuple of (projects list, total count)
        """
        client = SupabaseClient.get_client()

        query = client.table(PROJECTS_TABLE).select("*", count="exact")

        if search and search.strip():
            query = query.ilike("title", f"%{search.strip()}%")

        if sort == ProjectSort.TRENDING:
            query = query.order("follower_count", desc=True).order("created_at", desc=True)
        else:
            query = query.order("created_at", desc=True)

        offset = (page - 1) * page_size
        query = query.range(offset, offset + page_size - 1)

        try:
            response = query.execute()
        except Exception as e:
            logger.error(f"Failed to list projects: {e}")
            raise

        projects = ProjectService.attach_builders(response.data or [])
        return projects, response.count or 0

    # -------------------------------------------------------------------------
    # Ownership
    # -------------------------------------------------------------------------

    @staticmethod
    def require_owned_project(
        project_id: UUID | str,
        user_id: UUID | str,
    ) -> dict[str, Any]:
        """
        Get a project the caller created.

        Raises:
            ProjectNotFoundError: If the project doesn't exist
            NotProjectOwnerError: If the caller isn't its creator
        """
        project = ProjectService.get_project_by_id(project_id)
        builder = BuilderService.require_builder_profile(user_id)

        if str(project.get("builder_id")) != str(builder["id"]):
            raise NotProjectOwnerError(str(project_id))
        return project

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    @staticmethod
    def create_project(user_id: UUID | str, data: ProjectCreate) -> dict[str, Any]:
        """
        Create a project for the caller.

        Creating a first project turns a supporter into a creator. The slug
        is generated from the title when none is given.

        Raises:
            BuilderNotFoundError: If the caller has no profile
            InvalidSlugError: If the slug is empty or malformed
            SlugTakenError: If another project uses the slug
        """
        builder = BuilderService.require_builder_profile(user_id)

        if not builder.get("is_creator"):
            builder = BuilderService.update_builder_profile(
                user_id, BuilderUpdate(is_creator=True)
            )

        slug = ProjectService._claim_slug(data.public_slug or generate_slug(data.title))

        row = {
            "builder_id": str(builder["id"]),
            "title": data.title,
            "tagline": data.tagline,
            "description": data.description,
            "cover_image_url": data.cover_image_url,
            "public_slug": slug,
            "follower_count": 0,
        }

        try:
            project = SupabaseClient.insert_row(PROJECTS_TABLE, row)
        except Exception as e:
            logger.error(f"Failed to create project: {e}")
            raise

        logger.info(f"Created project: {project['id']} ({slug}) for user: {user_id}")
        return ProjectService.attach_builders([project])[0]

    @staticmethod
    def update_project(
        project_id: UUID | str,
        user_id: UUID | str,
        data: ProjectUpdate,
    ) -> dict[str, Any]:
        """
        Update a project the caller created.

        The slug is only re-checked when it actually changes.

        Raises:
            ProjectNotFoundError, NotProjectOwnerError, InvalidSlugError, SlugTakenError
        """
        project = ProjectService.require_owned_project(project_id, user_id)

        updates = data.model_dump(exclude_unset=True, mode="json")
        for column in _REQUIRED_COLUMNS:
            if column in updates and updates[column] is None:
                del updates[column]

        new_slug = updates.get("public_slug")
        if new_slug is not None and new_slug != project.get("public_slug"):
            ProjectService._claim_slug(new_slug, exclude_project_id=project_id)
        elif new_slug is not None:
            del updates["public_slug"]

        if not updates:
            return project

        updates["updated_at"] = utc_now_iso()

        try:
            updated = SupabaseClient.update_rows(PROJECTS_TABLE, "id", project_id, updates)
        except Exception as e:
            logger.error(f"Failed to update project: {e}")
            raise

        logger.info(f"Updated project: {project_id} ({sorted(updates)})")
        if not updated:
            return project
        return ProjectService.attach_builders([updated])[0]

    @staticmethod
    def update_project_mood(
        project_id: UUID | str,
        user_id: UUID | str,
        mood: ProjectMood | None,
    ) -> dict[str, Any]:
        """Set or clear the mood indicator."""
        return ProjectService.update_project(project_id, user_id, ProjectUpdate(mood=mood))

    @staticmethod
    def delete_project(project_id: UUID | str, user_id: UUID | str) -> bool:
        """
        Delete a project the caller created.

        Posts, milestones, follows and support messages are removed by the
        database's ON DELETE CASCADE.
        """
        ProjectService.require_owned_project(project_id, user_id)

        try:
            deleted = SupabaseClient.delete_rows(PROJECTS_TABLE, {"id": project_id})
        except Exception as e:
            logger.error(f"Failed to delete project: {e}")
            raise

        logger.info(f"Deleted project: {project_id}")
        return deleted > 0
