# =============================================================================
# core/services/follow_service.py - Project Follow Business Logic
# =============================================================================
# Following a project puts its updates in the user's feed. The first follow
# of a project earns karma; unfollowing never takes it back.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from lib.supabase_client import SupabaseClient
from lib.utils import normalize_uuid
from core.models.support import SupportActionType
from core.services.project_service import ProjectService
from core.services.support_action_service import SupportActionService

logger = logging.getLogger(__name__)

FOLLOWS_TABLE = "follows"

# Postgres unique_violation
UNIQUE_VIOLATION_CODE = "23505"


class FollowService:
    """Service for following projects."""

    @staticmethod
    def is_following_project(user_id: UUID | str, project_id: UUID | str) -> bool:
        """Check whether the user follows the project."""
        client = SupabaseClient.get_client()

        response = (
            client.table(FOLLOWS_TABLE)
            .select("id")
            .eq("user_id", normalize_uuid(user_id))
            .eq("project_id", normalize_uuid(project_id))
            .limit(1)
            .execute()
        )
        return bool(response.data)

    @staticmethod
    def _sync_follower_count(project_id: UUID | str) -> int:
        """Recount followers and store the result on the project."""
        count = SupabaseClient.count_rows(FOLLOWS_TABLE, "project_id", project_id)
        SupabaseClient.update_rows("projects", "id", project_id, {"follower_count": count})
        return count

    @staticmethod
    def _state(project_id: UUID | str, is_following: bool, follower_count: int) -> dict[str, Any]:
        return {
            "project_id": normalize_uuid(project_id),
            "is_following": is_following,
            "follower_count": follower_count,
        }

    @staticmethod
    def get_follow_state(user_id: UUID | str, project_id: UUID | str) -> dict[str, Any]:
        """Current follow state for the project page button."""
        project = ProjectService.get_project_by_id(project_id)
        return FollowService._state(
            project_id,
            FollowService.is_following_project(user_id, project_id),
            project.get("follower_count") or 0,
        )

    @staticmethod
    def follow_project(user_id: UUID | str, project_id: UUID | str) -> dict[str, Any]:
        """
        Follow a project.

        Following twice is a no-op. Karma is only awarded the first time the
        user ever follows this project.

        Raises:
            ProjectNotFoundError: If the project doesn't exist
        """
        project = ProjectService.get_project_by_id(project_id)

        if FollowService.is_following_project(user_id, project_id):
            return FollowService._state(project_id, True, project.get("follower_count") or 0)

        try:
            SupabaseClient.insert_row(FOLLOWS_TABLE, {
                "user_id": normalize_uuid(user_id),
                "project_id": normalize_uuid(project_id),
            })
        except Exception as e:
            # A concurrent request already created the follow
            if UNIQUE_VIOLATION_CODE not in str(e):
                logger.error(f"Failed to follow project {project_id}: {e}")
                raise
            return FollowService._state(
                project_id, True, FollowService._sync_follower_count(project_id)
            )

        count = FollowService._sync_follower_count(project_id)
        logger.info(f"User {user_id} followed project {project_id} ({count} followers)")

        if not SupportActionService.has_support_action(
            user_id, SupportActionType.FOLLOW, project_id
        ):
            SupportActionService.log_support_action(
                user_id,
                SupportActionType.FOLLOW,
                project_id=project_id,
                target_id=project_id,
            )

        return FollowService._state(project_id, True, count)

    @staticmethod
    def unfollow_project(user_id: UUID | str, project_id: UUID | str) -> dict[str, Any]:
        """
        Unfollow a project. Karma earned by the follow is kept.

        Raises:
            ProjectNotFoundError: If the project doesn't exist
        """
        ProjectService.get_project_by_id(project_id)

        deleted = SupabaseClient.delete_rows(FOLLOWS_TABLE, {
            "user_id": user_id,
            "project_id": project_id,
        })
        count = FollowService._sync_follower_count(project_id)

        if deleted:
            logger.info(f"User {user_id} unfollowed project {project_id} ({count} followers)")

        return FollowService._state(project_id, False, count)

    @staticmethod
    def toggle_follow(user_id: UUID | str, project_id: UUID | str) -> dict[str, Any]:
        """Follow or unfollow depending on the current state."""
        if FollowService.is_following_project(user_id, project_id):
            return FollowService.unfollow_project(user_id, project_id)
        return FollowService.follow_project(user_id, project_id)

    @staticmethod
    def get_followed_projects(user_id: UUID | str) -> list[dict[str, Any]]:
        """Projects the user follows, most recently followed first."""
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(FOLLOWS_TABLE)
                .select("project_id")
                .eq("user_id", normalize_uuid(user_id))
                .order("created_at", desc=True)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to list follows for user {user_id}: {e}")
            raise

        ordered_ids = [row["project_id"] for row in response.data or []]
        projects = SupabaseClient.fetch_many("projects", "id", ordered_ids)
        by_id = {str(p["id"]): p for p in projects}
        return ProjectService.attach_builders(
            [by_id[str(pid)] for pid in ordered_ids if str(pid) in by_id]
        )
