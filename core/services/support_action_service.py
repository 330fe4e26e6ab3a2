# =============================================================================
# core/services/support_action_service.py - Support Action Ledger
# =============================================================================
# Every support gesture is written to support_actions together with the karma
# it earned, then the karma is added. The ledger also answers "has this user
# already been rewarded for following this project / liking this post?".
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from app.config import settings
from lib.supabase_client import SupabaseClient
from lib.utils import normalize_uuid
from core.models.support import SupportActionType
from core.services.karma_service import KarmaService
from core.services.project_service import ProjectService

logger = logging.getLogger(__name__)

ACTIONS_TABLE = "support_actions"


def points_for(action_type: SupportActionType) -> int:
    """Configured karma award for an action type."""
    return {
        SupportActionType.MESSAGE: settings.KARMA_SUPPORT_MESSAGE_POINTS,
        SupportActionType.FOLLOW: settings.KARMA_FOLLOW_POINTS,
        SupportActionType.LIKE: settings.KARMA_LIKE_POINTS,
    }[action_type]


class SupportActionService:
    """Service for recording support actions and awarding their karma."""

    @staticmethod
    def log_support_action(
        user_id: UUID | str,
        action_type: SupportActionType,
        project_id: UUID | str | None = None,
        target_id: UUID | str | None = None,
        points: int | None = None,
    ) -> tuple[dict[str, Any], dict[str, Any]]:
        """
        Record a support action and award its karma.

        Args:
            user_id: The supporter
            action_type: message / follow / like
            project_id: Project the support went to
            target_id: The followed project, liked post or sent message
            points: Override the configured award

        Returns:
            Tuple of (support action row, updated karma row)
        """
        karma_earned = points if points is not None else points_for(action_type)

        data = {
            "user_id": normalize_uuid(user_id),
            "action_type": action_type.value,
            "karma_earned": karma_earned,
        }
        if project_id:
            data["project_id"] = normalize_uuid(project_id)
        if target_id:
            data["target_id"] = normalize_uuid(target_id)

        try:
            action = SupabaseClient.insert_row(ACTIONS_TABLE, data)
        except Exception as e:
            logger.error(f"Failed to log support action: {e}")
            raise

        logger.info(
            f"Logged {action_type.value} support action for user {user_id} "
            f"(+{karma_earned} karma)"
        )

        karma = KarmaService.add_karma(user_id, karma_earned, action=action_type.value)
        return action, karma

    @staticmethod
    def has_support_action(
        user_id: UUID | str,
        action_type: SupportActionType,
        target_id: UUID | str,
    ) -> bool:
        """Check whether the user was already rewarded for this action on this target."""
        client = SupabaseClient.get_client()

        response = (
            client.table(ACTIONS_TABLE)
            .select("id")
            .eq("user_id", normalize_uuid(user_id))
            .eq("action_type", action_type.value)
            .eq("target_id", normalize_uuid(target_id))
            .limit(1)
            .execute()
        )
        return bool(response.data)

    @staticmethod
    def list_user_support_actions(
        user_id: UUID | str,
        limit: int = 20,
    ) -> list[dict[str, Any]]:
        """A user's support history, newest first."""
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(ACTIONS_TABLE)
                .select("*")
                .eq("user_id", normalize_uuid(user_id))
                .order("created_at", desc=True)
                .limit(limit)
                .execute()
            )
            return response.data or []

        except Exception as e:
            logger.error(f"Failed to list support actions: {e}")
            raise

    @staticmethod
    def list_supported_projects(user_id: UUID | str) -> list[dict[str, Any]]:
        """
        Projects the user has supported in any way, most recently supported first.

        Backs the "Projects you support" list on the My Support tab.
        """
        client = SupabaseClient.get_client()
        response = (
            client.table(ACTIONS_TABLE)
            .select("project_id, created_at")
            .eq("user_id", normalize_uuid(user_id))
            .order("created_at", desc=True)
            .execute()
        )

        ordered_ids: list[str] = []
        for row in response.data or []:
            project_id = row.get("project_id")
            if project_id and project_id not in ordered_ids:
                ordered_ids.append(project_id)

        if not ordered_ids:
            return []

        projects = SupabaseClient.fetch_many("projects", "id", ordered_ids)
        by_id = {str(p["id"]): p for p in projects}
        # Deleted projects drop out of the list
        ordered = [by_id[pid] for pid in ordered_ids if pid in by_id]
        return ProjectService.attach_builders(ordered)
