# =============================================================================
# core/services/support_service.py - Support Message Business Logic
# =============================================================================
# Supporters send words of encouragement to a project. Each message earns the
# sender karma. Anonymous messages hide the sender on the project page.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from app.config import settings
from lib.supabase_client import SupabaseClient
from lib.utils import normalize_uuid
from core.models.karma import KarmaResponse
from core.models.support import SupportActionType, SupportMessageCreate, SupportMessagePublic
from core.services.builder_service import BuilderService
from core.services.project_service import ProjectService
from core.services.support_action_service import SupportActionService

logger = logging.getLogger(__name__)

MESSAGES_TABLE = "support_messages"


class SupportService:
    """Service for support messages."""

    @staticmethod
    def send_support_message(
        user_id: UUID | str,
        data: SupportMessageCreate,
    ) -> dict[str, Any]:
        """
        Send a message of support and award the sender karma.

        Returns:
            Dict with the stored message, the sender's karma summary and the
            points earned

        Raises:
            BuilderNotFoundError: If the sender has no profile
            ProjectNotFoundError: If the project doesn't exist
        """
        sender = BuilderService.require_builder_profile(user_id)
        project = ProjectService.get_project_by_id(data.project_id)

        row = {
            "project_id": str(project["id"]),
            "sender_id": str(sender["id"]),
            "message": data.message,
            "is_anonymous": data.is_anonymous,
        }

        try:
            message = SupabaseClient.insert_row(MESSAGES_TABLE, row)
        except Exception as e:
            logger.error(f"Failed to send support message: {e}")
            raise

        logger.info(
            f"Support message {message['id']} sent to project {project['id']} "
            f"(anonymous={data.is_anonymous})"
        )

        action, karma = SupportActionService.log_support_action(
            user_id,
            SupportActionType.MESSAGE,
            project_id=project["id"],
            target_id=message["id"],
        )

        return {
            "message": message,
            "karma": KarmaResponse.from_points(karma.get("total_points", 0)),
            "karma_earned": action.get("karma_earned", 0),
        }

    @staticmethod
    def get_project_support_messages(
        project_id: UUID | str,
        limit: int | None = None,
    ) -> list[SupportMessagePublic]:
        """
        Newest support messages for a project page, senders masked when anonymous.

        Args:
            project_id: The project
            limit: Number of messages (defaults to the preview limit)
        """
        client = SupabaseClient.get_client()
        limit = limit or settings.SUPPORT_MESSAGES_PREVIEW_LIMIT

        try:
            response = (
                client.table(MESSAGES_TABLE)
                .select("*")
                .eq("project_id", normalize_uuid(project_id))
                .order("created_at", desc=True)
                .limit(limit)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to fetch support messages for project {project_id}: {e}")
            raise

        rows = response.data or []
        # Never look up senders of anonymous messages
        senders = SupabaseClient.fetch_many(
            "builders", "id", (r["sender_id"] for r in rows if not r.get("is_anonymous"))
        )
        by_id = {str(s["id"]): s for s in senders}

        return [
            SupportMessagePublic.from_row(row, by_id.get(str(row.get("sender_id"))))
            for row in rows
        ]
