# =============================================================================
# core/services/milestone_service.py - Milestone Business Logic
# =============================================================================

import logging
from datetime import date
from typing import Any
from uuid import UUID

from lib.supabase_client import SupabaseClient
from lib.utils import normalize_uuid, utc_now_iso
from core.models.milestone import MilestoneCreate, MilestoneUpdate
from core.services.project_service import ProjectService
from app.exceptions import MilestoneNotFoundError

logger = logging.getLogger(__name__)

MILESTONES_TABLE = "milestones"


def _milestone_sort_key(milestone: dict[str, Any]) -> tuple:
    # Open milestones first (soonest target, undated last), then completed
    # ones in the order they were completed.
    if milestone.get("is_completed"):
        return (1, str(milestone.get("completed_at") or ""), "")
    target = milestone.get("target_date")
    return (0, "" if target else "~", str(target or ""))


class MilestoneService:
    """Service for project milestones."""

    @staticmethod
    def get_project_milestones(project_id: UUID | str) -> list[dict[str, Any]]:
        """A project's milestones: open ones by target date, then completed ones."""
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(MILESTONES_TABLE)
                .select("*")
                .eq("project_id", normalize_uuid(project_id))
                .order("created_at")
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to fetch milestones for project {project_id}: {e}")
            raise

        return sorted(response.data or [], key=_milestone_sort_key)

    @staticmethod
    def get_milestone(milestone_id: UUID | str) -> dict[str, Any]:
        """
        Get a milestone by ID.

        Raises:
            MilestoneNotFoundError: If the milestone doesn't exist
        """
        milestone = SupabaseClient.fetch_one(MILESTONES_TABLE, "id", milestone_id)
        if not milestone:
            raise MilestoneNotFoundError(str(milestone_id))
        return milestone

    @staticmethod
    def _require_owned_milestone(milestone_id: UUID | str, user_id: UUID | str) -> dict[str, Any]:
        milestone = MilestoneService.get_milestone(milestone_id)
        ProjectService.require_owned_project(milestone["project_id"], user_id)
        return milestone

    @staticmethod
    def create_milestone(
        project_id: UUID | str,
        user_id: UUID | str,
        data: MilestoneCreate,
    ) -> dict[str, Any]:
        """Add a milestone to a project the caller created."""
        ProjectService.require_owned_project(project_id, user_id)

        row = {
            "project_id": normalize_uuid(project_id),
            "title": data.title,
            "description": data.description,
            "target_date": data.target_date.isoformat() if isinstance(data.target_date, date) else None,
            "is_completed": False,
        }

        try:
            milestone = SupabaseClient.insert_row(MILESTONES_TABLE, row)
        except Exception as e:
            logger.error(f"Failed to create milestone: {e}")
            raise

        logger.info(f"Created milestone: {milestone['id']} on project: {project_id}")
        return milestone

    @staticmethod
    def update_milestone(
        milestone_id: UUID | str,
        user_id: UUID | str,
        data: MilestoneUpdate,
    ) -> dict[str, Any]:
        """Edit a milestone's title, description or target date."""
        milestone = MilestoneService._require_owned_milestone(milestone_id, user_id)

        updates = data.model_dump(exclude_unset=True, mode="json")
        if updates.get("title") is None:
            updates.pop("title", None)
        if not updates:
            return milestone

        updated = SupabaseClient.update_rows(MILESTONES_TABLE, "id", milestone_id, updates)
        logger.info(f"Updated milestone: {milestone_id}")
        return updated or {**milestone, **updates}

    @staticmethod
    def complete_milestone(
        milestone_id: UUID | str,
        user_id: UUID | str,
        is_completed: bool = True,
    ) -> dict[str, Any]:
        """
        Mark a milestone completed (stamping completed_at) or reopen it.

        Completing an already-completed milestone keeps its original
        completed_at.
        """
        milestone = MilestoneService._require_owned_milestone(milestone_id, user_id)

        if bool(milestone.get("is_completed")) == is_completed:
            return milestone

        updates = {
            "is_completed": is_completed,
            "completed_at": utc_now_iso() if is_completed else None,
        }
        updated = SupabaseClient.update_rows(MILESTONES_TABLE, "id", milestone_id, updates)
        logger.info(
            f"{'Completed' if is_completed else 'Reopened'} milestone: {milestone_id}"
        )
        return updated or {**milestone, **updates}

    @staticmethod
    def delete_milestone(milestone_id: UUID | str, user_id: UUID | str) -> bool:
        """Remove a milestone from a project the caller created."""
        MilestoneService._require_owned_milestone(milestone_id, user_id)
        deleted = SupabaseClient.delete_rows(MILESTONES_TABLE, {"id": milestone_id})
        logger.info(f"Deleted milestone: {milestone_id}")
        return deleted > 0
