# =============================================================================
# core/services/builder_service.py - Builder Profile Business Logic
# =============================================================================
# Builder profiles are created by a database trigger when a user signs up;
# this service reads and updates them.
# =============================================================================

import logging
from typing import Any, Iterable
from uuid import UUID

from lib.supabase_client import SupabaseClient
from lib.utils import utc_now_iso
from core.models.builder import BuilderProfileUpdate, BuilderUpdate
from core.services.karma_service import KarmaService
from app.exceptions import BuilderNotFoundError

logger = logging.getLogger(__name__)

BUILDERS_TABLE = "builders"


def summarize_builder(builder: dict[str, Any]) -> dict[str, Any]:
    """The creator card fields embedded in projects, posts and messages."""
    return {
        "id": builder["id"],
        "name": builder.get("name") or "",
        "avatar_url": builder.get("avatar_url"),
        "is_creator": bool(builder.get("is_creator")),
    }


class BuilderService:
    """Service for builder profile operations."""

    @staticmethod
    def get_builder_profile(user_id: UUID | str) -> dict[str, Any] | None:
        """Fetch the profile belonging to an auth user."""
        return SupabaseClient.fetch_one(BUILDERS_TABLE, "user_id", user_id)

    @staticmethod
    def get_builder(builder_id: UUID | str) -> dict[str, Any] | None:
        """Fetch a profile by its own ID (creator pages)."""
        return SupabaseClient.fetch_one(BUILDERS_TABLE, "id", builder_id)

    @staticmethod
    def require_builder_profile(user_id: UUID | str) -> dict[str, Any]:
        """
        Fetch the caller's profile.

        Raises:
            BuilderNotFoundError: If the user has no profile yet
        """
        builder = BuilderService.get_builder_profile(user_id)
        if not builder:
            raise BuilderNotFoundError(str(user_id))
        return builder

    @staticmethod
    def require_builder(builder_id: UUID | str) -> dict[str, Any]:
        """
        Fetch a profile by ID.

        Raises:
            BuilderNotFoundError: If no such profile exists
        """
        builder = BuilderService.get_builder(builder_id)
        if not builder:
            raise BuilderNotFoundError(str(builder_id))
        return builder

    @staticmethod
    def builders_by_id(builder_ids: Iterable[UUID | str]) -> dict[str, dict[str, Any]]:
        """Creator cards keyed by builder ID, fetched in one query."""
        builders = SupabaseClient.fetch_many(BUILDERS_TABLE, "id", builder_ids)
        return {str(b["id"]): summarize_builder(b) for b in builders}

    @staticmethod
    def _write_profile(user_id: UUID | str, updates: dict[str, Any]) -> dict[str, Any]:
        current = BuilderService.require_builder_profile(user_id)
        if not updates:
            return current

        updates["updated_at"] = utc_now_iso()

        try:
            updated = SupabaseClient.update_rows(BUILDERS_TABLE, "user_id", user_id, updates)
        except Exception as e:
            logger.error(f"Failed to update builder profile: {e}")
            raise

        logger.info(f"Updated builder profile for user {user_id}: {sorted(updates)}")
        return updated or {**current, **updates}

    @staticmethod
    def update_builder_profile(
        user_id: UUID | str,
        updates: BuilderUpdate,
    ) -> dict[str, Any]:
        """
        Apply a partial profile update (only fields that were set).

        Returns:
            Updated profile dict

        Raises:
            BuilderNotFoundError: If the user has no profile
        """
        return BuilderService._write_profile(
            user_id, updates.model_dump(exclude_unset=True)
        )

    @staticmethod
    def update_builder_profile_full(
        user_id: UUID | str,
        profile: BuilderProfileUpdate,
    ) -> dict[str, Any]:
        """
        Save the full "Edit Profile" form.

        Every editable field is written, so blank optional fields are cleared.
        """
        return BuilderService._write_profile(user_id, profile.model_dump())

    @staticmethod
    def complete_onboarding(user_id: UUID | str, is_creator: bool) -> dict[str, Any]:
        """
        Record the onboarding choice (creator or supporter).

        Also makes sure the user has a karma row so the My Support tab has
        something to show before their first support action.
        """
        builder = BuilderService.update_builder_profile(
            user_id, BuilderUpdate(is_creator=is_creator)
        )
        KarmaService.ensure_karma(user_id)
        logger.info(f"Completed onboarding for user {user_id} (is_creator={is_creator})")
        return builder
