# =============================================================================
# core/services/karma_service.py - Karma Bookkeeping
# =============================================================================
# Persists karma totals. Points only ever go up; the stored level is always
# the level lib/karma.py derives from the stored total.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from lib.karma import get_karma_level, get_level_name
from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import normalize_uuid, utc_now_iso
from core.models.karma import KarmaResponse
from app.exceptions import InvalidKarmaAmountError
from app.websocket.broadcast import publish_karma_awarded

logger = logging.getLogger(__name__)

KARMA_TABLE = "karma"
MAX_AWARD_ATTEMPTS = 5


class KarmaService:
    """Service for reading and awarding karma."""

    @staticmethod
    def get_karma(user_id: UUID | str) -> dict[str, Any] | None:
        """Fetch a user's karma row, or None if they have never earned any."""
        return SupabaseClient.fetch_one(KARMA_TABLE, "user_id", user_id)

    @staticmethod
    def ensure_karma(user_id: UUID | str) -> dict[str, Any]:
        """
        Fetch a user's karma row, creating a zero row if it doesn't exist.

        Returns:
            Karma row dict
        """
        karma = KarmaService.get_karma(user_id)
        if karma:
            return karma

        karma = SupabaseClient.insert_row(KARMA_TABLE, {
            "user_id": normalize_uuid(user_id),
            "total_points": 0,
            "level": 1,
        })
        logger.info(f"Created karma row for user: {user_id}")
        return karma

    @staticmethod
    def add_karma(
        user_id: UUID | str,
        points: int,
        action: str | None = None,
    ) -> dict[str, Any]:
        """
        Add points to a user's karma and recompute their level.

        The write only applies if total_points still holds the value that was
        read, so concurrent awards from other workers are retried instead of
        overwritten.

        Args:
            user_id: The auth user earning karma
            points: Points to add (must be positive)
            action: Support action type, included in the realtime event

        Returns:
            Updated karma row dict

        Raises:
            InvalidKarmaAmountError: If points <= 0
            SupabaseClientError: If the total kept changing under every attempt
        """
        if points <= 0:
            raise InvalidKarmaAmountError(points)

        client = SupabaseClient.get_client()
        user_id_str = normalize_uuid(user_id)

        for attempt in range(1, MAX_AWARD_ATTEMPTS + 1):
            karma = KarmaService.ensure_karma(user_id)

            old_total = karma.get("total_points") or 0
            old_level = get_karma_level(old_total)
            new_total = old_total + points
            new_level = get_karma_level(new_total)

            updates = {
                "total_points": new_total,
                "level": new_level,
                "updated_at": utc_now_iso(),
            }

            try:
                response = (
                    client.table(KARMA_TABLE)
                    .update(updates)
                    .eq("user_id", user_id_str)
                    .eq("total_points", old_total)
                    .execute()
                )
            except Exception as e:
                logger.error(f"Failed to add karma for user {user_id}: {e}")
                raise

            if response.data:
                updated = response.data[0]
                break

            logger.warning(
                f"Karma for user {user_id} changed during award "
                f"(attempt {attempt}/{MAX_AWARD_ATTEMPTS}), retrying"
            )
        else:
            logger.error(f"Gave up adding {points} karma for user {user_id}")
            raise SupabaseClientError(
                message=f"Karma for user {user_id} kept changing during the award",
                code="KARMA_CONFLICT",
                suggestion="Retry the request",
                details={"user_id": user_id_str, "points": points},
            )

        logger.info(
            f"Added {points} karma for user {user_id}: "
            f"{old_total} -> {new_total} (level {old_level} -> {new_level})"
        )

        publish_karma_awarded(
            user_id=normalize_uuid(user_id),
            points=points,
            total_points=new_total,
            level=new_level,
            level_name=get_level_name(new_level),
            level_up=new_level > old_level,
            action=action,
        )

        return updated

    @staticmethod
    def get_karma_summary(user_id: UUID | str) -> KarmaResponse:
        """Karma card for a user; users with no karma row read as 0 points."""
        karma = KarmaService.get_karma(user_id)
        total = (karma or {}).get("total_points") or 0
        return KarmaResponse.from_points(total)
