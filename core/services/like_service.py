# =============================================================================
# core/services/like_service.py - Post Like Business Logic
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from lib.supabase_client import SupabaseClient
from lib.utils import normalize_uuid
from core.models.support import SupportActionType
from core.services.post_service import PostService
from core.services.support_action_service import SupportActionService

logger = logging.getLogger(__name__)

LIKES_TABLE = "likes"

# Postgres unique_violation
UNIQUE_VIOLATION_CODE = "23505"


class LikeService:
    """Service for liking project updates."""

    @staticmethod
    def has_liked(user_id: UUID | str, post_id: UUID | str) -> bool:
        """Check whether the user liked the post."""
        client = SupabaseClient.get_client()

        response = (
            client.table(LIKES_TABLE)
            .select("id")
            .eq("user_id", normalize_uuid(user_id))
            .eq("post_id", normalize_uuid(post_id))
            .limit(1)
            .execute()
        )
        return bool(response.data)

    @staticmethod
    def _sync_like_count(post_id: UUID | str) -> int:
        count = SupabaseClient.count_rows(LIKES_TABLE, "post_id", post_id)
        SupabaseClient.update_rows("posts", "id", post_id, {"like_count": count})
        return count

    @staticmethod
    def _state(post_id: UUID | str, liked: bool, like_count: int) -> dict[str, Any]:
        return {
            "post_id": normalize_uuid(post_id),
            "liked": liked,
            "like_count": like_count,
        }

    @staticmethod
    def get_like_state(user_id: UUID | str, post_id: UUID | str) -> dict[str, Any]:
        """Current like state for a post."""
        post = PostService.get_post(post_id)
        return LikeService._state(
            post_id,
            LikeService.has_liked(user_id, post_id),
            post.get("like_count") or 0,
        )

    @staticmethod
    def like_post(user_id: UUID | str, post_id: UUID | str) -> dict[str, Any]:
        """
        Like a post.

        The first like of a post earns karma, credited to the post's project.

        Raises:
            PostNotFoundError: If the post doesn't exist
        """
        post = PostService.get_post(post_id)

        if LikeService.has_liked(user_id, post_id):
            return LikeService._state(post_id, True, post.get("like_count") or 0)

        try:
            SupabaseClient.insert_row(LIKES_TABLE, {
                "user_id": normalize_uuid(user_id),
                "post_id": normalize_uuid(post_id),
            })
        except Exception as e:
            if UNIQUE_VIOLATION_CODE not in str(e):
                logger.error(f"Failed to like post {post_id}: {e}")
                raise
            return LikeService._state(post_id, True, LikeService._sync_like_count(post_id))

        count = LikeService._sync_like_count(post_id)
        logger.info(f"User {user_id} liked post {post_id} ({count} likes)")

        if not SupportActionService.has_support_action(
            user_id, SupportActionType.LIKE, post_id
        ):
            SupportActionService.log_support_action(
                user_id,
                SupportActionType.LIKE,
                project_id=post["project_id"],
                target_id=post_id,
            )

        return LikeService._state(post_id, True, count)

    @staticmethod
    def unlike_post(user_id: UUID | str, post_id: UUID | str) -> dict[str, Any]:
        """Remove a like. Karma earned by the like is kept."""
        PostService.get_post(post_id)

        deleted = SupabaseClient.delete_rows(LIKES_TABLE, {
            "user_id": user_id,
            "post_id": post_id,
        })
        count = LikeService._sync_like_count(post_id)

        if deleted:
            logger.info(f"User {user_id} unliked post {post_id} ({count} likes)")

        return LikeService._state(post_id, False, count)

    @staticmethod
    def toggle_like(user_id: UUID | str, post_id: UUID | str) -> dict[str, Any]:
        """Like or unlike depending on the current state."""
        if LikeService.has_liked(user_id, post_id):
            return LikeService.unlike_post(user_id, post_id)
        return LikeService.like_post(user_id, post_id)
