# =============================================================================
# core/services/post_service.py - Post (Project Update) Business Logic
# =============================================================================
# Creators post updates on their own projects. Supporters read them on the
# project page and in their home feed (posts from projects they follow).
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from lib.supabase_client import SupabaseClient
from lib.utils import normalize_uuid
from core.models.post import PostCreate
from core.services.project_service import ProjectService
from app.exceptions import PostNotFoundError

logger = logging.getLogger(__name__)

POSTS_TABLE = "posts"


def summarize_project(project: dict[str, Any]) -> dict[str, Any]:
    """Project header fields embedded in feed posts."""
    return {
        "id": project["id"],
        "title": project.get("title") or "",
        "public_slug": project.get("public_slug") or "",
        "cover_image_url": project.get("cover_image_url"),
        "builder": project.get("builder"),
    }


class PostService:
    """Service for project updates."""

    @staticmethod
    def create_post(user_id: UUID | str, data: PostCreate) -> dict[str, Any]:
        """
        Post an update on a project the caller created.

        Raises:
            ProjectNotFoundError: If the project doesn't exist
            NotProjectOwnerError: If the caller isn't its creator
        """
        project = ProjectService.require_owned_project(data.project_id, user_id)

        row = {
            "project_id": str(project["id"]),
            "content": data.content,
            "images": data.images,
            "like_count": 0,
        }

        try:
            post = SupabaseClient.insert_row(POSTS_TABLE, row)
        except Exception as e:
            logger.error(f"Failed to create post: {e}")
            raise

        logger.info(f"Created post: {post['id']} on project: {project['id']}")
        post["project"] = summarize_project(project)
        return post

    @staticmethod
    def get_post(post_id: UUID | str) -> dict[str, Any]:
        """
        Get a post by ID.

        Raises:
            PostNotFoundError: If the post doesn't exist
        """
        post = SupabaseClient.fetch_one(POSTS_TABLE, "id", post_id)
        if not post:
            raise PostNotFoundError(str(post_id))
        return post

    @staticmethod
    def get_project_posts(project_id: UUID | str, limit: int = 50) -> list[dict[str, Any]]:
        """A project's updates, newest first."""
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(POSTS_TABLE)
                .select("*")
                .eq("project_id", normalize_uuid(project_id))
                .order("created_at", desc=True)
                .limit(limit)
                .execute()
            )
            return response.data or []

        except Exception as e:
            logger.error(f"Failed to fetch posts for project {project_id}: {e}")
            raise

    @staticmethod
    def get_feed_posts(
        user_id: UUID | str,
        page: int = 1,
        page_size: int = 20,
    ) -> list[dict[str, Any]]:
        """
        Home feed: updates from every project the user follows, newest first.

        Each post carries its project header (and the project's creator).
        Users who follow nothing get an empty feed.
        """
        client = SupabaseClient.get_client()

        follows = (
            client.table("follows")
            .select("project_id")
            .eq("user_id", normalize_uuid(user_id))
            .execute()
        )
        project_ids = [row["project_id"] for row in follows.data or []]
        if not project_ids:
            return []

        offset = (page - 1) * page_size

        try:
            response = (
                client.table(POSTS_TABLE)
                .select("*")
                .in_("project_id", project_ids)
                .order("created_at", desc=True)
                .range(offset, offset + page_size - 1)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to build feed for user {user_id}: {e}")
            raise

        posts = response.data or []
        projects = ProjectService.attach_builders(
            SupabaseClient.fetch_many("projects", "id", {p["project_id"] for p in posts})
        )
        by_id = {str(p["id"]): summarize_project(p) for p in projects}
        for post in posts:
            post["project"] = by_id.get(str(post["project_id"]))
        return posts

    @staticmethod
    def delete_post(post_id: UUID | str, user_id: UUID | str) -> bool:
        """Delete an update from a project the caller created."""
        post = PostService.get_post(post_id)
        ProjectService.require_owned_project(post["project_id"], user_id)

        try:
            deleted = SupabaseClient.delete_rows(POSTS_TABLE, {"id": post_id})
        except Exception as e:
            logger.error(f"Failed to delete post: {e}")
            raise

        logger.info(f"Deleted post: {post_id}")
        return deleted > 0
