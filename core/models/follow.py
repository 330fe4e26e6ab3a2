# =============================================================================
# core/models/follow.py - Follow & Like Schemas
# =============================================================================
# The app toggles follow/like optimistically. Every toggle endpoint answers
# with the reconciled state (flag + recounted counter) so the client can
# replace its optimistic guess with what the server actually stored.
# =============================================================================

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class Follow(BaseModel):
    """Follow row: user follows project."""

    id: UUID
    user_id: UUID
    project_id: UUID
    created_at: datetime | None = None


class FollowState(BaseModel):
    """Reconciled follow state for one project."""

    project_id: UUID
    is_following: bool
    follower_count: int = Field(default=0, ge=0)


class Like(BaseModel):
    """Like row: user likes post."""

    id: UUID
    user_id: UUID
    post_id: UUID
    created_at: datetime | None = None


class LikeState(BaseModel):
    """Reconciled like state for one post."""

    post_id: UUID
    liked: bool
    like_count: int = Field(default=0, ge=0)
