# =============================================================================
# core/models/karma.py - Karma Schemas
# =============================================================================
# Karma is a per-user point total. The level is derived from the total
# through the static table in lib/karma.py and stored alongside it.
# =============================================================================

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from lib.karma import (
    KARMA_LEVELS,
    get_karma_level,
    get_level_name,
    next_level_threshold,
    points_to_next_level,
)


class Karma(BaseModel):
    """Karma row as stored in the karma table."""

    id: UUID
    user_id: UUID
    total_points: int = Field(default=0, ge=0)
    level: int = Field(default=1, ge=1)
    created_at: datetime | None = None
    updated_at: datetime | None = None


class KarmaResponse(BaseModel):
    """
    Karma card shown on the "My Support" tab.

    Example:
        {
            "total_points": 160,
            "level": 3,
            "level_name": "Encourager",
            "next_level_points": 300,
            "points_to_next_level": 140
        }
    """

    total_points: int = Field(default=0, ge=0)
    level: int = Field(default=1, ge=1)
    level_name: str
    next_level_points: int | None = Field(
        default=None,
        description="Total points needed for the next level (null at max level)"
    )
    points_to_next_level: int | None = Field(
        default=None,
        description="Points still missing for the next level (null at max level)"
    )

    @classmethod
    def from_points(cls, total_points: int) -> "KarmaResponse":
        """Build the card from a point total; the level is always recomputed."""
        level = get_karma_level(total_points)
        return cls(
            total_points=total_points,
            level=level,
            level_name=get_level_name(level),
            next_level_points=next_level_threshold(total_points),
            points_to_next_level=points_to_next_level(total_points),
        )


class KarmaLevelInfo(BaseModel):
    """One row of the public level table."""

    level: int
    min_points: int
    name: str


def karma_level_table() -> list[KarmaLevelInfo]:
    """The static level table as API models."""
    return [
        KarmaLevelInfo(level=entry.level, min_points=entry.min_points, name=entry.name)
        for entry in KARMA_LEVELS
    ]
