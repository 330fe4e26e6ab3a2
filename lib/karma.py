# =============================================================================
# lib/karma.py - Karma Level Table
# =============================================================================
# Karma levels are derived purely from a user's total points through a static
# threshold table. Nothing here touches the database; KarmaService in
# core/services/karma_service.py persists points and stores the level computed
# here alongside them.
#
# Usage:
#   from lib.karma import get_karma_level, points_to_next_level
#   get_karma_level(160)        # 3
#   points_to_next_level(160)   # 140
# =============================================================================

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class KarmaLevel:
    """One row of the level table."""

    level: int
    min_points: int
    name: str


# Ordered by min_points ascending. Level 1 must start at 0.
KARMA_LEVELS: tuple[KarmaLevel, ...] = (
    KarmaLevel(1, 0, "Newcomer"),
    KarmaLevel(2, 50, "Supporter"),
    KarmaLevel(3, 150, "Encourager"),
    KarmaLevel(4, 300, "Cheerleader"),
    KarmaLevel(5, 500, "Champion"),
    KarmaLevel(6, 800, "Believer"),
    KarmaLevel(7, 1200, "Mentor"),
    KarmaLevel(8, 1700, "Guardian"),
    KarmaLevel(9, 2300, "Luminary"),
    KarmaLevel(10, 3000, "Legend"),
)

MAX_LEVEL = KARMA_LEVELS[-1].level


def _level_entry(points: int) -> KarmaLevel:
    current = KARMA_LEVELS[0]
    for entry in KARMA_LEVELS:
        if points >= entry.min_points:
            current = entry
        else:
            break
    return current


def get_karma_level(points: int) -> int:
    """
    Map total karma points to a level.

    Returns the highest level whose threshold is <= points. Zero or
    negative totals are level 1.

    Example:
        get_karma_level(0)     # 1
        get_karma_level(49)    # 1
        get_karma_level(50)    # 2
        get_karma_level(9999)  # 10
    """
    return _level_entry(points).level


def get_level_name(level: int) -> str:
    """Display name for a level. Out-of-range levels clamp to the table ends."""
    if level <= KARMA_LEVELS[0].level:
        return KARMA_LEVELS[0].name
    if level >= MAX_LEVEL:
        return KARMA_LEVELS[-1].name
    return KARMA_LEVELS[level - 1].name


def next_level_threshold(points: int) -> int | None:
    """Points needed in total to reach the next level, or None at the top."""
    level = get_karma_level(points)
    if level >= MAX_LEVEL:
        return None
    return KARMA_LEVELS[level].min_points


def points_to_next_level(points: int) -> int | None:
    """How many more points until the next level, or None at the top."""
    threshold = next_level_threshold(points)
    if threshold is None:
        return None
    return threshold - max(points, 0)
