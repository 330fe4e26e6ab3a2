# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - builder.py: Builder (user profile) schemas
# - karma.py: Karma totals and the public level table
# - project.py: Project schemas and mood
# - post.py: Project update (post) schemas and feed pages
# - milestone.py: Milestone schemas
# - support.py: Support messages and support actions
# - follow.py: Follow/like rows and reconciled toggle state
#
# These models define the "contract" between API and clients.
# =============================================================================

# -----------------------------------------------------------------------------
# Builder Models
# -----------------------------------------------------------------------------
from .builder import (
    Builder,
    BuilderProfileUpdate,
    BuilderSummary,
    BuilderUpdate,
    OnboardingRequest,
)

# -----------------------------------------------------------------------------
# Karma Models
# -----------------------------------------------------------------------------
from .karma import (
    Karma,
    KarmaLevelInfo,
    KarmaResponse,
    karma_level_table,
)

# -----------------------------------------------------------------------------
# Project Models
# -----------------------------------------------------------------------------
from .project import (
    MOOD_LABELS,
    MoodUpdate,
    Project,
    ProjectCreate,
    ProjectList,
    ProjectPage,
    ProjectMood,
    ProjectSort,
    ProjectSummary,
    ProjectUpdate,
)

# -----------------------------------------------------------------------------
# Post Models
# -----------------------------------------------------------------------------
from .post import (
    FeedPage,
    Post,
    PostCreate,
)

# -----------------------------------------------------------------------------
# Milestone Models
# -----------------------------------------------------------------------------
from .milestone import (
    Milestone,
    MilestoneCompletion,
    MilestoneCreate,
    MilestoneUpdate,
)

# -----------------------------------------------------------------------------
# Support Models
# -----------------------------------------------------------------------------
from .support import (
    SupportAction,
    SupportActionType,
    SupportMessage,
    SupportMessageCreate,
    SupportMessagePublic,
    SupportMessageResult,
)

# -----------------------------------------------------------------------------
# Follow / Like Models
# -----------------------------------------------------------------------------
from .follow import (
    Follow,
    FollowState,
    Like,
    LikeState,
)

__all__ = [
    # Builder
    "Builder",
    "BuilderProfileUpdate",
    "BuilderSummary",
    "BuilderUpdate",
    "OnboardingRequest",
    # Karma
    "Karma",
    "KarmaLevelInfo",
    "KarmaResponse",
    "karma_level_table",
    # Project
    "MOOD_LABELS",
    "MoodUpdate",
    "Project",
    "ProjectCreate",
    "ProjectList",
    "ProjectPage",
    "ProjectMood",
    "ProjectSort",
    "ProjectSummary",
    "ProjectUpdate",
    # Post
    "FeedPage",
    "Post",
    "PostCreate",
    # Milestone
    "Milestone",
    "MilestoneCompletion",
    "MilestoneCreate",
    "MilestoneUpdate",
    # Support
    "SupportAction",
    "SupportActionType",
    "SupportMessage",
    "SupportMessageCreate",
    "SupportMessagePublic",
    "SupportMessageResult",
    # Follow / Like
    "Follow",
    "FollowState",
    "Like",
    "LikeState",
]
