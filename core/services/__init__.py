# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .karma_service import KarmaService
from .builder_service import BuilderService
from .project_service import ProjectService
from .support_action_service import SupportActionService
from .post_service import PostService
from .milestone_service import MilestoneService
from .support_service import SupportService
from .follow_service import FollowService
from .like_service import LikeService

__all__ = [
    "KarmaService",
    "BuilderService",
    "ProjectService",
    "SupportActionService",
    "PostService",
    "MilestoneService",
    "SupportService",
    "FollowService",
    "LikeService",
]
