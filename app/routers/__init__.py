# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - builders.py: Builder profiles and onboarding
# - projects.py: Discover, project pages and project edits
# - posts.py: Project updates, the home feed and likes
# - milestones.py: Project roadmaps
# - support.py: Support messages and the "My Support" tab
# - follows.py: Following projects
# - karma.py: Karma totals and the level table
#
# Each router is mounted in main.py under /api/v1.
# =============================================================================

from . import health
from . import builders
from . import projects
from . import posts
from . import milestones
from . import support
from . import follows
from . import karma

__all__ = [
    "health",
    "builders",
    "projects",
    "posts",
    "milestones",
    "support",
    "follows",
    "karma",
]
