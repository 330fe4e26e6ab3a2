# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Typed Supabase wrapper for database operations
# - karma.py: Karma level table and level math
# - slugs.py: Public URL slug generation and validation
# - utils.py: Shared utilities (error handling, UUID normalization)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.karma import KARMA_LEVELS, get_karma_level, get_level_name
from lib.slugs import generate_slug, is_valid_slug
from lib.utils import ApplicationError, normalize_uuid

__all__ = [
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    # Karma
    "KARMA_LEVELS",
    "get_karma_level",
    "get_level_name",
    # Slugs
    "generate_slug",
    "is_valid_slug",
    # Utils
    "ApplicationError",
    "normalize_uuid",
]
