# =============================================================================
# lib/slugs.py - Public URL Slugs
# =============================================================================
# Projects are addressed by a public slug (/project/{slug}). Slugs are
# generated from the project title; uniqueness is checked by ProjectService
# against the projects table.
# =============================================================================

import re

MAX_SLUG_LENGTH = 50

_INVALID_CHARS = re.compile(r"[^a-z0-9\s-]")
_SEPARATORS = re.compile(r"[\s-]+")
_VALID_SLUG = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


def generate_slug(title: str) -> str:
    """
    Build a URL slug from a project title.

    Lowercases, drops anything that isn't a letter, digit, space or hyphen,
    collapses whitespace/hyphen runs into a single hyphen, trims hyphens
    from the ends and truncates to 50 characters.

    Example:
        generate_slug("My  Awesome App!")  # "my-awesome-app"
        generate_slug("  --Hello World--") # "hello-world"
    """
    slug = _INVALID_CHARS.sub("", title.lower())
    slug = _SEPARATORS.sub("-", slug).strip("-")
    return slug[:MAX_SLUG_LENGTH].rstrip("-")


def is_valid_slug(slug: str) -> bool:
    """Check a client-supplied slug has the same shape generate_slug produces."""
    return bool(slug) and len(slug) <= MAX_SLUG_LENGTH and bool(_VALID_SLUG.match(slug))
