# =============================================================================
# core/models/project.py - Project Schemas
# =============================================================================
# A project is a creator's shared initiative. It has posts (updates),
# milestones, support messages, a follower count and a mood indicator.
#
# - ProjectMood: How the creator feels about progress
# - ProjectCreate / ProjectUpdate: "Create Project" / "Edit Project" forms
# - Project: Row as returned to clients (with builder card attached)
# - ProjectList: Paginated discover results
# =============================================================================

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from .builder import BuilderSummary
from .common import blank_to_none, strip_text

MIN_TITLE_LENGTH = 3
MAX_TITLE_LENGTH = 60
MIN_TAGLINE_LENGTH = 10
MAX_TAGLINE_LENGTH = 100


class ProjectMood(str, Enum):
    """
    Mood indicator shown on the project page.

    - green: Going great!
    - yellow: Working on it
    - red: Need support
    """
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"

    @property
    def label(self) -> str:
        return MOOD_LABELS[self]


MOOD_LABELS = {
    ProjectMood.GREEN: "Going great!",
    ProjectMood.YELLOW: "Working on it",
    ProjectMood.RED: "Need support",
}


class ProjectSort(str, Enum):
    """Discover ordering."""
    TRENDING = "trending"
    NEWEST = "newest"


class ProjectCreate(BaseModel):
    """
    Schema for the "Create Project" form.

    If public_slug is omitted it is generated from the title.

    Example:
        {
            "title": "Tiny Synth",
            "tagline": "A pocket synthesizer made from scrap",
            "public_slug": "tiny-synth"
        }
    """

    title: str = Field(
        ...,
        min_length=MIN_TITLE_LENGTH,
        max_length=MAX_TITLE_LENGTH,
        description="What are you building?"
    )
    tagline: str = Field(
        ...,
        min_length=MIN_TAGLINE_LENGTH,
        max_length=MAX_TAGLINE_LENGTH,
        description="A short, catchy description"
    )
    description: str | None = None
    cover_image_url: str | None = None
    public_slug: str | None = Field(
        default=None,
        description="Public URL slug (generated from title when omitted)"
    )

    strip_required = field_validator("title", "tagline", mode="before")(strip_text)
    clean_optional = field_validator(
        "description", "cover_image_url", "public_slug", mode="before"
    )(blank_to_none)


class ProjectUpdate(BaseModel):
    """
    Schema for the "Edit Project" form.

    Only set fields are written. Explicit nulls clear description and
    cover_image_url.
    """

    title: str | None = Field(
        default=None,
        min_length=MIN_TITLE_LENGTH,
        max_length=MAX_TITLE_LENGTH,
    )
    tagline: str | None = Field(
        default=None,
        min_length=MIN_TAGLINE_LENGTH,
        max_length=MAX_TAGLINE_LENGTH,
    )
    description: str | None = None
    cover_image_url: str | None = None
    public_slug: str | None = None
    mood: ProjectMood | None = None

    strip_required = field_validator("title", "tagline", "public_slug", mode="before")(strip_text)
    clean_optional = field_validator("description", "cover_image_url", mode="before")(blank_to_none)


class MoodUpdate(BaseModel):
    """Set (or clear) a project's mood."""

    mood: ProjectMood | None = None


class Project(BaseModel):
    """
    Project as returned to clients.

    Example:
        {
            "id": "660e8400-e29b-41d4-a716-446655440001",
            "builder_id": "550e8400-e29b-41d4-a716-446655440000",
            "title": "Tiny Synth",
            "public_slug": "tiny-synth",
            "mood": "green",
            "follower_count": 12,
            "builder": {"id": "550e8400-...", "name": "Ada"}
        }
    """

    id: UUID
    builder_id: UUID
    title: str
    tagline: str | None = None
    description: str | None = None
    cover_image_url: str | None = None
    public_slug: str
    mood: ProjectMood | None = None
    follower_count: int = Field(default=0, ge=0)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    builder: BuilderSummary | None = None

    model_config = {"from_attributes": True}


class ProjectPage(Project):
    """Public project page, with the viewer's follow state when signed in."""

    is_following: bool | None = Field(
        default=None,
        description="Whether the signed-in viewer follows the project (null for anonymous visitors)"
    )


class ProjectSummary(BaseModel):
    """Project header embedded in feed posts."""

    id: UUID
    title: str
    public_slug: str
    cover_image_url: str | None = None
    builder: BuilderSummary | None = None


class ProjectList(BaseModel):
    """Paginated project listing (Discover)."""

    projects: list[Project] = Field(default_factory=list)
    total: int = Field(default=0, ge=0)
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=20, ge=1, le=100)
