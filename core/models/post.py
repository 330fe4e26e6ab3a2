# =============================================================================
# core/models/post.py - Post (Project Update) Schemas
# =============================================================================
# Posts are the updates a creator shares on a project. Supporters see them in
# their feed and can like them.
# =============================================================================

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from .common import strip_text
from .project import ProjectSummary

MAX_POST_LENGTH = 5000
MAX_POST_IMAGES = 10


class PostCreate(BaseModel):
    """
    Schema for the "New Update" form.

    images accepts either a list of URLs or the raw textarea value with one
    URL per line.

    Example:
        {
            "project_id": "660e8400-...",
            "content": "Soldered the first prototype today!",
            "images": "https://img.example/1.jpg\\nhttps://img.example/2.jpg"
        }
    """

    project_id: UUID
    content: str = Field(..., min_length=1, max_length=MAX_POST_LENGTH)
    images: list[str] = Field(default_factory=list, max_length=MAX_POST_IMAGES)

    strip_content = field_validator("content", mode="before")(strip_text)

    @field_validator("images", mode="before")
    @classmethod
    def split_images(cls, value):
        if value is None:
            return []
        if isinstance(value, str):
            value = value.split("\n")
        if isinstance(value, list):
            return [url.strip() for url in value if isinstance(url, str) and url.strip()]
        return value


class Post(BaseModel):
    """Post as returned to clients."""

    id: UUID
    project_id: UUID
    content: str
    images: list[str] = Field(default_factory=list)
    like_count: int = Field(default=0, ge=0)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    project: ProjectSummary | None = None

    @field_validator("images", mode="before")
    @classmethod
    def null_images(cls, value):
        return value or []


class FeedPage(BaseModel):
    """A page of the home feed."""

    posts: list[Post] = Field(default_factory=list)
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=20, ge=1, le=100)
