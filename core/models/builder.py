# =============================================================================
# core/models/builder.py - Builder Profile Schemas
# =============================================================================
# A builder is the profile record behind every signed-in user. The same record
# is a "creator" (shares projects) or a "supporter" depending on is_creator.
#
# - Builder: Full profile row as stored in the builders table
# - BuilderSummary: Minimal card embedded in projects, posts and messages
# - BuilderUpdate: Partial update (onboarding, creator promotion)
# - BuilderProfileUpdate: The full "Edit Profile" form
# =============================================================================

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from .common import blank_to_none, strip_text

MAX_NAME_LENGTH = 50
MAX_BIO_LENGTH = 300


class Builder(BaseModel):
    """
    Builder profile row.

    Example:
        {
            "id": "550e8400-e29b-41d4-a716-446655440000",
            "user_id": "7c9e6679-7425-40de-944b-e07fc1f90ae7",
            "name": "Ada",
            "bio": "Building a tiny synth",
            "is_creator": true
        }
    """

    id: UUID = Field(..., description="Builder profile ID")
    user_id: UUID = Field(..., description="Supabase auth user ID")
    name: str = Field(..., description="Display name")
    bio: str | None = Field(default=None, description="Short bio")
    avatar_url: str | None = Field(default=None, description="Avatar image URL")
    website_url: str | None = Field(default=None, description="Personal website")
    twitter_handle: str | None = Field(default=None, description="Twitter handle without @")
    is_creator: bool = Field(default=False, description="Whether this user shares projects")
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class BuilderSummary(BaseModel):
    """Creator card shown next to projects and posts."""

    id: UUID
    name: str
    avatar_url: str | None = None
    is_creator: bool = False


class BuilderUpdate(BaseModel):
    """
    Partial profile update.

    Only the fields that are set are written. Used by onboarding and when a
    supporter becomes a creator by creating their first project.
    """

    name: str | None = Field(
        default=None,
        min_length=2,
        max_length=MAX_NAME_LENGTH,
    )
    bio: str | None = Field(default=None, max_length=MAX_BIO_LENGTH)
    avatar_url: str | None = None
    is_creator: bool | None = None

    strip_name = field_validator("name", mode="before")(strip_text)
    clean_optional = field_validator("bio", "avatar_url", mode="before")(blank_to_none)


class BuilderProfileUpdate(BaseModel):
    """
    The "Edit Profile" form.

    Every field is written, so clearing an optional field sets it to null.

    Example:
        {
            "name": "Ada Lovelace",
            "bio": "",
            "twitter_handle": "@ada"
        }
        -> bio=None, twitter_handle="ada"
    """

    name: str = Field(..., min_length=2, max_length=MAX_NAME_LENGTH)
    bio: str | None = Field(default=None, max_length=MAX_BIO_LENGTH)
    avatar_url: str | None = None
    website_url: str | None = None
    twitter_handle: str | None = Field(default=None, max_length=50)

    strip_name = field_validator("name", mode="before")(strip_text)
    clean_optional = field_validator(
        "bio", "avatar_url", "website_url", mode="before"
    )(blank_to_none)

    @field_validator("twitter_handle", mode="before")
    @classmethod
    def clean_handle(cls, value):
        if isinstance(value, str):
            value = value.replace("@", "")
        return blank_to_none(value)


class OnboardingRequest(BaseModel):
    """Answer to "Are you here to share a project or support creators?"."""

    is_creator: bool = Field(..., description="True to share projects, False to support")
