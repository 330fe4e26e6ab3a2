# =============================================================================
# core/models/milestone.py - Milestone Schemas
# =============================================================================
# Milestones are the checkpoints a creator lays out for a project. Each one
# is either open (optionally with a target date) or completed (with the time
# it was completed).
# =============================================================================

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from .common import blank_to_none, strip_text


class MilestoneCreate(BaseModel):
    """Schema for adding a milestone to a project."""

    title: str = Field(..., min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    target_date: date | None = None

    strip_title = field_validator("title", mode="before")(strip_text)
    clean_description = field_validator("description", mode="before")(blank_to_none)


class MilestoneUpdate(BaseModel):
    """Partial milestone update. Completion goes through /complete."""

    title: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    target_date: date | None = None

    strip_title = field_validator("title", mode="before")(strip_text)
    clean_description = field_validator("description", mode="before")(blank_to_none)


class MilestoneCompletion(BaseModel):
    """Mark a milestone done (or reopen it)."""

    is_completed: bool = True


class Milestone(BaseModel):
    """Milestone as returned to clients."""

    id: UUID
    project_id: UUID
    title: str
    description: str | None = None
    target_date: date | None = None
    is_completed: bool = False
    completed_at: datetime | None = None
    created_at: datetime | None = None
