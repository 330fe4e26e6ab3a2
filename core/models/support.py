# =============================================================================
# core/models/support.py - Support Message & Support Action Schemas
# =============================================================================
# Support messages are words of encouragement sent to a project. Every support
# gesture (message, first follow, first like) is also recorded as a support
# action, which is what karma is awarded for.
# =============================================================================

from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from .common import strip_text
from .karma import KarmaResponse

MIN_SUPPORT_MESSAGE_LENGTH = 10
MAX_SUPPORT_MESSAGE_LENGTH = 500

ANONYMOUS_SENDER_NAME = "Anonymous Supporter"
DEFAULT_SENDER_NAME = "Supporter"


class SupportActionType(str, Enum):
    """Kinds of support a user can give."""
    MESSAGE = "message"
    FOLLOW = "follow"
    LIKE = "like"


class SupportMessageCreate(BaseModel):
    """
    Schema for the "Send Support" modal.

    Example:
        {
            "project_id": "660e8400-...",
            "message": "I believe in you because you never quit!",
            "is_anonymous": false
        }
    """

    project_id: UUID
    message: str = Field(
        ...,
        min_length=MIN_SUPPORT_MESSAGE_LENGTH,
        max_length=MAX_SUPPORT_MESSAGE_LENGTH,
        description="Your message of support"
    )
    is_anonymous: bool = Field(default=False, description="Hide your name from the creator")

    strip_message = field_validator("message", mode="before")(strip_text)


class SupportMessage(BaseModel):
    """Support message row."""

    id: UUID
    project_id: UUID
    sender_id: UUID
    message: str
    is_anonymous: bool = False
    created_at: datetime | None = None


class SupportMessagePublic(BaseModel):
    """
    Support message as shown on a project page.

    Anonymous messages never expose the sender: sender_id and avatar are null
    and the name is "Anonymous Supporter".
    """

    id: UUID
    project_id: UUID
    message: str
    is_anonymous: bool = False
    created_at: datetime | None = None
    sender_id: UUID | None = None
    sender_name: str = DEFAULT_SENDER_NAME
    sender_avatar_url: str | None = None

    @classmethod
    def from_row(
        cls,
        row: dict[str, Any],
        sender: dict[str, Any] | None = None,
    ) -> "SupportMessagePublic":
        """Build the public view of a message row, masking anonymous senders."""
        base = {
            "id": row["id"],
            "project_id": row["project_id"],
            "message": row["message"],
            "is_anonymous": bool(row.get("is_anonymous")),
            "created_at": row.get("created_at"),
        }
        if base["is_anonymous"]:
            return cls(**base, sender_name=ANONYMOUS_SENDER_NAME)

        return cls(
            **base,
            sender_id=row.get("sender_id"),
            sender_name=(sender or {}).get("name") or DEFAULT_SENDER_NAME,
            sender_avatar_url=(sender or {}).get("avatar_url"),
        )


class SupportMessageResult(BaseModel):
    """Response after sending support: the message plus the sender's new karma."""

    message: SupportMessage
    karma: KarmaResponse
    karma_earned: int


class SupportAction(BaseModel):
    """Support action row (karma ledger entry)."""

    id: UUID
    user_id: UUID
    project_id: UUID | None = None
    target_id: UUID | None = None
    action_type: SupportActionType
    karma_earned: int = Field(default=0, ge=0)
    created_at: datetime | None = None
