# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================

from uuid import UUID

from pydantic import BaseModel, ConfigDict

from core.models.builder import Builder


class AuthUser(BaseModel):
    """
    Authenticated user extracted from a Supabase JWT.

    Only what the token itself carries; the builder profile is looked up
    separately.
    """

    model_config = ConfigDict(frozen=True)

    id: UUID
    email: str | None = None


class MeResponse(BaseModel):
    """The signed-in user plus their builder profile (None until the signup trigger has run)."""

    id: UUID
    email: str | None = None
    builder: Builder | None = None
