# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Errors should tell HOW to fix, not just WHAT failed.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse


class IBelieveException(Exception):
    """
    Base exception for the I Believe In You API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "IBELIEVE_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Builder Exceptions
# =============================================================================

class BuilderNotFoundError(IBelieveException):
    """Raised when a builder profile doesn't exist."""

    def __init__(self, identifier: str):
        super().__init__(
            message=f"Builder profile not found: {identifier}",
            code="BUILDER_NOT_FOUND",
            status_code=404,
            suggestion="Profiles are created on sign-up; sign in again if this is your own profile",
            details={"builder": identifier}
        )


# =============================================================================
# Project Exceptions
# =============================================================================

class ProjectNotFoundError(IBelieveException):
    """Raised when a project slug or ID doesn't exist."""

    def __init__(self, identifier: str):
        super().__init__(
            message=f"Project not found: {identifier}",
            code="PROJECT_NOT_FOUND",
            status_code=404,
            suggestion="Check the project link; the project may have been deleted",
            details={"project": identifier}
        )


class NotProjectOwnerError(IBelieveException):
    """Raised when a user tries to modify a project they didn't create."""

    def __init__(self, project_id: str):
        super().__init__(
            message=f"Only the project's creator can do this: {project_id}",
            code="NOT_PROJECT_OWNER",
            status_code=403,
            suggestion="Sign in as the creator of this project",
            details={"project_id": project_id}
        )


class SlugTakenError(IBelieveException):
    """Raised when a public slug is already used by another project."""

    def __init__(self, slug: str):
        super().__init__(
            message=f"This URL is already taken: {slug}",
            code="SLUG_TAKEN",
            status_code=409,
            suggestion="Pick a different public_slug for the project",
            details={"public_slug": slug}
        )


class InvalidSlugError(IBelieveException):
    """Raised when a slug is empty or has characters a URL slug can't contain."""

    def __init__(self, slug: str):
        super().__init__(
            message=f"Invalid project URL: {slug!r}",
            code="INVALID_SLUG",
            status_code=400,
            suggestion="Use lowercase letters, digits and single hyphens (max 50 characters)",
            details={"public_slug": slug}
        )


# =============================================================================
# Post / Milestone Exceptions
# =============================================================================

class PostNotFoundError(IBelieveException):
    """Raised when a post ID doesn't exist."""

    def __init__(self, post_id: str):
        super().__init__(
            message=f"Post not found: {post_id}",
            code="POST_NOT_FOUND",
            status_code=404,
            suggestion="Check that the post_id is correct",
            details={"post_id": post_id}
        )


class MilestoneNotFoundError(IBelieveException):
    """Raised when a milestone ID doesn't exist."""

    def __init__(self, milestone_id: str):
        super().__init__(
            message=f"Milestone not found: {milestone_id}",
            code="MILESTONE_NOT_FOUND",
            status_code=404,
            suggestion="Check that the milestone_id is correct",
            details={"milestone_id": milestone_id}
        )


# =============================================================================
# Karma Exceptions
# =============================================================================

class InvalidKarmaAmountError(IBelieveException):
    """Raised when asked to award zero or negative karma."""

    def __init__(self, points: int):
        super().__init__(
            message=f"Karma can only increase, got {points} points",
            code="INVALID_KARMA_AMOUNT",
            status_code=400,
            suggestion="Award a positive number of points",
            details={"points": points}
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def ibelieve_exception_handler(
    request: Request,
    exc: IBelieveException
) -> JSONResponse:
    """
    Convert IBelieveException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle Pydantic validation errors.

    Converts validation errors to user-friendly messages.
    """
    return JSONResponse(
        status_code=422,
        content={
            "detail": "Validation error",
            "code": "VALIDATION_ERROR",
            "errors": str(exc)
        }
    )
