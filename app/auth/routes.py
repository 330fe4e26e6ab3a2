# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Signup and login happen client-side with Supabase Auth (a database trigger
# creates the builder profile). These routes tell the app who is signed in.
# =============================================================================

import logging

from fastapi import APIRouter, Depends

from app.auth.dependencies import get_current_user
from app.auth.models import AuthUser, MeResponse
from core.services.builder_service import BuilderService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.get("/me", response_model=MeResponse)
async def get_current_user_info(
    user: AuthUser = Depends(get_current_user)
) -> MeResponse:
    """Get the signed-in user and their builder profile."""
    builder = BuilderService.get_builder_profile(user.id)
    if builder is None:
        logger.warning(f"No builder profile yet for user {user.id}")

    return MeResponse(
        id=user.id,
        email=user.email,
        builder=builder,
    )


@router.get("/verify")
async def verify_token(
    user: AuthUser = Depends(get_current_user)
) -> dict:
    """
    Verify that the current token is valid.

    Raises:
        401: If token is invalid or expired
    """
    return {
        "valid": True,
        "user_id": str(user.id),
        "email": user.email
    }
