# =============================================================================
# app/routers/karma.py - Karma Endpoints
# =============================================================================

from fastapi import APIRouter, Depends

from app.auth import get_current_user, AuthUser
from core.models.karma import KarmaLevelInfo, KarmaResponse, karma_level_table
from core.services.karma_service import KarmaService

router = APIRouter()


@router.get("/karma/me", response_model=KarmaResponse)
async def get_my_karma(user: AuthUser = Depends(get_current_user)):
    """Your karma points, level and progress to the next level."""
    return KarmaService.get_karma_summary(user.id)


@router.get("/karma/levels", response_model=list[KarmaLevelInfo])
async def get_karma_levels():
    """The karma level table."""
    return karma_level_table()
