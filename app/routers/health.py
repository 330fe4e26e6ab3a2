# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and load balancers.
# =============================================================================

from fastapi import APIRouter
from pydantic import BaseModel

from app.config import settings
from lib.supabase_client import SupabaseClient
from lib.utils import utc_now_iso

router = APIRouter()

API_VERSION = "1.0.0"


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: str
    environment: str
    version: str


class ChecksResponse(BaseModel):
    """Individual service checks."""
    database: str


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    status: str
    checks: ChecksResponse
    timestamp: str


class LivenessResponse(BaseModel):
    """Liveness check response."""
    status: str
    timestamp: str


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Basic health status for load balancers and monitoring."""
    return HealthResponse(
        status="healthy",
        timestamp=utc_now_iso(),
        environment=settings.ENVIRONMENT,
        version=API_VERSION,
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check():
    """
    Readiness check endpoint.

    Reads one row from the builders table to confirm the database is reachable.
    """
    checks = ChecksResponse(database="unknown")

    try:
        client = SupabaseClient.get_client()
        client.table("builders").select("id").limit(1).execute()
        checks.database = "healthy"
    except Exception as e:
        checks.database = f"unhealthy: {str(e)[:50]}"

    return ReadinessResponse(
        status="ready" if checks.database == "healthy" else "degraded",
        checks=checks,
        timestamp=utc_now_iso(),
    )


@router.get("/health/live", response_model=LivenessResponse)
async def liveness_check():
    """Whether the service process is alive."""
    return LivenessResponse(
        status="alive",
        timestamp=utc_now_iso(),
    )
