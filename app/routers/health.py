# =============================================================================
# app/routers/health.py - Health Check Endpoint
# =============================================================================
# Provides the health check endpoint for monitoring and the frontend.
# =============================================================================

from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from app.config import API_VERSION
from core.models.response import ApiResponse

router = APIRouter()


# =============================================================================
# Response Models
# =============================================================================

class HealthInfo(BaseModel):
    """Basic health check payload."""
    timestamp: datetime
    version: str
    status: str


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=ApiResponse[HealthInfo])
async def health_check():
    """
    Health check endpoint.

    Always succeeds. Reports the server time and API version.
    """
    return ApiResponse[HealthInfo].ok(
        "Server is healthy",
        HealthInfo(
            timestamp=datetime.now(timezone.utc),
            version=API_VERSION,
            status="running",
        ),
    )
