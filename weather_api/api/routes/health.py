"""
Health Check Routes - liveness endpoint for load balancers and monitors.

The check does not call any AI provider.
"""
from fastapi import APIRouter

from weather_api.core.logging_config import get_logger
from weather_api.models.common import HealthResponse

logger = get_logger(__name__)

router = APIRouter(
    prefix="/health",
    tags=["Health"],
)


@router.get(
    "",
    response_model=HealthResponse,
    summary="Health check endpoint",
)
async def health_check() -> HealthResponse:
    """Report that the API is running and responsive."""
    logger.debug("Health check requested")
    return HealthResponse(status="ok", message="Weather App Backend is running")
