"""
AI Routes - weather analysis backed by the provider cascade.

The handler is a plain ``def`` so FastAPI runs it in the threadpool:
the cascade makes blocking SDK calls one after another.
"""
from typing import Any, Dict

from fastapi import APIRouter, Depends

from weather_api.api.deps import get_current_user
from weather_api.core.exceptions import ValidationError
from weather_api.core.logging_config import get_logger
from weather_api.models.common import ErrorResponse
from weather_api.models.weather import AnalyzeWeatherRequest, WeatherAdviceResponse
from weather_api.services.weather_service import WeatherAdviceService, get_weather_service

logger = get_logger(__name__)

router = APIRouter(
    prefix="/api/ai",
    tags=["AI"],
    dependencies=[Depends(get_current_user)],
    responses={
        400: {"model": ErrorResponse, "description": "Weather data missing"},
        401: {"model": ErrorResponse, "description": "Access token required"},
        403: {"model": ErrorResponse, "description": "Invalid or expired token"},
        500: {"model": ErrorResponse, "description": "All providers failed or output unusable"},
    },
)


@router.post(
    "/analyze-weather",
    responses={200: {"model": WeatherAdviceResponse, "description": "Advice from the first model that answered"}},
    summary="Turn weather observations into advice for kids",
    description="""
    Sends the observation to Groq first. If Groq is not configured or
    fails, every Gemini model available to the API key is tried in order
    until one answers. The response carries `_meta.model_used`.
    """,
)
def analyze_weather(
    request: AnalyzeWeatherRequest,
    service: WeatherAdviceService = Depends(get_weather_service),
) -> Dict[str, Any]:
    # Empty objects and arrays are accepted; blank scalars are not
    if request.weather_data is None or request.weather_data in ("", 0):
        raise ValidationError("Weather data is required")

    logger.info("Weather analysis requested")

    return service.resolve_weather_advice(request.weather_data)
