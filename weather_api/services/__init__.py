"""
Services module - Business logic and orchestration.

Services contain the core application logic:
- No HTTP concerns (those belong in api/)
- Orchestrate between the LLM layer and request data
"""
from weather_api.services.user_service import User, UserService, get_user_service, reset_user_service
from weather_api.services.weather_service import (
    WeatherAdviceService,
    build_cascade,
    get_weather_service,
    reset_weather_service,
)

__all__ = [
    "User",
    "UserService",
    "get_user_service",
    "reset_user_service",
    "WeatherAdviceService",
    "build_cascade",
    "get_weather_service",
    "reset_weather_service",
]
