"""
Models module - Pydantic schemas for data validation.

This module defines:
- Request models: Input validation for API endpoints
- Response models: Output formatting for API responses
- WeatherAdvice: the schema AI output is checked against
"""
from weather_api.models.auth import AuthResponse, Credentials, MeResponse, UserOut
from weather_api.models.common import ErrorResponse, HealthResponse
from weather_api.models.weather import (
    AnalyzeWeatherRequest,
    Suggestions,
    WeatherAdvice,
    WeatherAdviceResponse,
)

__all__ = [
    "AuthResponse",
    "Credentials",
    "MeResponse",
    "UserOut",
    "ErrorResponse",
    "HealthResponse",
    "AnalyzeWeatherRequest",
    "Suggestions",
    "WeatherAdvice",
    "WeatherAdviceResponse",
]
