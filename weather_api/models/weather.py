"""
Request and Response models for the AI weather endpoint.

WeatherAdvice describes the JSON the model is asked to produce. It is
used to check AI output, not to reshape it: the response body is the
parsed model output plus a _meta block.
"""
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class AnalyzeWeatherRequest(BaseModel):
    """
    Request model for POST /api/ai/analyze-weather.

    Attributes:
        weather_data: Current observations, forwarded to the model as JSON.
    """
    weather_data: Optional[Any] = Field(
        default=None,
        description="Weather observations to analyze",
        examples=[{"temperature_2m": 28.4, "weather_code": 71, "is_day": 1}],
    )


class Suggestions(BaseModel):
    cloth: str
    game: str
    smart_suggestion: str
    short_response_to_weather: str


class WeatherAdvice(BaseModel):
    """Expected shape of the model output."""
    model_config = ConfigDict(extra="allow")

    weather: str = Field(..., description="Weather category, e.g. snowing or sunny")
    suggestions: Suggestions


class AdviceMeta(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    model_used: str


class WeatherAdviceResponse(WeatherAdvice):
    """Successful response body: the advice plus which model produced it."""
    meta: AdviceMeta = Field(..., alias="_meta")
