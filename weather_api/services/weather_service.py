"""
Weather Advice Service - the AI pipeline behind /api/ai/analyze-weather.

Flow for one request:
1. Build the penguin prompt from the weather observation
2. Run the provider cascade (Groq, then discovered Gemini models)
3. Parse the winning completion as JSON (raw, then fence-stripped)
4. Check the result against the WeatherAdvice schema
5. Stamp the result with the model that produced it

Everything here is request-scoped apart from the optional model
catalog cache.
"""
from typing import Any, Dict, Optional

from pydantic import ValidationError as SchemaValidationError

from weather_api.core.config import Settings, get_settings
from weather_api.core.exceptions import ParseFailure, SchemaMismatch
from weather_api.core.logging_config import get_logger
from weather_api.llm.cascade import CascadeExecutor
from weather_api.llm.catalog import ModelCatalog
from weather_api.llm.normalizer import annotate, normalize
from weather_api.llm.prompts import get_weather_advice_prompt
from weather_api.llm.providers import GeminiProvider, GroqProvider
from weather_api.llm.types import CancellationToken
from weather_api.models.weather import WeatherAdvice

logger = get_logger(__name__)


class WeatherAdviceService:
    """
    Turns a weather observation into structured advice for kids.

    Example:
        >>> service = WeatherAdviceService()
        >>> advice = service.resolve_weather_advice({"temperature_2m": 28.4})
        >>> advice["_meta"]["model_used"]
        'groq/llama-3.1-8b-instant'
    """

    def __init__(
        self,
        executor: Optional[CascadeExecutor] = None,
        settings: Optional[Settings] = None,
    ):
        """
        Args:
            executor: Pre-built cascade. Built from settings when omitted.
            settings: Application settings. Uses get_settings() when omitted.
        """
        self.settings = settings or get_settings()
        self.executor = executor or build_cascade(self.settings)
        self.strict_schema = self.settings.strict_schema

    def resolve_weather_advice(
        self,
        weather_data: Any,
        cancel: Optional[CancellationToken] = None,
    ) -> Dict[str, Any]:
        """
        Resolve advice for one observation.

        Args:
            weather_data: Observation forwarded to the model as JSON
            cancel: Optional token; a fresh one with the configured
                deadline is created when omitted

        Returns:
            Parsed advice with a ``_meta.model_used`` entry

        Raises:
            ExhaustionFailure: If every provider failed
            CascadeCancelled: If the deadline passed mid-cascade
            ParseFailure: If the completion is not a JSON object
            SchemaMismatch: In strict mode, if the object has the wrong shape
        """
        if cancel is None:
            cancel = CancellationToken(self.settings.cascade_deadline_seconds or None)

        prompt = get_weather_advice_prompt(weather_data)
        outcome = self.executor.resolve(prompt, cancel=cancel)
        model_used = outcome.model_used.identifier

        parsed = normalize(outcome.raw_text)
        if not isinstance(parsed, dict):
            logger.error(f"AI response from {model_used} is JSON but not an object")
            raise ParseFailure(
                f"AI response is {type(parsed).__name__}, expected an object",
                raw_text=outcome.raw_text,
            )

        self._check_schema(parsed, model_used)

        logger.info(f"Weather advice resolved using {model_used}")
        return annotate(parsed, model_used)

    def _check_schema(self, parsed: Dict[str, Any], model_used: str) -> None:
        try:
            WeatherAdvice.model_validate(parsed)
        except SchemaValidationError as e:
            summary = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
            )
            if self.strict_schema:
                logger.error(f"AI response from {model_used} does not match schema: {summary}")
                raise SchemaMismatch(f"AI response does not match schema: {summary}") from e
            logger.warning(f"AI response from {model_used} does not match schema, passing through: {summary}")


def build_cascade(settings: Settings) -> CascadeExecutor:
    """Wire providers and the model catalog from settings."""
    timeout = settings.provider_timeout_seconds
    return CascadeExecutor(
        fast_provider=GroqProvider(
            api_key=settings.groq_api_key,
            model=settings.groq_model,
            timeout=timeout,
        ),
        discoverable_provider=GeminiProvider(
            api_key=settings.gemini_api_key,
            timeout=timeout,
        ),
        catalog=ModelCatalog(
            api_key=settings.gemini_api_key,
            fallback_model=settings.gemini_fallback_model,
            timeout=timeout,
            ttl_seconds=settings.model_catalog_ttl_seconds,
        ),
    )


_weather_service: Optional[WeatherAdviceService] = None


def get_weather_service() -> WeatherAdviceService:
    """Get or create the weather advice service instance."""
    global _weather_service
    if _weather_service is None:
        _weather_service = WeatherAdviceService()
    return _weather_service


def reset_weather_service() -> None:
    """Drop the cached service (used by tests after changing settings)."""
    global _weather_service
    _weather_service = None
