"""
Weather advice service tests

Covers:
  - Prompt construction
  - End-to-end resolution through fake providers
  - Schema check in lenient and strict mode
  - Non-object JSON rejection
"""
import json
from dataclasses import replace

import pytest

from weather_api.core.config import get_settings
from weather_api.core.exceptions import ParseFailure, SchemaMismatch
from weather_api.llm.cascade import CascadeExecutor
from weather_api.llm.prompts import get_weather_advice_prompt
from weather_api.services.weather_service import WeatherAdviceService

from helpers import ADVICE_JSON, gemini, provider_error, success


@pytest.fixture
def executor(fast_provider, discoverable_provider, catalog):
    return CascadeExecutor(fast_provider, discoverable_provider, catalog)


def make_service(executor, strict=False):
    settings = replace(get_settings(), strict_schema=strict)
    return WeatherAdviceService(executor=executor, settings=settings)


class TestPrompt:

    def test_embeds_weather_data_as_json(self):
        prompt = get_weather_advice_prompt({"temperature_2m": 28.4, "snowfall": 1.2})

        assert '{"temperature_2m":28.4,"snowfall":1.2}' in prompt
        assert '"short_response_to_weather"' in prompt
        assert "penguin" in prompt


class TestResolveWeatherAdvice:

    def test_rate_limited_first_candidate_then_success(self, executor, discoverable_provider, catalog):
        catalog.candidates = [gemini("gemini-2.5-pro"), gemini("gemini-2.5-flash")]
        discoverable_provider.outcomes = {
            "gemini-2.5-pro": provider_error("429 Resource has been exhausted (e.g. check quota)."),
            "gemini-2.5-flash": success(ADVICE_JSON, gemini("gemini-2.5-flash")),
        }

        advice = make_service(executor).resolve_weather_advice({"rain": 0.4})

        assert advice["_meta"] == {"model_used": "gemini-2.5-flash"}
        assert advice["weather"] == "raining"
        assert advice["suggestions"] == json.loads(ADVICE_JSON)["suggestions"]

    def test_fenced_output_is_recovered(self, executor, discoverable_provider, catalog):
        catalog.candidates = [gemini("gemini-2.0-flash")]
        discoverable_provider.outcomes = {
            "gemini-2.0-flash": success(f"```json\n{ADVICE_JSON}\n```", gemini("gemini-2.0-flash")),
        }

        advice = make_service(executor).resolve_weather_advice({"rain": 0.4})

        assert advice["weather"] == "raining"

    def test_prose_output_is_parse_failure(self, executor, discoverable_provider, catalog):
        catalog.candidates = [gemini("gemini-2.0-flash")]
        discoverable_provider.outcomes = {
            "gemini-2.0-flash": success("I cannot help with that.", gemini("gemini-2.0-flash")),
        }

        with pytest.raises(ParseFailure):
            make_service(executor).resolve_weather_advice({"rain": 0.4})

    def test_json_array_is_parse_failure(self, executor, discoverable_provider, catalog):
        catalog.candidates = [gemini("gemini-2.0-flash")]
        discoverable_provider.outcomes = {
            "gemini-2.0-flash": success('["sunny"]', gemini("gemini-2.0-flash")),
        }

        with pytest.raises(ParseFailure):
            make_service(executor).resolve_weather_advice({"rain": 0.4})


class TestSchemaCheck:

    @pytest.fixture
    def wrong_shape(self, executor, discoverable_provider, catalog):
        catalog.candidates = [gemini("gemini-2.0-flash")]
        discoverable_provider.outcomes = {
            "gemini-2.0-flash": success('{"weather": "sunny", "tips": []}', gemini("gemini-2.0-flash")),
        }
        return executor

    def test_lenient_mode_passes_wrong_shape_through(self, wrong_shape):
        advice = make_service(wrong_shape).resolve_weather_advice({"uv_index": 9})

        assert advice == {
            "weather": "sunny",
            "tips": [],
            "_meta": {"model_used": "gemini-2.0-flash"},
        }

    def test_strict_mode_rejects_wrong_shape(self, wrong_shape):
        with pytest.raises(SchemaMismatch) as exc_info:
            make_service(wrong_shape, strict=True).resolve_weather_advice({"uv_index": 9})

        assert "suggestions" in exc_info.value.message
        assert exc_info.value.status_code == 500
