"""
Provider adapter tests

Covers:
  - Groq pre-flight config check, JSON mode, error classification
  - Gemini per-candidate generation and error classification
  - Deadline-aware timeouts
"""
from types import SimpleNamespace
from unittest.mock import MagicMock, PropertyMock, patch

import httpx
import pytest
from google.api_core import exceptions as google_exceptions
from groq import APIConnectionError, RateLimitError

from weather_api.llm.providers import GeminiProvider, GroqProvider, effective_timeout
from weather_api.llm.types import CancellationToken, ErrorKind, Failure, Success

from helpers import ADVICE_JSON, gemini

GROQ_URL = "https://api.groq.com/openai/v1/chat/completions"


def groq_completion(content):
    message = SimpleNamespace(content=content)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class TestGroqProvider:

    def test_missing_key_fails_without_network(self):
        with patch("weather_api.llm.providers.Groq") as groq_cls:
            provider = GroqProvider(api_key=None)
            outcome = provider.generate("prompt")

        groq_cls.assert_not_called()
        assert isinstance(outcome, Failure)
        assert outcome.kind is ErrorKind.CONFIG_MISSING

    def test_success_requests_json_mode(self):
        client = MagicMock()
        client.chat.completions.create.return_value = groq_completion(ADVICE_JSON)
        provider = GroqProvider(api_key="gsk", model="llama-3.1-8b-instant", timeout=9, client=client)

        outcome = provider.generate("prompt")

        assert isinstance(outcome, Success)
        assert outcome.raw_text == ADVICE_JSON
        assert outcome.model_used.identifier == "groq/llama-3.1-8b-instant"
        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "llama-3.1-8b-instant"
        assert kwargs["response_format"] == {"type": "json_object"}
        assert kwargs["messages"] == [{"role": "user", "content": "prompt"}]
        assert kwargs["timeout"] == 9

    def test_rate_limit_is_provider_error_with_status(self):
        response = httpx.Response(429, request=httpx.Request("POST", GROQ_URL))
        client = MagicMock()
        client.chat.completions.create.side_effect = RateLimitError(
            "Rate limit reached", response=response, body=None
        )
        provider = GroqProvider(api_key="gsk", client=client)

        outcome = provider.generate("prompt")

        assert isinstance(outcome, Failure)
        assert outcome.kind is ErrorKind.PROVIDER_ERROR
        assert "429" in outcome.underlying_message
        assert "Rate limit reached" in outcome.underlying_message

    def test_connection_error_is_provider_error(self):
        client = MagicMock()
        client.chat.completions.create.side_effect = APIConnectionError(
            request=httpx.Request("POST", GROQ_URL)
        )
        outcome = GroqProvider(api_key="gsk", client=client).generate("prompt")

        assert outcome.kind is ErrorKind.PROVIDER_ERROR

    def test_empty_completion_is_provider_error(self):
        client = MagicMock()
        client.chat.completions.create.return_value = groq_completion(None)

        outcome = GroqProvider(api_key="gsk", client=client).generate("prompt")

        assert outcome.kind is ErrorKind.PROVIDER_ERROR

    def test_malformed_response_is_provider_error(self):
        client = MagicMock()
        client.chat.completions.create.return_value = SimpleNamespace(choices=[SimpleNamespace()])

        outcome = GroqProvider(api_key="gsk", client=client).generate("prompt")

        assert isinstance(outcome, Failure)
        assert outcome.kind is ErrorKind.PROVIDER_ERROR
        assert "AttributeError" in outcome.underlying_message

    def test_unexpected_transport_error_is_provider_error(self):
        client = MagicMock()
        client.chat.completions.create.side_effect = ConnectionResetError("connection reset")

        outcome = GroqProvider(api_key="gsk", client=client).generate("prompt")

        assert outcome.kind is ErrorKind.PROVIDER_ERROR
        assert "connection reset" in outcome.underlying_message


class TestGeminiProvider:

    @pytest.fixture(autouse=True)
    def no_genai_configure(self):
        with patch("weather_api.llm.providers.genai.configure"):
            yield

    def test_missing_key_fails_without_network(self):
        factory = MagicMock()
        outcome = GeminiProvider(api_key=None, model_factory=factory).generate("p", gemini("gemini-pro"))

        factory.assert_not_called()
        assert outcome.kind is ErrorKind.CONFIG_MISSING

    def test_success_uses_candidate_model(self):
        model = MagicMock()
        model.generate_content.return_value = SimpleNamespace(text=ADVICE_JSON)
        factory = MagicMock(return_value=model)
        provider = GeminiProvider(api_key="key", timeout=12, model_factory=factory)
        candidate = gemini("gemini-2.0-flash")

        outcome = provider.generate("prompt", candidate)

        factory.assert_called_once_with("gemini-2.0-flash")
        assert isinstance(outcome, Success)
        assert outcome.model_used == candidate
        kwargs = model.generate_content.call_args.kwargs
        assert kwargs["generation_config"].response_mime_type == "application/json"
        assert kwargs["request_options"] == {"timeout": 12}

    def test_rate_limit_keeps_full_message(self):
        model = MagicMock()
        model.generate_content.side_effect = google_exceptions.ResourceExhausted(
            "Quota exceeded for gemini-2.5-pro.\nPlease retry in 31s."
        )
        provider = GeminiProvider(api_key="key", model_factory=MagicMock(return_value=model))

        outcome = provider.generate("prompt", gemini("gemini-2.5-pro"))

        assert outcome.kind is ErrorKind.PROVIDER_ERROR
        assert "Please retry in 31s." in outcome.underlying_message
        assert "Please retry" not in outcome.first_line

    def test_blocked_response_is_provider_error(self):
        response = MagicMock()
        type(response).text = PropertyMock(side_effect=ValueError("blocked"))
        model = MagicMock()
        model.generate_content.return_value = response
        provider = GeminiProvider(api_key="key", model_factory=MagicMock(return_value=model))

        outcome = provider.generate("prompt", gemini("gemini-pro"))

        assert outcome.kind is ErrorKind.PROVIDER_ERROR
        assert "blocked" in outcome.underlying_message

    def test_transport_error_is_provider_error(self):
        model = MagicMock()
        model.generate_content.side_effect = ConnectionResetError("connection reset")
        provider = GeminiProvider(api_key="key", model_factory=MagicMock(return_value=model))

        outcome = provider.generate("prompt", gemini("gemini-pro"))

        assert outcome.kind is ErrorKind.PROVIDER_ERROR


class TestEffectiveTimeout:

    def test_without_token(self):
        assert effective_timeout(15, None) == 15

    def test_without_deadline(self):
        assert effective_timeout(15, CancellationToken()) == 15

    def test_shortened_by_deadline(self):
        token = CancellationToken(deadline_seconds=5)
        assert effective_timeout(15, token) <= 5
