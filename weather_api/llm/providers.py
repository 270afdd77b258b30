"""
Provider adapters - one generation attempt against one upstream.

Two adapters are provided:
- GroqProvider   : the fast family, one fixed model, JSON mode
- GeminiProvider : the discoverable family, model chosen per attempt

Each adapter returns an AttemptOutcome instead of raising, so the
cascade only ever sees Success or Failure values. Neither adapter
retries; retry policy belongs to the cascade.
"""
from typing import Any, Callable, Optional

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions
from groq import Groq, APIError, APIStatusError, APIConnectionError

from weather_api.core.logging_config import get_logger
from weather_api.llm.types import (
    AttemptOutcome,
    CancellationToken,
    ErrorKind,
    Failure,
    ModelCandidate,
    ProviderFamily,
    Success,
)

logger = get_logger(__name__)

JSON_MIME_TYPE = "application/json"


def effective_timeout(timeout: float, cancel: Optional[CancellationToken]) -> float:
    """Per-call timeout, shortened to whatever is left of the cascade deadline."""
    if cancel is None:
        return timeout
    remaining = cancel.remaining()
    if remaining is None:
        return timeout
    return max(0.1, min(timeout, remaining))


class GroqProvider:
    """
    Fast-family adapter backed by the Groq chat completions API.

    Example:
        >>> provider = GroqProvider(api_key="gsk_...")
        >>> outcome = provider.generate(prompt)
        >>> isinstance(outcome, Success)
        True
    """

    def __init__(
        self,
        api_key: Optional[str],
        model: str = "llama-3.1-8b-instant",
        timeout: float = 15.0,
        client: Optional[Any] = None,
    ):
        """
        Args:
            api_key: Groq API key. None disables the provider.
            model: Fixed model identifier.
            timeout: Timeout for the single completion call.
            client: Pre-built client, mainly for tests.
        """
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self._client = client
        if self._client is None and api_key:
            self._client = Groq(api_key=api_key, timeout=timeout, max_retries=0)

    @property
    def candidate(self) -> ModelCandidate:
        return ModelCandidate(f"groq/{self.model}", ProviderFamily.FAST)

    @property
    def configured(self) -> bool:
        return self._client is not None

    def generate(
        self,
        prompt: str,
        cancel: Optional[CancellationToken] = None,
    ) -> AttemptOutcome:
        """Run one JSON-mode completion for the prompt."""
        if not self.configured:
            logger.warning("GROQ_API_KEY not found in env. Skipping Groq.")
            return Failure(ErrorKind.CONFIG_MISSING, "GROQ_API_KEY missing")

        logger.info(f"Attempting generation with Groq API (model: {self.model})...")

        try:
            response = self._client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                response_format={"type": "json_object"},
                timeout=effective_timeout(self.timeout, cancel),
            )
            content = response.choices[0].message.content if response.choices else None
        except APIStatusError as e:
            return self._failure(f"{e.status_code}: {e.message}")
        except APIConnectionError as e:
            return self._failure(f"Connection error: {e}")
        except APIError as e:
            return self._failure(str(e))
        except Exception as e:
            # Malformed responses and transport errors outside the SDK hierarchy
            return self._failure(f"{type(e).__name__}: {e}")

        if not content:
            return self._failure("Groq returned an empty completion")

        return Success(raw_text=content, model_used=self.candidate)

    def _failure(self, message: str) -> Failure:
        failure = Failure(ErrorKind.PROVIDER_ERROR, message)
        logger.warning(f"Groq API call failed: {failure.first_line}")
        return failure


class GeminiProvider:
    """
    Discoverable-family adapter backed by google-generativeai.

    The model is chosen per call, which lets the cascade walk the
    discovered catalog one candidate at a time.
    """

    def __init__(
        self,
        api_key: Optional[str],
        timeout: float = 15.0,
        model_factory: Optional[Callable[[str], Any]] = None,
    ):
        """
        Args:
            api_key: Gemini API key. None disables the provider.
            timeout: Timeout for each generate_content call.
            model_factory: Callable building a model object from its
                name. Defaults to genai.GenerativeModel.
        """
        self.api_key = api_key
        self.timeout = timeout
        self.model_factory = model_factory or genai.GenerativeModel
        if api_key:
            genai.configure(api_key=api_key)

    def generate(
        self,
        prompt: str,
        candidate: ModelCandidate,
        cancel: Optional[CancellationToken] = None,
    ) -> AttemptOutcome:
        """Run one JSON-mode generation against the candidate model."""
        if not self.api_key:
            return Failure(ErrorKind.CONFIG_MISSING, "GEMINI_API_KEY missing")

        model_name = candidate.identifier
        logger.info(f"Attempting generation with Gemini model: {model_name}")

        try:
            model = self.model_factory(model_name)
            response = model.generate_content(
                [{"role": "user", "parts": [{"text": prompt}]}],
                generation_config=genai.types.GenerationConfig(response_mime_type=JSON_MIME_TYPE),
                request_options={"timeout": effective_timeout(self.timeout, cancel)},
            )
            text = response.text
        except google_exceptions.ResourceExhausted as e:
            return self._failure(model_name, 429, str(e))
        except google_exceptions.GoogleAPICallError as e:
            return self._failure(model_name, e.code or 500, str(e))
        except Exception as e:
            # Transport errors and blocked responses (response.text raises ValueError)
            return self._failure(model_name, getattr(e, "status", None) or 500, str(e))

        if not text:
            return self._failure(model_name, 500, "Gemini returned an empty completion")

        return Success(raw_text=text, model_used=candidate)

    def _failure(self, model_name: str, status: int, message: str) -> Failure:
        failure = Failure(ErrorKind.PROVIDER_ERROR, message)
        logger.warning(
            f"Gemini Model {model_name} failed ({status}): {failure.first_line}"
        )
        return failure
