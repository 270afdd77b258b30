"""
Cascade Executor - ordered fallback across AI providers and models.

Order of attempts:
1. The fast provider (Groq), exactly once
2. Every discovered Gemini model, in catalog order, once each

Attempts run sequentially and the cascade stops at the first success,
so at most 1 + len(catalog) upstream calls are made. Model discovery
only happens once the fast provider has failed.
"""
from typing import Optional

from weather_api.core.exceptions import CascadeCancelled, ExhaustionFailure
from weather_api.core.logging_config import get_logger
from weather_api.llm.catalog import ModelCatalog
from weather_api.llm.providers import GeminiProvider, GroqProvider
from weather_api.llm.types import CancellationToken, Failure, Success

logger = get_logger(__name__)


class CascadeExecutor:
    """
    Resolves a prompt to the raw text of the first successful attempt.

    Example:
        >>> executor = CascadeExecutor(groq, gemini, catalog)
        >>> outcome = executor.resolve(prompt)
        >>> outcome.model_used.identifier
        'groq/llama-3.1-8b-instant'
    """

    def __init__(
        self,
        fast_provider: GroqProvider,
        discoverable_provider: GeminiProvider,
        catalog: ModelCatalog,
    ):
        self.fast_provider = fast_provider
        self.discoverable_provider = discoverable_provider
        self.catalog = catalog

    def resolve(self, prompt: str, cancel: Optional[CancellationToken] = None) -> Success:
        """
        Run the cascade for one prompt.

        Args:
            prompt: Prompt text, passed unchanged to every provider
            cancel: Optional token checked before every attempt

        Returns:
            The first Success outcome

        Raises:
            ExhaustionFailure: If every attempt failed. The message is the
                last failure's full underlying message.
            CascadeCancelled: If the token fired before a success.
        """
        self._check_cancelled(cancel)

        outcome = self.fast_provider.generate(prompt, cancel=cancel)
        if isinstance(outcome, Success):
            logger.info(f"Success! Generated content using {outcome.model_used.identifier}.")
            return outcome

        logger.info(f"Fast provider unavailable ({outcome.kind.value}). Falling back to Gemini models...")

        self._check_cancelled(cancel)
        candidates = self.catalog.list_candidates()
        logger.info(
            f"Found {len(candidates)} Gemini models to try: "
            f"{[c.identifier for c in candidates]}"
        )

        last_failure: Optional[Failure] = None
        for i, candidate in enumerate(candidates):
            self._check_cancelled(cancel)

            outcome = self.discoverable_provider.generate(prompt, candidate, cancel=cancel)
            if isinstance(outcome, Success):
                logger.info(
                    f"Success! Generated content using Gemini: {candidate.identifier} "
                    f"(attempt {i + 1}/{len(candidates)})"
                )
                return outcome

            last_failure = outcome

        logger.error("All models (Groq and Gemini candidates) failed.")
        if last_failure is None:
            raise ExhaustionFailure()
        raise ExhaustionFailure(last_failure.underlying_message)

    @staticmethod
    def _check_cancelled(cancel: Optional[CancellationToken]) -> None:
        if cancel is not None and cancel.cancelled:
            logger.warning("AI cascade cancelled, skipping remaining attempts")
            raise CascadeCancelled()
