"""Test doubles shared across the suite."""
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from weather_api.llm.types import (
    ErrorKind,
    Failure,
    ModelCandidate,
    ProviderFamily,
    Success,
)

ADVICE_JSON = (
    '{"weather":"raining","suggestions":{"cloth":"Rain boots and a coat",'
    '"game":"Puddle jumping","smart_suggestion":"Waddle waddle, splash time!",'
    '"short_response_to_weather":"Splishy splashy!"}}'
)


def gemini(identifier: str) -> ModelCandidate:
    return ModelCandidate(identifier, ProviderFamily.DISCOVERABLE)


def success(raw_text: str, candidate: ModelCandidate) -> Success:
    return Success(raw_text=raw_text, model_used=candidate)


def provider_error(message: str) -> Failure:
    return Failure(ErrorKind.PROVIDER_ERROR, message)


@dataclass
class FakeFastProvider:
    """Fast-family double returning a fixed outcome and counting calls."""

    outcome: object = field(
        default_factory=lambda: Failure(ErrorKind.CONFIG_MISSING, "GROQ_API_KEY missing")
    )
    calls: int = 0

    def generate(self, prompt, cancel=None):
        self.calls += 1
        return self.outcome


@dataclass
class FakeDiscoverableProvider:
    """Discoverable-family double with one scripted outcome per model name.

    Models without a scripted outcome fail with a provider error.
    """

    outcomes: Dict[str, object] = field(default_factory=dict)
    attempted: List[str] = field(default_factory=list)
    on_call: Optional[Callable[[ModelCandidate], None]] = None

    def generate(self, prompt, candidate, cancel=None):
        self.attempted.append(candidate.identifier)
        if self.on_call is not None:
            self.on_call(candidate)
        outcome = self.outcomes.get(candidate.identifier)
        if outcome is None:
            return provider_error(f"404 model {candidate.identifier} not found")
        return outcome


@dataclass
class FakeCatalog:
    """Catalog double returning a fixed list and counting calls."""

    candidates: List[ModelCandidate] = field(default_factory=list)
    calls: int = 0

    def list_candidates(self):
        self.calls += 1
        return list(self.candidates)
