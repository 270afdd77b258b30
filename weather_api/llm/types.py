"""
Value types shared by the AI cascade.

Provider-specific errors are reduced to an AttemptOutcome at the adapter
boundary, so nothing past the adapters inspects SDK exception shapes.
"""
import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class ProviderFamily(str, Enum):
    """Which provider family a candidate belongs to."""
    FAST = "fast"
    DISCOVERABLE = "discoverable"


class ErrorKind(str, Enum):
    """Classification of a failed generation attempt."""
    CONFIG_MISSING = "config_missing"
    PROVIDER_ERROR = "provider_error"


@dataclass(frozen=True)
class ModelCandidate:
    """One model identifier eligible for a generation attempt."""
    identifier: str
    provider_family: ProviderFamily


@dataclass(frozen=True)
class Success:
    """A completed generation attempt."""
    raw_text: str
    model_used: ModelCandidate


@dataclass(frozen=True)
class Failure:
    """A failed generation attempt."""
    kind: ErrorKind
    underlying_message: str

    @property
    def first_line(self) -> str:
        """First line of the underlying message, used for log lines."""
        lines = self.underlying_message.strip().splitlines()
        return lines[0] if lines else ""


AttemptOutcome = Union[Success, Failure]


class CancellationToken:
    """
    Cancellation signal threaded through one cascade.

    Fires either when cancel() is called or when the optional
    deadline (seconds from creation) has passed.
    """

    def __init__(self, deadline_seconds: Optional[float] = None):
        self._event = threading.Event()
        self._deadline = (
            time.monotonic() + deadline_seconds if deadline_seconds else None
        )

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        return self._deadline is not None and time.monotonic() >= self._deadline

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, or None without a deadline."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())
