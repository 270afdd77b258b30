"""
Model Catalog - ordered Gemini models eligible for the fallback cascade.

Models available to an API key change without notice, so the list is
fetched per request by default. An optional TTL cache can be enabled;
it expires explicitly and never stores the fallback list.
"""
import threading
import time
from typing import Any, Callable, Iterable, List, Optional, Tuple

import google.generativeai as genai

from weather_api.core.logging_config import get_logger
from weather_api.llm.types import ModelCandidate, ProviderFamily

logger = get_logger(__name__)

MODEL_FAMILY_MARKER = "gemini"
GENERATE_METHOD = "generateContent"
NAMESPACE_PREFIX = "models/"


class ModelCatalog:
    """
    Discovers generation-capable Gemini models.

    list_candidates() never raises: any discovery problem degrades to a
    single known-good default model.

    Example:
        >>> catalog = ModelCatalog(api_key="...")
        >>> [c.identifier for c in catalog.list_candidates()]
        ['gemini-2.5-flash', 'gemini-2.0-flash', ...]
    """

    def __init__(
        self,
        api_key: Optional[str],
        fallback_model: str = "gemini-2.5-flash",
        timeout: float = 15.0,
        ttl_seconds: int = 0,
        list_models: Optional[Callable[..., Iterable[Any]]] = None,
    ):
        """
        Args:
            api_key: Gemini API key. Without one, discovery is skipped.
            fallback_model: Model returned when discovery fails.
            timeout: Timeout for the listing call.
            ttl_seconds: Cache lifetime for a discovered list. 0 disables caching.
            list_models: Listing function, defaults to genai.list_models.
        """
        self.api_key = api_key
        self.fallback_model = fallback_model
        self.timeout = timeout
        self.ttl_seconds = ttl_seconds
        self._list_models = list_models or genai.list_models
        self._cache: Optional[Tuple[float, List[ModelCandidate]]] = None
        self._lock = threading.Lock()
        if api_key:
            genai.configure(api_key=api_key)

    def fallback(self) -> List[ModelCandidate]:
        return [ModelCandidate(self.fallback_model, ProviderFamily.DISCOVERABLE)]

    def list_candidates(self) -> List[ModelCandidate]:
        """Return candidates in discovery order, or the fallback list."""
        cached = self._cached()
        if cached is not None:
            logger.debug(f"Using cached Gemini model list ({len(cached)} models)")
            return list(cached)

        if not self.api_key:
            logger.warning("GEMINI_API_KEY not set, using fallback model list")
            return self.fallback()

        logger.info("Fetching list of all available models...")
        try:
            descriptors = list(self._list_models(request_options={"timeout": self.timeout}))
            candidates = self._filter(descriptors)
        except Exception as e:
            message = str(e).strip().splitlines()
            logger.error(f"Error fetching model list: {message[0] if message else repr(e)}")
            return self.fallback()

        if not candidates:
            logger.warning("Model listing returned no usable Gemini models, using fallback")
            return self.fallback()

        self._store(candidates)
        return list(candidates)

    def _filter(self, descriptors: List[Any]) -> List[ModelCandidate]:
        candidates: List[ModelCandidate] = []
        for descriptor in descriptors:
            name = getattr(descriptor, "name", None)
            if not isinstance(name, str) or MODEL_FAMILY_MARKER not in name:
                continue
            methods = getattr(descriptor, "supported_generation_methods", None)
            if methods is not None and GENERATE_METHOD not in methods:
                continue
            identifier = name.replace(NAMESPACE_PREFIX, "", 1) if name.startswith(NAMESPACE_PREFIX) else name
            candidates.append(ModelCandidate(identifier, ProviderFamily.DISCOVERABLE))
        return candidates

    def _cached(self) -> Optional[List[ModelCandidate]]:
        if self.ttl_seconds <= 0:
            return None
        with self._lock:
            if self._cache is None:
                return None
            expires_at, candidates = self._cache
            if time.monotonic() >= expires_at:
                self._cache = None
                return None
            return candidates

    def _store(self, candidates: List[ModelCandidate]) -> None:
        if self.ttl_seconds <= 0:
            return
        with self._lock:
            self._cache = (time.monotonic() + self.ttl_seconds, list(candidates))
