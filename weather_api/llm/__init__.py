"""
LLM module - AI provider integration.

This module handles all generative-model interactions:
- Model discovery for the Gemini family
- One-shot provider adapters (Groq, Gemini)
- The ordered fallback cascade
- Tolerant JSON parsing of model output
"""
from weather_api.llm.cascade import CascadeExecutor
from weather_api.llm.catalog import ModelCatalog
from weather_api.llm.normalizer import annotate, normalize
from weather_api.llm.providers import GeminiProvider, GroqProvider
from weather_api.llm.types import (
    AttemptOutcome,
    CancellationToken,
    ErrorKind,
    Failure,
    ModelCandidate,
    ProviderFamily,
    Success,
)

__all__ = [
    "CascadeExecutor",
    "ModelCatalog",
    "GeminiProvider",
    "GroqProvider",
    "normalize",
    "annotate",
    "AttemptOutcome",
    "CancellationToken",
    "ErrorKind",
    "Failure",
    "ModelCandidate",
    "ProviderFamily",
    "Success",
]
