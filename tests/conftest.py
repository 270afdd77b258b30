"""Pytest configuration and fixtures.

The environment is pinned before the application is imported so that
no test ever reaches a real AI provider.
"""
import os

import pytest

os.environ["GROQ_API_KEY"] = ""
os.environ["GEMINI_API_KEY"] = ""
os.environ["JWT_SECRET"] = "test-secret"
os.environ["DEV_MODE"] = "false"
os.environ["AI_STRICT_SCHEMA"] = "false"
os.environ["MODEL_CATALOG_TTL_SECONDS"] = "0"
os.environ["AI_CASCADE_DEADLINE_SECONDS"] = "0"
os.environ["DEFAULT_USERNAME"] = "admin@myapp.com"
os.environ["DEFAULT_PASSWORD"] = "admin123"

from weather_api.core.config import get_settings  # noqa: E402
from weather_api.services import reset_user_service, reset_weather_service  # noqa: E402

from helpers import FakeCatalog, FakeDiscoverableProvider, FakeFastProvider  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_settings():
    """Every test starts from freshly read settings and services."""
    get_settings.cache_clear()
    reset_user_service()
    reset_weather_service()
    yield
    get_settings.cache_clear()
    reset_user_service()
    reset_weather_service()


@pytest.fixture
def fast_provider():
    return FakeFastProvider()


@pytest.fixture
def discoverable_provider():
    return FakeDiscoverableProvider()


@pytest.fixture
def catalog():
    return FakeCatalog()
