"""
Configuration management via environment variables.

This module loads configuration from .env file using python-dotenv.
All configuration values are accessed through the Settings class.

Provider API keys are optional: a missing key is a runtime condition
handled by the AI cascade (the provider is skipped), not a startup error.
"""
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


# Load .env file from project root
# This must happen before accessing os.environ
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(env_path)


DEFAULT_JWT_SECRET = "default-secret-change-in-production"


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    frozen=True makes the dataclass immutable, preventing accidental
    modification of settings at runtime.

    Attributes:
        app_name: Application identifier for logging
        app_env: Environment name (development, staging, production)
        log_level: Logging verbosity (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        port: Port used when running the server directly
        groq_api_key: API key for the Groq (fast) provider, None if unset
        gemini_api_key: API key for the Gemini model family, None if unset
        groq_model: Fixed model used for the Groq attempt
        gemini_fallback_model: Model tried when Gemini model discovery fails
        provider_timeout_seconds: Timeout applied to every single provider call
        cascade_deadline_seconds: Overall budget for one cascade (0 = none)
        model_catalog_ttl_seconds: Lifetime of the discovered model list (0 = no cache)
        strict_schema: Reject AI output that does not match the advice schema
        jwt_secret: Secret used to sign access tokens
        jwt_expires_hours: Access token lifetime
        dev_mode: Bypass token verification with a mock user
        default_username: Seeded user name
        default_password: Seeded user password
        enable_audit_logging: Log every request via AuditMiddleware
    """
    # Application settings
    app_name: str
    app_env: str
    log_level: str
    port: int

    # AI provider settings
    groq_api_key: Optional[str]
    gemini_api_key: Optional[str]
    groq_model: str
    gemini_fallback_model: str
    provider_timeout_seconds: float
    cascade_deadline_seconds: float
    model_catalog_ttl_seconds: int
    strict_schema: bool

    # Auth settings
    jwt_secret: str
    jwt_expires_hours: int
    dev_mode: bool
    default_username: str
    default_password: str

    # Observability
    enable_audit_logging: bool

    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.app_env.lower() == "development"

    def uses_default_jwt_secret(self) -> bool:
        """True when no JWT_SECRET was configured."""
        return self.jwt_secret == DEFAULT_JWT_SECRET


def _get_env(key: str, default: Optional[str] = None) -> str:
    """
    Get environment variable with optional default.

    Args:
        key: Environment variable name
        default: Default value if not set

    Returns:
        Environment variable value

    Raises:
        ValueError: If required variable is not set and no default provided
    """
    value = os.environ.get(key, default)
    if value is None:
        raise ValueError(
            f"Required environment variable '{key}' is not set. "
            f"Please check your .env file."
        )
    return value


def _get_optional_env(key: str) -> Optional[str]:
    """Get an environment variable, treating empty strings as unset."""
    value = os.environ.get(key, "").strip()
    return value or None


def _get_bool_env(key: str, default: str = "false") -> bool:
    return _get_env(key, default).lower() == "true"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Settings are read once; tests that change the environment
    call get_settings.cache_clear() afterwards.

    Returns:
        Settings instance with all configuration values
    """
    return Settings(
        # Application
        app_name=_get_env("APP_NAME", "WeatherAppBackend"),
        app_env=_get_env("APP_ENV", "development"),
        log_level=_get_env("LOG_LEVEL", "INFO"),
        port=int(_get_env("PORT", "3000")),

        # AI providers
        groq_api_key=_get_optional_env("GROQ_API_KEY"),
        gemini_api_key=_get_optional_env("GEMINI_API_KEY"),
        groq_model=_get_env("GROQ_MODEL", "llama-3.1-8b-instant"),
        gemini_fallback_model=_get_env("GEMINI_FALLBACK_MODEL", "gemini-2.5-flash"),
        provider_timeout_seconds=float(_get_env("AI_PROVIDER_TIMEOUT_SECONDS", "15")),
        cascade_deadline_seconds=float(_get_env("AI_CASCADE_DEADLINE_SECONDS", "0")),
        model_catalog_ttl_seconds=int(_get_env("MODEL_CATALOG_TTL_SECONDS", "0")),
        strict_schema=_get_bool_env("AI_STRICT_SCHEMA"),

        # Auth
        jwt_secret=_get_optional_env("JWT_SECRET") or DEFAULT_JWT_SECRET,
        jwt_expires_hours=int(_get_env("JWT_EXPIRES_HOURS", "24")),
        dev_mode=_get_bool_env("DEV_MODE"),
        default_username=_get_env("DEFAULT_USERNAME", "admin@myapp.com"),
        default_password=_get_env("DEFAULT_PASSWORD", "admin123"),

        # Observability
        enable_audit_logging=_get_bool_env("ENABLE_AUDIT_LOGGING", "true"),
    )
