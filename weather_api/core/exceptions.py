"""
Custom Exceptions - Application-specific error classes.

This module defines a hierarchy of exceptions for clean error handling:
- Each exception has a status code
- Every exception renders the same JSON envelope:
  {"error": {"message": ..., "status": ...}}
- Terminal AI failures keep their diagnostic message for the logs but
  expose only a generic message to the caller
"""
from typing import Optional


class WeatherAppException(Exception):
    """
    Base exception for all application errors.

    Subclass this for specific error types. Set ``public_message`` on a
    subclass to hide the internal message from API responses.
    """
    status_code: int = 500
    public_message: Optional[str] = None

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict:
        """Convert to error response dict."""
        return error_envelope(self.public_message or self.message, self.status_code)


def error_envelope(message: str, status: int) -> dict:
    """Build the JSON error body shared by every endpoint."""
    return {"error": {"message": message, "status": status}}


class ValidationError(WeatherAppException):
    """Raised when request input is missing or malformed."""
    status_code = 400


class AuthenticationError(WeatherAppException):
    """Raised when credentials or the access token are missing."""
    status_code = 401


class InvalidTokenError(WeatherAppException):
    """Raised when an access token fails verification."""
    status_code = 403

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message)


class UserExistsError(WeatherAppException):
    """Raised when registering a username that is already taken."""
    status_code = 409

    def __init__(self, message: str = "Username already exists"):
        super().__init__(message)


class AIResolutionError(WeatherAppException):
    """
    Base class for terminal failures of the AI advice pipeline.

    The message carries provider diagnostics and is only logged.
    """
    status_code = 500
    public_message = "Internal server error"


class ExhaustionFailure(AIResolutionError):
    """Raised when every provider and model in the cascade failed."""

    def __init__(self, message: str = "All providers failed to generate content."):
        super().__init__(message)


class CascadeCancelled(AIResolutionError):
    """Raised when the cascade is cancelled or runs past its deadline."""

    def __init__(self, message: str = "AI cascade cancelled"):
        super().__init__(message)


class ParseFailure(AIResolutionError):
    """Raised when a successful completion cannot be parsed as JSON."""
    public_message = "Failed to generate valid JSON response from AI"

    def __init__(self, message: str, raw_text: str = ""):
        super().__init__(message)
        self.raw_text = raw_text


class SchemaMismatch(AIResolutionError):
    """Raised in strict mode when parsed output does not match the advice schema."""
    public_message = "Failed to generate valid JSON response from AI"
