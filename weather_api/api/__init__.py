"""
API module - FastAPI routes and HTTP handling.

This module handles:
- Request validation and parsing
- Authentication
- Error envelopes
- Route definitions
"""
from weather_api.api.main import app

__all__ = ["app"]
