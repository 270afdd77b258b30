"""
API Routes module - Endpoint definitions.

Each file in this module defines routes for a specific domain:
- ai.py     : AI weather analysis
- auth.py   : Registration, login, current user
- health.py : Health check endpoint
"""
from weather_api.api.routes.ai import router as ai_router
from weather_api.api.routes.auth import router as auth_router
from weather_api.api.routes.health import router as health_router

__all__ = [
    "ai_router",
    "auth_router",
    "health_router",
]
