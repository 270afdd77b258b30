"""
Request dependencies shared by routers.

get_current_user guards every authenticated endpoint.
"""
from typing import Any, Dict, Optional

from fastapi import Header

from weather_api.core.config import get_settings
from weather_api.core.exceptions import AuthenticationError
from weather_api.core.logging_config import get_logger
from weather_api.core.security import decode_access_token

logger = get_logger(__name__)

DEV_USER = {"id": 999, "username": "dev_user", "is_dev": True}


def get_current_user(authorization: Optional[str] = Header(default=None)) -> Dict[str, Any]:
    """
    Resolve the caller from a bearer token.

    With DEV_MODE enabled the token is not checked and a mock
    development user is returned.

    Raises:
        AuthenticationError: If no token was sent (401)
        InvalidTokenError: If the token fails verification (403)
    """
    settings = get_settings()
    if settings.dev_mode:
        logger.debug("Dev mode: Authentication bypassed for user dev_user")
        return dict(DEV_USER)

    token = None
    if authorization:
        parts = authorization.split(" ", 1)
        if len(parts) == 2 and parts[1].strip():
            token = parts[1].strip()

    if not token:
        raise AuthenticationError("Access token required")

    payload = decode_access_token(token, settings.jwt_secret)
    return {"id": payload["id"], "username": payload["username"]}
