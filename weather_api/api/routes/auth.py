"""
Auth Routes - registration, login and the current user.

Tokens returned here are sent back as ``Authorization: Bearer <token>``
on the AI endpoints.
"""
from typing import Any, Dict

from fastapi import APIRouter, Depends, status

from weather_api.api.deps import get_current_user
from weather_api.core.logging_config import get_logger
from weather_api.models.auth import AuthResponse, Credentials, MeResponse, UserOut
from weather_api.models.common import ErrorResponse
from weather_api.services.user_service import UserService, get_user_service

logger = get_logger(__name__)

router = APIRouter(
    prefix="/api/auth",
    tags=["Auth"],
    responses={
        400: {"model": ErrorResponse, "description": "Missing username or password"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
)


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={401: {"model": ErrorResponse, "description": "Invalid credentials"}},
    summary="Log in and receive an access token",
)
def login(
    credentials: Credentials,
    users: UserService = Depends(get_user_service),
) -> AuthResponse:
    user, token = users.login(credentials.username, credentials.password)
    logger.info(f"Login successful: user={user.id}")
    return AuthResponse(
        message="Login successful",
        token=token,
        user=UserOut(**user.public()),
    )


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse, "description": "Username already exists"}},
    summary="Create an account",
)
def register(
    credentials: Credentials,
    users: UserService = Depends(get_user_service),
) -> AuthResponse:
    user, token = users.register(credentials.username, credentials.password)
    return AuthResponse(
        message="User registered successfully",
        token=token,
        user=UserOut(**user.public()),
    )


@router.get(
    "/me",
    response_model=MeResponse,
    responses={
        401: {"model": ErrorResponse, "description": "Access token required"},
        403: {"model": ErrorResponse, "description": "Invalid or expired token"},
    },
    summary="Return the authenticated user",
)
async def me(user: Dict[str, Any] = Depends(get_current_user)) -> MeResponse:
    return MeResponse(user=UserOut(id=user["id"], username=user["username"]))
