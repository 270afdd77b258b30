"""
Request and Response models for the auth endpoints.

Credential fields are optional at the schema level so that a missing
field produces the API's own 400 message instead of a generic
validation error.
"""
from typing import Optional

from pydantic import BaseModel, Field


class Credentials(BaseModel):
    """Body for /api/auth/login and /api/auth/register."""
    username: Optional[str] = Field(default=None, examples=["admin@myapp.com"])
    password: Optional[str] = Field(default=None)


class UserOut(BaseModel):
    id: int
    username: str


class AuthResponse(BaseModel):
    message: str
    token: str
    user: UserOut


class MeResponse(BaseModel):
    user: UserOut
