"""Shared response models."""
from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response model for the /health endpoint."""
    status: str = Field(default="ok")
    message: str


class ErrorDetail(BaseModel):
    message: str
    status: int


class ErrorResponse(BaseModel):
    """Standard error envelope returned by every endpoint."""
    error: ErrorDetail
