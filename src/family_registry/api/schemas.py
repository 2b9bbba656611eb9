"""Pydantic v2 schemas for API responses that are not family views."""

from typing import Any

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Schema for health check response."""

    status: str


class ErrorResponse(BaseModel):
    """Body returned for domain errors."""

    error: str
    message: str
    context: dict[str, Any] = {}
