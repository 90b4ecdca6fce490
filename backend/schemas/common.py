"""Common schemas used across the API."""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    Standard error response format.

    Attributes:
        detail: Human-readable error message
        code: Optional machine-readable error code for programmatic handling
    """
    detail: str = Field(..., description="Human-readable error description")
    code: Optional[str] = Field(
        None,
        description="Machine-readable error code for programmatic error handling"
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "detail": "Category not found",
                    "code": "NOT_FOUND"
                },
                {
                    "detail": "The category was modified by another user",
                    "code": "CONCURRENCY_CONFLICT"
                }
            ]
        }
    }


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "healthy"
    mode: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
