"""Pydantic schema for API error responses."""

from pydantic import BaseModel, Field


class ErrorResponseSchema(BaseModel):
    """Standard error response format for all API errors."""
    error: str = Field(
        ...,
        description="Error code",
        examples=["INVALID_TRANSACTION"],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["description is required; amount must be positive"],
    )
    request_id: str | None = Field(
        None,
        description="Request ID for tracing",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "error": "INVALID_TRANSACTION",
                    "message": "description is required; amount must be positive",
                    "request_id": "abc123",
                }
            ]
        }
    }
