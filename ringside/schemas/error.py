"""Error payloads returned by every failing endpoint."""

from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ErrorType(str, Enum):
    """Broad categories used by clients to decide how to react to a failure."""

    VALIDATION_ERROR = "validation_error"
    NOT_FOUND = "not_found"
    BUSINESS_RULE_ERROR = "business_rule_error"
    CONFLICT = "conflict"
    DATABASE_ERROR = "database_error"
    TIMEOUT_ERROR = "timeout_error"
    INTERNAL_ERROR = "internal_error"


class ErrorResponse(BaseModel):
    """Standardized error response model."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error_type": "business_rule_error",
                "message": "This wrestler 'Hulk Hogan' is unemployed and cannot be retired.",
                "detail": "CannotBeRetired",
                "status_code": 409,
                "timestamp": "2026-03-01T20:00:00Z",
                "request_id": "0f5c8d2e9a8b4b7f9a3d1c2b3a4f5e6d",
                "path": "/wrestlers/12/retire",
                "reason": "unemployed",
            }
        }
    )

    error_type: ErrorType = Field(..., description="Category of error")
    message: str = Field(..., description="Human-readable error message")
    detail: str | None = Field(None, description="Additional context, usually the exception name")
    status_code: int = Field(..., description="HTTP status code")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(UTC), description="When the error occurred"
    )
    request_id: str | None = Field(None, description="Correlation id from X-Request-ID")
    path: str | None = Field(None, description="Request path that caused the error")
    retry_after: int | None = Field(
        None, description="Seconds to wait before retrying (database outages only)"
    )
    reason: str | None = Field(
        None,
        description="Machine readable reason for rejected status transitions, e.g. 'retired'.",
    )


class ValidationErrorDetail(BaseModel):
    """One failing field of a request payload."""

    field: str = Field(..., description="Dotted location of the offending field")
    message: str = Field(..., description="Validation error message")
    value: Any = Field(None, description="Value that failed validation")


class ValidationErrorResponse(ErrorResponse):
    """Error response carrying per-field validation failures."""

    error_type: ErrorType = Field(default=ErrorType.VALIDATION_ERROR)
    errors: list[ValidationErrorDetail] = Field(
        default_factory=list, description="List of validation errors"
    )
