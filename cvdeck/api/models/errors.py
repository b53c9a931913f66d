"""Error response models for consistent API error handling."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel


class ErrorCode(str, Enum):
    """Machine-readable error codes for API responses."""

    INVALID_REQUEST = "INVALID_REQUEST"
    """Request validation failed (malformed JSON, missing fields, etc.)."""

    MISSING_FIELDS = "MISSING_FIELDS"
    """A chat contact submission lacks a name or a way to reach the visitor."""

    DATABASE_ERROR = "DATABASE_ERROR"
    """A store operation failed."""

    EMAIL_ERROR = "EMAIL_ERROR"
    """The notification email could not be sent. The submission was saved."""

    LLM_ERROR = "LLM_ERROR"
    """The LLM provider returned an error or was unavailable."""

    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"
    """The client has exceeded the request rate limit."""

    INTERNAL_ERROR = "INTERNAL_ERROR"
    """An unexpected internal error occurred."""


class ErrorDetail(BaseModel):
    """Field-level error information for validation failures."""

    field: str | None = None
    """The field that caused the error, if applicable."""

    message: str
    """Human-readable error description."""


class ErrorResponse(BaseModel):
    """Standard error response format for all API errors.

    Example:
        {
            "success": false,
            "message": "Invalid form data. Please check your inputs.",
            "code": "INVALID_REQUEST",
            "details": [{"field": "body.email", "message": "value is not a valid email address"}]
        }
    """

    success: Literal[False] = False
    message: str
    code: ErrorCode
    details: list[ErrorDetail] | None = None
