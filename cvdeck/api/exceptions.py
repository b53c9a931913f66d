"""API exception hierarchy for consistent error handling.

All API exceptions inherit from CVDeckAPIError, which provides
status_code and error_code attributes used by the global exception
handler to generate consistent error responses.
"""

from cvdeck.api.models.errors import ErrorCode


class CVDeckAPIError(Exception):
    """Base exception for all API errors.

    Subclasses set status_code and error_code to define the HTTP response.
    """

    status_code: int = 500
    error_code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class RateLimitExceededError(CVDeckAPIError):
    """Raised when a client exceeds the rate limit."""

    status_code = 429
    error_code = ErrorCode.RATE_LIMIT_EXCEEDED


class LLMProviderError(CVDeckAPIError):
    """Raised when the LLM provider fails or is unavailable."""

    status_code = 502
    error_code = ErrorCode.LLM_ERROR
