"""Store error hierarchy for production backends.

Store implementations wrap backend-specific errors in these types.
"""


class StoreError(Exception):
    """Base exception for all store errors."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class DatabaseError(StoreError):
    """Raised when a query or write fails."""

    pass


class ConnectionError(DatabaseError):
    """Raised when the database cannot be reached."""

    pass
