"""Contact domain errors."""


class ContactValidationError(Exception):
    """Raised when submitted contact data cannot be accepted."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
