"""Custom exception hierarchy for the FlashLearn engine."""


class FlashlearnError(Exception):
    """Base exception for all FlashLearn application errors."""

    def __init__(self, message: str) -> None:
        """Initialize exception with message."""
        self.message = message
        super().__init__(self.message)


class ValidationError(FlashlearnError):
    """Validation error."""


class ServiceError(FlashlearnError):
    """Service layer error, raised when an external collaborator fails."""
