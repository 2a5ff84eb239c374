"""Learning module domain exceptions."""

from flashlearn.domain.common.exceptions import DomainError


class UnsupportedVariantError(DomainError):
    """Raised when a question variant has no validation or generation rule."""

    def __init__(self, variant: object) -> None:
        name = getattr(variant, "value", None) or type(variant).__name__
        super().__init__(f"Unsupported question variant: {name}", {"variant": str(name)})
        self.variant = variant


class SessionNotRunningError(DomainError):
    """Raised when a quiz operation is attempted outside its phase."""

    def __init__(self, operation: str, phase: str) -> None:
        super().__init__(
            f"Cannot {operation} while session is {phase}",
            {"operation": operation, "phase": phase},
        )
        self.operation = operation
        self.phase = phase
