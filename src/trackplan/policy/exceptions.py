"""Custom exceptions for policy operations."""

from trackplan.core.errors import TrackplanError


class PolicyError(TrackplanError):
    """Base class for policy-related errors."""

    pass


class PolicyValidationError(PolicyError):
    """Error during policy file loading or validation."""

    def __init__(self, message: str, field: str | None = None) -> None:
        self.message = message
        self.field = field
        super().__init__(message)
