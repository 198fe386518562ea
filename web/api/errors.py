"""API errors and validation helpers."""

from app.models.decision import Dimension, VotingMode
from helpers.calendar import is_iso_date


class NotFoundError(Exception):
    """Resource not found."""

    def __init__(self, message: str = "Resource not found"):
        self.message = message
        super().__init__(self.message)


class ValidationError(Exception):
    """Validation error."""

    def __init__(self, message: str = "Validation error"):
        self.message = message
        super().__init__(self.message)


class PermissionDeniedError(Exception):
    """User may not perform this action."""

    def __init__(self, message: str = "Permission denied"):
        self.message = message
        super().__init__(self.message)


def validate_dimension(dimension: str) -> Dimension:
    """Parse a decision dimension name."""
    try:
        return Dimension(dimension)
    except ValueError:
        allowed = ", ".join(d.value for d in Dimension)
        raise ValidationError(f"Invalid dimension: {dimension}. Must be one of {allowed}") from None


def validate_mode(mode: str) -> VotingMode:
    """Parse a voting mode name."""
    try:
        return VotingMode(mode)
    except ValueError:
        allowed = ", ".join(m.value for m in VotingMode)
        raise ValidationError(f"Invalid mode: {mode}. Must be one of {allowed}") from None


def validate_iso_date(value: str) -> str:
    """Dates must be yyyy-mm-dd."""
    if not is_iso_date(value):
        raise ValidationError(f"Invalid date: {value}. Expected yyyy-mm-dd")
    return value
