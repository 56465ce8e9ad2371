"""Status domain exceptions."""

from doorsign.core.exceptions import ValidationError


class StatusValidationError(ValidationError):
    """Raised when a status update has an invalid shape."""

    error_type = "invalid_status"

    def __init__(self, message: str = "Invalid status update"):
        super().__init__(message)
