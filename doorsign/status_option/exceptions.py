"""Status option domain exceptions."""

from doorsign.core.exceptions import DuplicateKeyError, NotFoundError


class StatusOptionNotFoundError(NotFoundError):
    """Raised when a status option cannot be found."""

    error_type = "status_option_not_found"

    def __init__(self, message: str = "Status option not found"):
        super().__init__(message)


class StatusOptionExistsError(DuplicateKeyError):
    """Raised when a status option name is already taken."""

    error_type = "status_option_exists"

    def __init__(self, message: str = "Status option already exists"):
        super().__init__(message)
