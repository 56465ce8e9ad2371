"""Auth domain exceptions.

Authentication and authorization related exceptions.
"""

from doorsign.core.exceptions import AuthenticationError, AuthorizationError


# Authentication errors (401)
class NotAuthenticatedError(AuthenticationError):
    """Raised when a protected operation is called without a valid session."""

    error_type = "not_authenticated"

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)


class InvalidCredentialsError(AuthenticationError):
    """Raised when username/password combination is invalid."""

    error_type = "invalid_credentials"

    def __init__(self, message: str = "Invalid username or password"):
        super().__init__(message)


# Authorization errors (403)
class ForbiddenError(AuthorizationError):
    """Raised when the caller may not act on the target resource."""

    error_type = "forbidden"

    def __init__(self, message: str = "You may only update your own status"):
        super().__init__(message)


class AdminRequiredError(AuthorizationError):
    """Raised when admin privileges are required."""

    error_type = "admin_required"

    def __init__(self, message: str = "Admin privileges required"):
        super().__init__(message)
