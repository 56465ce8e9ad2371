"""User domain exceptions.

User-related exceptions for not found, duplicate and self-management scenarios.
"""

from doorsign.core.exceptions import AuthorizationError, DuplicateKeyError, NotFoundError


class UserNotFoundError(NotFoundError):
    """Raised when user cannot be found."""

    error_type = "user_not_found"

    def __init__(self, message: str = "User not found"):
        super().__init__(message)


class UsernameExistsError(DuplicateKeyError):
    """Raised when a username is already taken."""

    error_type = "username_exists"

    def __init__(self, message: str = "Username already exists"):
        super().__init__(message)


class SelfDeletionError(AuthorizationError):
    """Raised when an admin tries to delete their own account."""

    error_type = "self_deletion_forbidden"

    def __init__(self, message: str = "You cannot delete your own account"):
        super().__init__(message)


class SelfDemotionError(AuthorizationError):
    """Raised when an admin tries to drop their own admin role."""

    error_type = "self_demotion_forbidden"

    def __init__(self, message: str = "You cannot remove your own admin role"):
        super().__init__(message)
