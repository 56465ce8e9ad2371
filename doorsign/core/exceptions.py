"""App-wide exception hierarchy.

This module provides a unified exception system with automatic HTTP status code
mapping and consistent error response formatting.
"""


class AppException(Exception):
    """Base exception for all application errors.

    All custom exceptions inherit from this class and define their own
    status_code and error_type for consistent API responses.
    """

    status_code: int = 500
    error_type: str = "internal_error"

    def __init__(self, message: str = "An unexpected error occurred"):
        self.message = message
        super().__init__(message)


# Authentication errors (401)
class AuthenticationError(AppException):
    """Base class for authentication failures."""

    status_code = 401
    error_type = "authentication_error"

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message)


# Authorization errors (403)
class AuthorizationError(AppException):
    """Base class for authorization failures."""

    status_code = 403
    error_type = "authorization_error"

    def __init__(self, message: str = "Access denied"):
        super().__init__(message)


# Not found errors (404)
class NotFoundError(AppException):
    """Base class for resource not found errors."""

    status_code = 404
    error_type = "not_found"

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message)


# Validation errors (400)
class ValidationError(AppException):
    """Base class for validation errors."""

    status_code = 400
    error_type = "validation_error"

    def __init__(self, message: str = "Validation failed"):
        super().__init__(message)


class DuplicateKeyError(ValidationError):
    """Raised when a write violates a uniqueness constraint."""

    error_type = "duplicate_key"

    def __init__(self, message: str = "Resource already exists"):
        super().__init__(message)


# Storage errors (500)
class StorageError(AppException):
    """Raised when the persistence layer fails."""

    status_code = 500
    error_type = "storage_error"

    def __init__(self, message: str = "Storage operation failed"):
        super().__init__(message)


# External service errors (502)
class ExternalIntegrationError(AppException):
    """Raised inside the e-paper adapter when the provider misbehaves.

    Never escapes to a request handler: the adapter converts it into a
    PushResult or an empty snapshot.
    """

    status_code = 502
    error_type = "external_integration_error"

    def __init__(self, message: str = "External status provider error"):
        super().__init__(message)


# Internal errors (500)
class InternalError(AppException):
    """Raised for internal server errors."""

    status_code = 500
    error_type = "internal_error"

    def __init__(self, message: str = "An internal error occurred"):
        super().__init__(message)
