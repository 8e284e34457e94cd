"""Custom exception classes for the application.

Every exception carries the HTTP status it maps to. Handlers raise them
unmodified and the exception handlers registered in ``app.main`` render
them, so no endpoint formats an error response by itself.
"""

from typing import Any, Dict, Optional


class ShopDirectoryException(Exception):
    """Base exception for all Shop Directory errors."""

    status_code: int = 500
    code: str = "SERVER_ERROR"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(ShopDirectoryException):
    """Raised when a value breaks a field rule of the shop record."""

    status_code = 400
    code = "VALIDATION_ERROR"

    def __init__(self, field: str, message: str):
        super().__init__(message, details={"field": field})
        self.field = field


class UnauthorizedError(ShopDirectoryException):
    """Raised when credentials are missing or invalid."""

    status_code = 401
    code = "UNAUTHORIZED"

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class ForbiddenError(ShopDirectoryException):
    """Raised when the authenticated shop lacks the required role."""

    status_code = 403
    code = "FORBIDDEN"

    def __init__(self, message: str = "Forbidden"):
        super().__init__(message)


class NotFoundError(ShopDirectoryException):
    """Raised when a requested resource is not found."""

    status_code = 404
    code = "NOT_FOUND"

    def __init__(self, resource: str, identifier: str):
        super().__init__(
            f"{resource} does not exist",
            details={"resource": resource, "identifier": identifier},
        )


class ConflictError(ShopDirectoryException):
    """Raised when a write collides with a unique field of another record."""

    status_code = 409
    code = "CONFLICT"

    def __init__(self, field: str):
        super().__init__(f'"{field}" already exists', details={"field": field})
        self.field = field


class InternalError(ShopDirectoryException):
    """Raised for unexpected storage failures."""

    status_code = 500
    code = "SERVER_ERROR"

    def __init__(self, error: Exception):
        super().__init__(
            "Internal server error",
            details={"error_type": type(error).__name__},
        )
