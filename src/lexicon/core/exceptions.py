"""Centralized exception hierarchy for the application.

All custom exceptions inherit from AppException, which provides:
- Consistent error response format
- HTTP status codes
- Machine-readable error codes
- Optional details dict for additional context

Exception handlers in main.py convert these to JSON responses.
"""

from typing import Any


class AppException(Exception):
    """Base exception for all application errors.

    Provides a consistent structure for error responses with:
    - message: Human-readable error description
    - error_code: Machine-readable code (e.g., "AUTH_FAILED")
    - status_code: HTTP status code
    - details: Optional dict with additional context
    """

    def __init__(
        self,
        message: str,
        error_code: str,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dict for JSON serialization."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class AuthenticationError(AppException):
    """User authentication failed (invalid credentials, expired token, etc.)."""

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message, "AUTH_FAILED", 401)


class ResourceNotFoundError(AppException):
    """Requested resource does not exist."""

    def __init__(self, resource: str, identifier: str | None = None):
        msg = f"{resource} not found"
        if identifier:
            msg = f"{resource} not found: {identifier}"
        super().__init__(
            msg,
            f"{resource.upper().replace(' ', '_')}_NOT_FOUND",
            404,
            {"resource": resource, "id": identifier}
            if identifier
            else {"resource": resource},
        )


class ResourceExistsError(AppException):
    """Resource already exists (duplicate key, unique constraint violation)."""

    def __init__(self, resource: str, field: str | None = None):
        msg = f"{resource} already exists"
        if field:
            msg = f"{resource} with this {field} already exists"
        super().__init__(
            msg,
            f"{resource.upper().replace(' ', '_')}_EXISTS",
            409,
            {"resource": resource, "field": field} if field else {"resource": resource},
        )


class IllegalStateError(AppException):
    """Operation conflicts with the current state of a resource."""

    def __init__(self, message: str, resource: str | None = None):
        super().__init__(
            message,
            "ILLEGAL_STATE",
            409,
            {"resource": resource} if resource else {},
        )


class ValidationError(AppException):
    """Request validation failed (beyond Pydantic's automatic validation)."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(
            message,
            "VALIDATION_ERROR",
            422,
            {"field": field} if field else {},
        )
