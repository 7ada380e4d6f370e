"""Domain exceptions for the application.

These exceptions represent business-logic errors and are converted to
error pages or RFC 7807 Problem Details responses by the exception
handlers.
"""

from typing import Any


class AppException(Exception):
    """Base exception for all application errors.

    All domain exceptions should inherit from this class.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code for clients
        status_code: HTTP status code for the response
        details: Additional error details
    """

    message: str = "An unexpected error occurred"
    error_code: str = "internal_error"
    status_code: int = 500

    def __init__(
        self,
        message: str | None = None,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.message
        self.error_code = error_code or self.error_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(AppException):
    """Raised when a requested resource is not found.

    Example:
        raise NotFoundError("Task not found", resource="task", resource_id=str(task_id))
    """

    message = "Resource not found"
    error_code = "not_found"
    status_code = 404

    def __init__(
        self,
        message: str | None = None,
        resource: str | None = None,
        resource_id: str | None = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if resource:
            details["resource"] = resource
        if resource_id:
            details["resource_id"] = resource_id
        super().__init__(message=message, details=details, **kwargs)


class TenantNotFoundError(NotFoundError):
    """Raised when no active tenant matches the request host or path."""

    message = "Organization not found"
    error_code = "tenant_not_found"


class ConflictError(AppException):
    """Raised when there's a conflict with existing data.

    Example:
        raise ConflictError("Slug already in use", details={"field": "slug"})
    """

    message = "Resource conflict"
    error_code = "conflict"
    status_code = 409


class UnauthorizedError(AppException):
    """Raised when authentication is required but not provided or invalid."""

    message = "Authentication required"
    error_code = "unauthorized"
    status_code = 401


class LoginRequiredError(UnauthorizedError):
    """Raised when no user can be resolved for the request.

    Page requests are redirected to the login path instead of receiving
    an error body.
    """

    message = "Login required"
    error_code = "login_required"


class ForbiddenError(AppException):
    """Raised when user lacks permission to access a resource.

    Example:
        raise ForbiddenError(
            "Access denied",
            details={"allowed_roles": ["ADMIN", "SUPER_ADMIN"]}
        )
    """

    message = "Access forbidden"
    error_code = "forbidden"
    status_code = 403
