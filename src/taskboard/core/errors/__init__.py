"""Error handling module: exception taxonomy and negotiated error responses."""

from taskboard.core.errors.exceptions import (
    AppException,
    ConflictError,
    ForbiddenError,
    LoginRequiredError,
    NotFoundError,
    TenantNotFoundError,
    UnauthorizedError,
)
from taskboard.core.errors.handlers import (
    FieldError,
    ProblemDetail,
    register_exception_handlers,
)


__all__ = [
    # Exceptions
    "AppException",
    "ConflictError",
    # Handlers
    "FieldError",
    "ForbiddenError",
    "LoginRequiredError",
    "NotFoundError",
    "ProblemDetail",
    "TenantNotFoundError",
    "UnauthorizedError",
    "register_exception_handlers",
]
