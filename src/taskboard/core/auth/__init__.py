"""Access gate: password hashing, request middleware and role checks."""

from taskboard.core.auth.backend import hash_password, verify_password
from taskboard.core.auth.dependencies import (
    AdminUser,
    TenantContext,
    get_current_user,
    get_operator_user,
    require_admin,
    require_auth,
    require_role,
)
from taskboard.core.auth.middleware import MethodOverrideMiddleware, RequestIdMiddleware


__all__ = [
    # Dependencies
    "AdminUser",
    # Middleware
    "MethodOverrideMiddleware",
    "RequestIdMiddleware",
    "TenantContext",
    "get_current_user",
    "get_operator_user",
    # Password utilities
    "hash_password",
    "require_admin",
    "require_auth",
    "require_role",
    "verify_password",
]
