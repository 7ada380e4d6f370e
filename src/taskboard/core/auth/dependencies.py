"""FastAPI dependencies for the access gate.

There is no session or credential check yet: the "current user" of a
tenant is its earliest-created active user, and the admin console acts
as the first active user of the operator tenant (``admin_tenant_slug``).
Replace ``get_current_user`` and ``get_operator_user`` once login exists;
the role checks and request context built on top of them stay as they are.
"""

from collections.abc import Awaitable, Callable
from typing import Annotated, Any

import structlog
from fastapi import Depends, Request

from taskboard.api.dependencies import DBSession
from taskboard.config import settings
from taskboard.core.errors import ForbiddenError, LoginRequiredError
from taskboard.core.tenancy import RequestContext, ResolvedTenant
from taskboard.core.tenancy.dependencies import Directory
from taskboard.modules.users.models import UserRole


async def get_current_user(
    request: Request,
    match: ResolvedTenant,
    db: DBSession,
) -> Any:  # Returns User, but use Any to avoid circular import
    """Get the acting user of the resolved tenant.

    Raises:
        LoginRequiredError: If the tenant has no active user
    """
    from taskboard.modules.users.repos import UserRepository  # noqa: PLC0415

    user = await UserRepository(db).first_active(match.tenant.id)
    if user is None:
        raise LoginRequiredError(details={"tenant_id": str(match.tenant.id)})

    request.state.user_id = user.id
    structlog.contextvars.bind_contextvars(user_id=str(user.id))
    return user


async def require_auth(
    match: ResolvedTenant,
    user: Annotated[Any, Depends(get_current_user)],
) -> RequestContext:
    """Build the request context for tenant pages.

    Returns:
        Tenant, acting user and the base path links must stay under
    """
    return RequestContext(tenant=match.tenant, current_user=user, base_path=match.base_path)


async def get_operator_user(
    request: Request,
    directory: Directory,
    db: DBSession,
) -> Any:
    """Get the user acting on the admin console.

    Raises:
        LoginRequiredError: If the operator tenant is missing or has no
            active user
    """
    from taskboard.modules.users.repos import UserRepository  # noqa: PLC0415

    tenant = await directory.find_by_slug(settings.admin_tenant_slug)
    user = await UserRepository(db).first_active(tenant.id) if tenant else None
    if user is None:
        raise LoginRequiredError(details={"tenant_slug": settings.admin_tenant_slug})

    request.state.user_id = user.id
    structlog.contextvars.bind_contextvars(user_id=str(user.id))
    return user


def require_role(
    *roles: UserRole,
    user_dependency: Callable[..., Awaitable[Any]] = get_operator_user,
) -> Callable[..., Awaitable[Any]]:
    """Create a dependency that admits only users holding one of ``roles``.

    Args:
        *roles: Accepted roles
        user_dependency: Dependency resolving the user to check

    Returns:
        A dependency returning the admitted user

    Raises:
        ForbiddenError: From the dependency, if the user's role is not accepted
    """
    allowed = frozenset(roles)

    async def check_role(user: Annotated[Any, Depends(user_dependency)]) -> Any:
        if user.role not in allowed:
            raise ForbiddenError(
                "Access denied",
                error_code="insufficient_role",
                details={"allowed_roles": sorted(str(role) for role in allowed)},
            )
        return user

    return check_role


# Admits ADMIN and SUPER_ADMIN operators to the admin console
require_admin = require_role(UserRole.ADMIN, UserRole.SUPER_ADMIN)

# Type aliases for cleaner dependency injection
TenantContext = Annotated[RequestContext, Depends(require_auth)]
AdminUser = Annotated[Any, Depends(require_admin)]
