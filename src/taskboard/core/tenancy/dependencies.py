"""FastAPI dependencies for tenant resolution.

Resolution runs as a dependency of the tenant routers only, so admin
routes never resolve a tenant.
"""

from typing import Annotated

import structlog
from fastapi import Depends, Request

from taskboard.api.dependencies import DBSession
from taskboard.config import settings
from taskboard.core.errors import TenantNotFoundError
from taskboard.core.tenancy.context import TenantMatch
from taskboard.core.tenancy.directory import TenantDirectory


async def get_tenant_directory(db: DBSession) -> TenantDirectory:
    """Build the tenant directory for the request session."""
    from taskboard.modules.tenants.repos import TenantRepository  # noqa: PLC0415

    return TenantDirectory(TenantRepository(db), fallback_slug=settings.default_tenant_slug)


Directory = Annotated[TenantDirectory, Depends(get_tenant_directory)]


async def resolve_tenant(request: Request, directory: Directory) -> TenantMatch:
    """Resolve the tenant for the current request.

    Args:
        request: The incoming request
        directory: Tenant directory

    Returns:
        The matched tenant

    Raises:
        TenantNotFoundError: If no active tenant matches
    """
    host = request.headers.get("host")
    match = await directory.resolve(host, request.url.path)
    if match is None:
        raise TenantNotFoundError(details={"host": host, "path": request.url.path})

    request.state.tenant_id = match.tenant.id
    structlog.contextvars.bind_contextvars(
        tenant_id=str(match.tenant.id),
        tenant_slug=match.tenant.slug,
    )
    return match


ResolvedTenant = Annotated[TenantMatch, Depends(resolve_tenant)]
