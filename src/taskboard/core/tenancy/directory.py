"""Tenant directory: finds the tenant a request belongs to."""

from typing import TYPE_CHECKING

import structlog

from taskboard.core.constants import RESERVED_PATH_SEGMENTS
from taskboard.core.tenancy.context import TenantMatch
from taskboard.core.utils.text import strip_port


if TYPE_CHECKING:
    from taskboard.modules.tenants.models import Tenant
    from taskboard.modules.tenants.repos import TenantRepository


logger = structlog.get_logger()


def first_path_segment(path: str) -> str | None:
    """Return the first non-empty segment of a URL path."""
    for segment in path.split("/"):
        if segment:
            return segment
    return None


class TenantDirectory:
    """Looks up active tenants by host name and path.

    Resolution order:
    1. Active tenant whose domain equals the request host (port ignored)
    2. Active tenant whose slug equals the first path segment, unless that
       segment is reserved (``admin``)
    3. Active tenant with the fallback slug, when one is configured

    Args:
        repo: Tenant repository bound to the request session
        fallback_slug: Slug of the tenant serving unmatched requests, or
            None to disable the fallback
    """

    def __init__(self, repo: "TenantRepository", fallback_slug: str | None = None) -> None:
        self.repo = repo
        self.fallback_slug = fallback_slug

    async def resolve(self, host: str | None, path: str) -> TenantMatch | None:
        """Resolve the tenant for a request.

        Args:
            host: Value of the Host header, possibly with a port
            path: Request path

        Returns:
            The match, or None when no step finds an active tenant
        """
        domain = strip_port(host) if host else ""
        if domain:
            tenant = await self.repo.get_by_domain(domain, active_only=True)
            if tenant is not None:
                return TenantMatch(tenant=tenant, matched_by="domain")

        segment = first_path_segment(path)
        if segment and segment not in RESERVED_PATH_SEGMENTS:
            tenant = await self.repo.get_by_slug(segment, active_only=True)
            if tenant is not None:
                return TenantMatch(tenant=tenant, matched_by="slug", base_path=f"/{segment}")

        if self.fallback_slug:
            tenant = await self.repo.get_by_slug(self.fallback_slug, active_only=True)
            if tenant is not None:
                return TenantMatch(tenant=tenant, matched_by="fallback")

        logger.debug("tenant_unresolved", host=domain, path=path)
        return None

    async def find_by_slug(self, slug: str) -> "Tenant | None":
        """Get an active tenant by slug."""
        return await self.repo.get_by_slug(slug, active_only=True)
