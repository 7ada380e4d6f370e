"""Tenant resolution and per-request context."""

from taskboard.core.tenancy.context import RequestContext, TenantMatch
from taskboard.core.tenancy.dependencies import ResolvedTenant, resolve_tenant
from taskboard.core.tenancy.directory import TenantDirectory


__all__ = [
    "RequestContext",
    "ResolvedTenant",
    "TenantDirectory",
    "TenantMatch",
    "resolve_tenant",
]
