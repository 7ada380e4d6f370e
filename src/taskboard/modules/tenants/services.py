"""Tenant service for business logic."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Annotated, Any
from uuid import UUID

import structlog
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.api.dependencies import DatabaseHandle
from taskboard.core.constants import (
    DEFAULT_ALLOW_REGISTRATION,
    DEFAULT_ALLOW_TASK_COMMENTS,
    DEFAULT_MAX_TASKS_PER_USER,
    DEFAULT_PRIMARY_COLOR,
    DEFAULT_SECONDARY_COLOR,
)
from taskboard.core.errors import ConflictError, NotFoundError
from taskboard.modules.tasks.models import TaskStatus
from taskboard.modules.tasks.repos import TaskRepository
from taskboard.modules.tenants.models import Tenant, TenantConfig
from taskboard.modules.tenants.repos import TenantRepo
from taskboard.modules.tenants.schemas import (
    DashboardStats,
    TenantConfigInput,
    TenantCreate,
    TenantDetail,
    TenantResponse,
    TenantStats,
    TenantSummary,
    TenantUpdate,
    TenantUserSummary,
)
from taskboard.modules.users.repos import UserRepository
from taskboard.modules.users.services import UserSvc


logger = structlog.get_logger()

CONFIG_DEFAULTS: dict[str, Any] = {
    "primary_color": DEFAULT_PRIMARY_COLOR,
    "secondary_color": DEFAULT_SECONDARY_COLOR,
    "allow_registration": DEFAULT_ALLOW_REGISTRATION,
    "max_tasks_per_user": DEFAULT_MAX_TASKS_PER_USER,
    "allow_task_comments": DEFAULT_ALLOW_TASK_COMMENTS,
}


def _config_values(data: TenantConfigInput | None, *, with_defaults: bool) -> dict[str, Any]:
    """Config columns to write.

    Fields left unset, and None for columns that have a default, are
    skipped. With ``with_defaults`` the documented defaults fill the gaps.
    """
    values: dict[str, Any] = dict(CONFIG_DEFAULTS) if with_defaults else {}
    if data is None:
        return values
    for field, value in data.model_dump(exclude_unset=True).items():
        if value is None and field in CONFIG_DEFAULTS:
            continue
        values[field] = value
    return values


class TenantService:
    """Service for tenant administration.

    Works on the request session through the repository. Statistics are
    the exception: their counts run concurrently, each on its own session
    drawn from the database handle.
    """

    def __init__(self, repo: TenantRepo, users: UserSvc, database: DatabaseHandle) -> None:
        self.repo = repo
        self.users = users
        self.database = database

    async def list_tenants(self) -> list[TenantSummary]:
        """List all tenants, newest first, with user and task totals."""
        rows = await self.repo.list_with_counts()
        return [
            TenantSummary(
                tenant=TenantResponse.model_validate(tenant),
                user_count=user_count,
                task_count=task_count,
            )
            for tenant, user_count, task_count in rows
        ]

    async def get_tenant(self, tenant_id: UUID) -> TenantDetail:
        """Get a tenant with its config and each member's task count.

        Raises:
            NotFoundError: If the tenant does not exist
        """
        tenant = await self._get_or_404(tenant_id)
        rows = await self.users.repo.list_with_task_counts(tenant.id)
        members = [
            TenantUserSummary(
                id=user.id,
                name=user.name,
                email=user.email,
                role=user.role.value,
                is_active=user.is_active,
                task_count=task_count,
            )
            for user, task_count in rows
        ]
        return TenantDetail(
            tenant=TenantResponse.model_validate(tenant),
            users=members,
            user_count=len(members),
            task_count=sum(member.task_count for member in members),
        )

    async def get_tenant_by_slug(self, slug: str) -> Tenant | None:
        """Get a tenant by slug, active or not."""
        return await self.repo.get_by_slug(slug)

    async def get_tenant_model(self, tenant_id: UUID) -> Tenant:
        """Get the tenant row itself, for pre-filling the edit form.

        Raises:
            NotFoundError: If the tenant does not exist
        """
        return await self._get_or_404(tenant_id)

    async def create_tenant(self, data: TenantCreate) -> Tenant:
        """Create a tenant, its config and its initial administrator.

        All rows are written on the request session, so they commit or
        roll back together.

        Args:
            data: Validated tenant fields

        Returns:
            The created tenant with config

        Raises:
            ConflictError: If the slug or domain is already in use
        """
        await self._ensure_unique(slug=data.slug, domain=data.domain)

        tenant = Tenant(
            name=data.name,
            slug=data.slug,
            domain=data.domain,
            config=TenantConfig(**_config_values(data.config, with_defaults=True)),
        )
        tenant = await self.repo.create(tenant)
        await self.users.create_default_user(tenant.id)

        logger.info("tenant_created", tenant_id=str(tenant.id), slug=tenant.slug)
        return tenant

    async def update_tenant(self, tenant_id: UUID, data: TenantUpdate) -> Tenant:
        """Apply a partial update to a tenant and upsert its config.

        Raises:
            NotFoundError: If the tenant does not exist
            ConflictError: If the new slug or domain is already in use
        """
        tenant = await self._get_or_404(tenant_id)
        changes = data.model_dump(exclude_unset=True, exclude={"config"})

        await self._ensure_unique(
            slug=changes.get("slug"),
            domain=changes.get("domain"),
            exclude_id=tenant.id,
        )

        for field, value in changes.items():
            if value is None and field != "domain":
                continue
            setattr(tenant, field, value)

        if "config" in data.model_fields_set:
            if tenant.config is None:
                tenant.config = TenantConfig(
                    **_config_values(data.config, with_defaults=True)
                )
            else:
                for field, value in _config_values(data.config, with_defaults=False).items():
                    setattr(tenant.config, field, value)

        tenant = await self.repo.update(tenant)
        logger.info("tenant_updated", tenant_id=str(tenant.id))
        return tenant

    async def delete_tenant(self, tenant_id: UUID) -> None:
        """Delete a tenant with its config, users and tasks.

        Raises:
            NotFoundError: If the tenant does not exist
        """
        await self._get_or_404(tenant_id)
        await self.repo.delete(tenant_id)
        logger.info("tenant_deleted", tenant_id=str(tenant_id))

    async def get_tenant_stats(self, tenant_id: UUID) -> TenantStats:
        """Count a tenant's users and tasks concurrently.

        The completion rate is the percentage of completed tasks, or 0 for
        a tenant without tasks.
        """
        users, tasks, completed, pending = await asyncio.gather(
            self._count(lambda s: UserRepository(s).count_by_tenant(tenant_id)),
            self._count(lambda s: TaskRepository(s).count_by_tenant(tenant_id)),
            self._count(
                lambda s: TaskRepository(s).count_by_tenant(tenant_id, TaskStatus.COMPLETED)
            ),
            self._count(
                lambda s: TaskRepository(s).count_by_tenant(tenant_id, TaskStatus.PENDING)
            ),
        )
        completion_rate = completed / tasks * 100 if tasks else 0
        return TenantStats(
            users=users,
            tasks=tasks,
            completed_tasks=completed,
            pending_tasks=pending,
            completion_rate=completion_rate,
        )

    async def get_dashboard_stats(self) -> DashboardStats:
        """Totals across all tenants."""
        return DashboardStats(
            total_tenants=await self.repo.count(),
            active_tenants=await self.repo.count(active_only=True),
            total_users=await self.repo.count_users(),
            total_tasks=await self.repo.count_tasks(),
        )

    # ============================================================
    # Helpers
    # ============================================================

    async def _get_or_404(self, tenant_id: UUID) -> Tenant:
        tenant = await self.repo.get_by_id(tenant_id)
        if tenant is None:
            raise NotFoundError(
                "Tenant not found", resource="tenant", resource_id=str(tenant_id)
            )
        return tenant

    async def _ensure_unique(
        self,
        slug: str | None = None,
        domain: str | None = None,
        exclude_id: UUID | None = None,
    ) -> None:
        if slug and await self.repo.slug_exists(slug, exclude_id):
            raise ConflictError(
                "Slug is already in use",
                error_code="slug_taken",
                details={"field": "slug", "slug": slug},
            )
        if domain and await self.repo.domain_exists(domain, exclude_id):
            raise ConflictError(
                "Domain is already in use",
                error_code="domain_taken",
                details={"field": "domain", "domain": domain},
            )

    async def _count(self, query: Callable[[AsyncSession], Awaitable[int]]) -> int:
        async with self.database.session() as session:
            return await query(session)


# Type alias for dependency injection
TenantSvc = Annotated[TenantService, Depends(TenantService)]
