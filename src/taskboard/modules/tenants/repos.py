"""Tenant repository for database operations."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends
from sqlalchemy import delete, func, select

from taskboard.api.dependencies import DBSession
from taskboard.modules.tasks.models import Task
from taskboard.modules.tenants.models import Tenant, TenantConfig
from taskboard.modules.users.models import User


class TenantRepository:
    """Repository for Tenant database operations.

    Tenants are the root of the data model, so unlike the other
    repositories these queries are not tenant-scoped.
    """

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, tenant: Tenant) -> Tenant:
        """Create a tenant together with its config.

        Args:
            tenant: Tenant instance with ``config`` attached

        Returns:
            The created tenant with ID populated
        """
        self.session.add(tenant)
        await self.session.flush()
        await self.session.refresh(tenant)
        return tenant

    async def get_by_id(self, tenant_id: UUID) -> Tenant | None:
        """Get a tenant by ID, active or not."""
        stmt = select(Tenant).where(Tenant.id == tenant_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_slug(self, slug: str, *, active_only: bool = False) -> Tenant | None:
        """Get a tenant by slug.

        Args:
            slug: The tenant's slug
            active_only: Ignore inactive tenants

        Returns:
            Tenant if found, None otherwise
        """
        stmt = select(Tenant).where(Tenant.slug == slug)
        if active_only:
            stmt = stmt.where(Tenant.is_active.is_(True))
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_domain(self, domain: str, *, active_only: bool = False) -> Tenant | None:
        """Get a tenant by the host name it is served on."""
        stmt = select(Tenant).where(Tenant.domain == domain.lower())
        if active_only:
            stmt = stmt.where(Tenant.is_active.is_(True))
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def slug_exists(self, slug: str, exclude_id: UUID | None = None) -> bool:
        """Check whether another tenant already uses a slug."""
        stmt = select(Tenant.id).where(Tenant.slug == slug)
        if exclude_id is not None:
            stmt = stmt.where(Tenant.id != exclude_id)
        result = await self.session.execute(stmt.limit(1))
        return result.scalar_one_or_none() is not None

    async def domain_exists(self, domain: str, exclude_id: UUID | None = None) -> bool:
        """Check whether another tenant already uses a domain."""
        stmt = select(Tenant.id).where(Tenant.domain == domain.lower())
        if exclude_id is not None:
            stmt = stmt.where(Tenant.id != exclude_id)
        result = await self.session.execute(stmt.limit(1))
        return result.scalar_one_or_none() is not None

    async def list_with_counts(self) -> list[tuple[Tenant, int, int]]:
        """List all tenants, newest first, with user and task totals.

        Returns:
            (tenant, user_count, task_count) triples
        """
        user_count = (
            select(func.count(User.id))
            .where(User.tenant_id == Tenant.id)
            .correlate(Tenant)
            .scalar_subquery()
        )
        task_count = (
            select(func.count(Task.id))
            .where(Task.tenant_id == Tenant.id)
            .correlate(Tenant)
            .scalar_subquery()
        )
        stmt = select(Tenant, user_count, task_count).order_by(
            Tenant.created_at.desc(), Tenant.name.asc()
        )
        result = await self.session.execute(stmt)
        return [(tenant, users, tasks) for tenant, users, tasks in result.all()]

    async def update(self, tenant: Tenant) -> Tenant:
        """Persist changes made to a tenant and its config."""
        await self.session.flush()
        await self.session.refresh(tenant)
        return tenant

    async def delete(self, tenant_id: UUID) -> None:
        """Delete a tenant and everything scoped to it.

        Children go first so the delete does not rely on the database
        enforcing ON DELETE CASCADE.
        """
        await self.session.execute(delete(Task).where(Task.tenant_id == tenant_id))
        await self.session.execute(delete(User).where(User.tenant_id == tenant_id))
        await self.session.execute(
            delete(TenantConfig).where(TenantConfig.tenant_id == tenant_id)
        )
        await self.session.execute(delete(Tenant).where(Tenant.id == tenant_id))
        await self.session.flush()

    async def count(self, *, active_only: bool = False) -> int:
        """Count tenants."""
        stmt = select(func.count()).select_from(Tenant)
        if active_only:
            stmt = stmt.where(Tenant.is_active.is_(True))
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def count_users(self) -> int:
        """Count users across all tenants."""
        result = await self.session.execute(select(func.count()).select_from(User))
        return result.scalar_one()

    async def count_tasks(self) -> int:
        """Count tasks across all tenants."""
        result = await self.session.execute(select(func.count()).select_from(Task))
        return result.scalar_one()


# Type alias for dependency injection
TenantRepo = Annotated[TenantRepository, Depends(TenantRepository)]
