"""User repository for database operations."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends
from sqlalchemy import func, select

from taskboard.api.dependencies import DBSession
from taskboard.modules.tasks.models import Task
from taskboard.modules.users.models import User


class UserRepository:
    """Repository for User database operations.

    All queries are scoped to a tenant.
    """

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, user: User) -> User:
        """Create a new user.

        Args:
            user: User instance to create

        Returns:
            The created user with ID populated
        """
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def get_by_id(self, user_id: UUID, tenant_id: UUID) -> User | None:
        """Get a user by ID within a tenant."""
        stmt = select(User).where(User.id == user_id, User.tenant_id == tenant_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str, tenant_id: UUID) -> User | None:
        """Get a user by email address within a tenant."""
        stmt = select(User).where(User.email == email, User.tenant_id == tenant_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def first_active(self, tenant_id: UUID) -> User | None:
        """Get the earliest-created active user of a tenant.

        Args:
            tenant_id: The tenant's UUID

        Returns:
            The user, or None if the tenant has no active user
        """
        stmt = (
            select(User)
            .where(User.tenant_id == tenant_id, User.is_active.is_(True))
            .order_by(User.created_at.asc(), User.id.asc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_with_task_counts(self, tenant_id: UUID) -> list[tuple[User, int]]:
        """List a tenant's users with the number of tasks each one owns.

        Args:
            tenant_id: The tenant's UUID

        Returns:
            (user, task_count) pairs, oldest user first
        """
        stmt = (
            select(User, func.count(Task.id))
            .outerjoin(Task, (Task.user_id == User.id) & (Task.tenant_id == tenant_id))
            .where(User.tenant_id == tenant_id)
            .group_by(User.id)
            .order_by(User.created_at.asc())
        )
        result = await self.session.execute(stmt)
        return [(user, count) for user, count in result.all()]

    async def count_by_tenant(self, tenant_id: UUID) -> int:
        """Count a tenant's users."""
        stmt = select(func.count()).select_from(User).where(User.tenant_id == tenant_id)
        result = await self.session.execute(stmt)
        return result.scalar_one()


# Type alias for dependency injection
UserRepo = Annotated[UserRepository, Depends(UserRepository)]
