"""Task repository for database operations."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends
from sqlalchemy import func, select

from taskboard.api.dependencies import DBSession
from taskboard.modules.tasks.models import Task, TaskStatus


class TaskRepository:
    """Repository for Task database operations.

    Every query is scoped to a tenant. A task id that exists under another
    tenant behaves exactly like a missing id.
    """

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, task: Task) -> Task:
        """Create a new task.

        Args:
            task: Task instance to create

        Returns:
            The created task with ID and owner populated
        """
        self.session.add(task)
        await self.session.flush()
        await self.session.refresh(task)
        return task

    async def get(self, task_id: int, tenant_id: UUID) -> Task | None:
        """Get a task by ID within a tenant.

        Args:
            task_id: The task's ID
            tenant_id: The tenant the task must belong to

        Returns:
            Task if found in that tenant, None otherwise
        """
        stmt = select(Task).where(Task.id == task_id, Task.tenant_id == tenant_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_by_tenant(
        self,
        tenant_id: UUID,
        status: TaskStatus | None = None,
    ) -> list[Task]:
        """List a tenant's tasks, newest first.

        Args:
            tenant_id: The tenant's UUID
            status: Optional status filter

        Returns:
            Tasks with their owners loaded
        """
        stmt = select(Task).where(Task.tenant_id == tenant_id)
        if status is not None:
            stmt = stmt.where(Task.status == status)
        stmt = stmt.order_by(Task.created_at.desc(), Task.id.desc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def update(self, task: Task) -> Task:
        """Persist changes made to a task.

        Args:
            task: Task instance with updated fields

        Returns:
            The updated task
        """
        await self.session.flush()
        await self.session.refresh(task)
        return task

    async def delete(self, task: Task) -> None:
        """Delete a task.

        Args:
            task: Task instance to delete
        """
        await self.session.delete(task)
        await self.session.flush()

    async def count_by_tenant(
        self,
        tenant_id: UUID,
        status: TaskStatus | None = None,
    ) -> int:
        """Count a tenant's tasks, optionally only those in one status."""
        stmt = select(func.count()).select_from(Task).where(Task.tenant_id == tenant_id)
        if status is not None:
            stmt = stmt.where(Task.status == status)
        result = await self.session.execute(stmt)
        return result.scalar_one()


# Type alias for dependency injection
TaskRepo = Annotated[TaskRepository, Depends(TaskRepository)]
