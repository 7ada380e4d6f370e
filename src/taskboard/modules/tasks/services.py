"""Task service for business logic."""

from typing import Annotated, Any
from uuid import UUID

import structlog
from fastapi import Depends

from taskboard.core.errors import NotFoundError
from taskboard.modules.tasks.models import Task, TaskPriority, TaskStatus
from taskboard.modules.tasks.repos import TaskRepo
from taskboard.modules.tasks.schemas import TaskCreate, TaskUpdate


logger = structlog.get_logger()

# Columns that may not be cleared by an update
REQUIRED_FIELDS = frozenset({"title", "status", "priority", "tags"})


class TaskService:
    """Service for task management within a tenant.

    Every operation takes the tenant explicitly; a task belonging to
    another tenant is reported as not found.
    """

    def __init__(self, repo: TaskRepo) -> None:
        self.repo = repo

    async def list_tasks(
        self,
        tenant_id: UUID,
        status: TaskStatus | None = None,
    ) -> list[Task]:
        """List a tenant's tasks, newest first.

        Args:
            tenant_id: The tenant's UUID
            status: Optional status filter

        Returns:
            Tasks with their owner's name and email loaded
        """
        return await self.repo.list_by_tenant(tenant_id, status=status)

    async def get_task(self, task_id: int, tenant_id: UUID) -> Task:
        """Get a task by ID within a tenant.

        Raises:
            NotFoundError: If the task does not exist in this tenant
        """
        task = await self.repo.get(task_id, tenant_id)
        if task is None:
            raise NotFoundError("Task not found", resource="task", resource_id=str(task_id))
        return task

    async def create_task(self, data: TaskCreate, tenant_id: UUID, user_id: UUID) -> Task:
        """Create a task owned by a user of the tenant.

        Args:
            data: Validated task fields
            tenant_id: The tenant the task belongs to
            user_id: The owning user

        Returns:
            The created task
        """
        task = Task(
            tenant_id=tenant_id,
            user_id=user_id,
            title=data.title,
            description=data.description,
            due_date=data.due_date,
            status=data.status or TaskStatus.PENDING,
            priority=data.priority or TaskPriority.MEDIUM,
            tags=list(data.tags),
        )
        task = await self.repo.create(task)
        logger.info("task_created", task_id=task.id, user_id=str(user_id))
        return task

    async def update_task(self, task_id: int, data: TaskUpdate, tenant_id: UUID) -> Task:
        """Apply a partial update to a task.

        Fields that were not submitted are left unchanged. Optional fields
        submitted as None are cleared.

        Raises:
            NotFoundError: If the task does not exist in this tenant
        """
        task = await self.get_task(task_id, tenant_id)

        changes: dict[str, Any] = data.model_dump(exclude_unset=True)
        for field, value in changes.items():
            if value is None and field in REQUIRED_FIELDS:
                continue
            setattr(task, field, list(value) if field == "tags" else value)

        return await self.repo.update(task)

    async def delete_task(self, task_id: int, tenant_id: UUID) -> None:
        """Delete a task.

        Raises:
            NotFoundError: If the task does not exist in this tenant
        """
        task = await self.get_task(task_id, tenant_id)
        await self.repo.delete(task)
        logger.info("task_deleted", task_id=task_id)

    async def update_task_status(
        self,
        task_id: int,
        status: TaskStatus,
        tenant_id: UUID,
    ) -> Task:
        """Change only the status of a task.

        Raises:
            NotFoundError: If the task does not exist in this tenant
        """
        task = await self.get_task(task_id, tenant_id)
        task.status = status
        return await self.repo.update(task)


# Type alias for dependency injection
TaskSvc = Annotated[TaskService, Depends(TaskService)]
