"""Unit tests for TaskService."""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from taskboard.core.errors import NotFoundError
from taskboard.modules.tasks.models import Task, TaskPriority, TaskStatus
from taskboard.modules.tasks.schemas import TaskUpdate
from taskboard.modules.tasks.services import TaskService
from tests.factories.task import TaskCreateFactory


def make_task(tenant_id=None, **overrides) -> Task:
    """Helper to create an unsaved Task."""
    values = {
        "id": 1,
        "tenant_id": tenant_id or uuid4(),
        "user_id": uuid4(),
        "title": "Write report",
        "description": "Quarterly numbers",
        "status": TaskStatus.PENDING,
        "priority": TaskPriority.MEDIUM,
        "tags": ["finance"],
    }
    values.update(overrides)
    return Task(**values)


class TestCreateTask:
    """Tests for TaskService.create_task method."""

    @pytest.mark.asyncio
    async def test_applies_defaults(self):
        """Verify status, priority and tags default to PENDING, MEDIUM and []."""
        tenant_id, user_id = uuid4(), uuid4()
        mock_repo = AsyncMock()
        mock_repo.create.side_effect = lambda task: task

        service = TaskService(repo=mock_repo)
        data = TaskCreateFactory.build(tags=[])

        result = await service.create_task(data, tenant_id, user_id)

        assert result.status == TaskStatus.PENDING
        assert result.priority == TaskPriority.MEDIUM
        assert result.tags == []
        assert result.tenant_id == tenant_id
        assert result.user_id == user_id
        mock_repo.create.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_keeps_explicit_values(self):
        """Verify submitted status, priority and tags are stored."""
        mock_repo = AsyncMock()
        mock_repo.create.side_effect = lambda task: task

        service = TaskService(repo=mock_repo)
        data = TaskCreateFactory.build(
            status=TaskStatus.IN_PROGRESS,
            priority=TaskPriority.URGENT,
            tags=["ops", "billing"],
        )

        result = await service.create_task(data, uuid4(), uuid4())

        assert result.status == TaskStatus.IN_PROGRESS
        assert result.priority == TaskPriority.URGENT
        assert result.tags == ["ops", "billing"]


class TestGetTask:
    """Tests for TaskService.get_task method."""

    @pytest.mark.asyncio
    async def test_scopes_lookup_to_tenant(self):
        """Verify the repository is queried with both id and tenant."""
        tenant_id = uuid4()
        task = make_task(tenant_id)
        mock_repo = AsyncMock()
        mock_repo.get.return_value = task

        result = await TaskService(repo=mock_repo).get_task(1, tenant_id)

        assert result is task
        mock_repo.get.assert_awaited_once_with(1, tenant_id)

    @pytest.mark.asyncio
    async def test_missing_task_raises_not_found(self):
        """Verify NotFoundError when the task is absent from the tenant."""
        mock_repo = AsyncMock()
        mock_repo.get.return_value = None

        with pytest.raises(NotFoundError) as exc_info:
            await TaskService(repo=mock_repo).get_task(42, uuid4())

        assert exc_info.value.details == {"resource": "task", "resource_id": "42"}


class TestUpdateTask:
    """Tests for TaskService.update_task method."""

    @pytest.mark.asyncio
    async def test_only_submitted_fields_change(self):
        """Verify unset fields are left alone."""
        task = make_task()
        mock_repo = AsyncMock()
        mock_repo.get.return_value = task
        mock_repo.update.side_effect = lambda t: t

        result = await TaskService(repo=mock_repo).update_task(
            1, TaskUpdate(title="Renamed"), task.tenant_id
        )

        assert result.title == "Renamed"
        assert result.description == "Quarterly numbers"
        assert result.tags == ["finance"]

    @pytest.mark.asyncio
    async def test_explicit_none_clears_optional_fields(self):
        """Verify description can be cleared but title cannot be nulled."""
        task = make_task()
        mock_repo = AsyncMock()
        mock_repo.get.return_value = task
        mock_repo.update.side_effect = lambda t: t

        result = await TaskService(repo=mock_repo).update_task(
            1, TaskUpdate(title=None, description=None), task.tenant_id
        )

        assert result.description is None
        assert result.title == "Write report"

    @pytest.mark.asyncio
    async def test_missing_task_raises_not_found(self):
        """Verify NotFoundError and no write for unknown tasks."""
        mock_repo = AsyncMock()
        mock_repo.get.return_value = None

        with pytest.raises(NotFoundError):
            await TaskService(repo=mock_repo).update_task(1, TaskUpdate(title="x"), uuid4())

        mock_repo.update.assert_not_awaited()


class TestDeleteTask:
    """Tests for TaskService.delete_task method."""

    @pytest.mark.asyncio
    async def test_deletes_existing_task(self):
        """Verify the task is passed to the repository for deletion."""
        task = make_task()
        mock_repo = AsyncMock()
        mock_repo.get.return_value = task

        await TaskService(repo=mock_repo).delete_task(1, task.tenant_id)

        mock_repo.delete.assert_awaited_once_with(task)

    @pytest.mark.asyncio
    async def test_missing_task_raises_not_found(self):
        """Verify NotFoundError and no delete for unknown tasks."""
        mock_repo = AsyncMock()
        mock_repo.get.return_value = None

        with pytest.raises(NotFoundError):
            await TaskService(repo=mock_repo).delete_task(1, uuid4())

        mock_repo.delete.assert_not_awaited()


class TestUpdateTaskStatus:
    """Tests for TaskService.update_task_status method."""

    @pytest.mark.asyncio
    async def test_changes_only_status(self):
        """Verify the narrow update touches status alone."""
        task = make_task()
        mock_repo = AsyncMock()
        mock_repo.get.return_value = task
        mock_repo.update.side_effect = lambda t: t

        result = await TaskService(repo=mock_repo).update_task_status(
            1, TaskStatus.COMPLETED, task.tenant_id
        )

        assert result.status == TaskStatus.COMPLETED
        assert result.title == "Write report"
        assert result.priority == TaskPriority.MEDIUM
