"""Unit tests for task input validation."""

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError as PydanticValidationError

from taskboard.modules.tasks.models import TaskPriority, TaskStatus
from taskboard.modules.tasks.schemas import TaskCreate, TaskStatusUpdate, TaskUpdate


class TestTaskCreate:
    """Tests for TaskCreate validation."""

    @pytest.mark.parametrize("title", ["", "   ", "x" * 101])
    def test_title_length(self, title):
        """Verify titles must be 1-100 characters after trimming."""
        with pytest.raises(PydanticValidationError):
            TaskCreate(title=title)

    def test_description_length(self):
        """Verify descriptions are capped at 500 characters."""
        TaskCreate(title="ok", description="x" * 500)
        with pytest.raises(PydanticValidationError):
            TaskCreate(title="ok", description="x" * 501)

    def test_unknown_status_is_rejected(self):
        with pytest.raises(PydanticValidationError):
            TaskCreate(title="ok", status="DONE")

    def test_due_date_accepts_iso_8601(self):
        """Verify date-only and full timestamps parse as aware datetimes."""
        day = TaskCreate(title="ok", due_date="2026-05-01")
        stamp = TaskCreate(title="ok", due_date="2026-05-01T09:30:00+02:00")

        assert day.due_date == datetime(2026, 5, 1, tzinfo=UTC)
        assert stamp.due_date is not None and stamp.due_date.tzinfo is not None

    def test_invalid_due_date(self):
        with pytest.raises(PydanticValidationError):
            TaskCreate(title="ok", due_date="next tuesday")


class TestTaskFromForm:
    """Tests for building task schemas from submitted forms."""

    def test_create_form(self):
        """Verify tags are split and blank selects fall back to defaults."""
        data = TaskCreate.from_form(
            {
                "title": "  Ship it ",
                "description": "",
                "due_date": "",
                "status": "",
                "priority": "HIGH",
                "tags": "release, ops,,",
            }
        )

        assert data.title == "Ship it"
        assert data.description is None
        assert data.due_date is None
        assert data.status is None
        assert data.priority == TaskPriority.HIGH
        assert data.tags == ["release", "ops"]

    def test_long_tags_are_accepted(self):
        long_tag = "t" * 60
        data = TaskCreate.from_form({"title": "Tagged", "tags": f"{long_tag}, short"})

        assert data.tags == [long_tag, "short"]

    def test_create_form_without_title_fails(self):
        with pytest.raises(PydanticValidationError):
            TaskCreate.from_form({})

    def test_update_form_keeps_unsubmitted_fields_unset(self):
        """Verify only submitted fields end up in the update."""
        data = TaskUpdate.from_form({"status": "COMPLETED"})

        assert data.model_fields_set == {"status"}
        assert data.status == TaskStatus.COMPLETED


class TestTaskStatusUpdate:
    """Tests for TaskStatusUpdate."""

    def test_valid_status(self):
        assert TaskStatusUpdate(status="IN_PROGRESS").status == TaskStatus.IN_PROGRESS

    def test_invalid_status(self):
        with pytest.raises(PydanticValidationError):
            TaskStatusUpdate(status="ARCHIVED")
