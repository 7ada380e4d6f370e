"""Pydantic schemas for task operations."""

from datetime import UTC, datetime
from typing import Annotated, Any, Self
from uuid import UUID

from pydantic import AfterValidator, BaseModel, ConfigDict, Field

from taskboard.core.constants import (
    MAX_TASK_DESCRIPTION_LENGTH,
    MAX_TITLE_LENGTH,
    MIN_TITLE_LENGTH,
)
from taskboard.core.utils.text import parse_tags
from taskboard.core.web.forms import optional_text
from taskboard.modules.tasks.models import TaskPriority, TaskStatus


def _as_utc(value: datetime | None) -> datetime | None:
    # Date-only form input parses as a naive midnight
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


Title = Annotated[str, Field(min_length=MIN_TITLE_LENGTH, max_length=MAX_TITLE_LENGTH)]
Description = Annotated[str | None, Field(max_length=MAX_TASK_DESCRIPTION_LENGTH)]
DueDate = Annotated[datetime | None, AfterValidator(_as_utc)]
Tag = Annotated[str, Field(min_length=1)]


def _form_payload(form: dict[str, str], partial: bool) -> dict[str, Any]:
    """Map task form fields onto schema fields.

    Blank optional text clears the value. Blank status or priority is left
    out so defaults (create) or current values (update) apply.
    """
    payload: dict[str, Any] = {}
    if "title" in form or not partial:
        payload["title"] = form.get("title", "")
    for key in ("description", "due_date"):
        if key in form:
            payload[key] = optional_text(form[key])
    for key in ("status", "priority"):
        value = optional_text(form.get(key))
        if value is not None:
            payload[key] = value
    if "tags" in form or not partial:
        payload["tags"] = parse_tags(form.get("tags"))
    return payload


# ============================================================
# Input Schemas
# ============================================================


class TaskCreate(BaseModel):
    """Schema for creating a task.

    Status, priority and tags are optional; the service applies PENDING,
    MEDIUM and an empty list.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    title: Title
    description: Description = None
    due_date: DueDate = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    tags: list[Tag] = Field(default_factory=list)

    @classmethod
    def from_form(cls, form: dict[str, str]) -> Self:
        """Validate a submitted create form."""
        return cls.model_validate(_form_payload(form, partial=False))


class TaskUpdate(BaseModel):
    """Schema for updating a task. Unset fields are left unchanged."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: Title | None = None
    description: Description = None
    due_date: DueDate = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    tags: list[Tag] | None = None

    @classmethod
    def from_form(cls, form: dict[str, str]) -> Self:
        """Validate a submitted edit form."""
        return cls.model_validate(_form_payload(form, partial=True))


class TaskStatusUpdate(BaseModel):
    """Body of the status toggle endpoint."""

    status: TaskStatus


# ============================================================
# Response Schemas
# ============================================================


class TaskOwner(BaseModel):
    """Name and email of the user owning a task."""

    name: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class TaskResponse(BaseModel):
    """Schema for task response data."""

    id: int
    tenant_id: UUID
    user_id: UUID
    title: str
    description: str | None = None
    due_date: datetime | None = None
    status: TaskStatus
    priority: TaskPriority
    tags: list[str]
    created_at: datetime
    updated_at: datetime
    user: TaskOwner

    model_config = ConfigDict(from_attributes=True)


class TaskStatusResult(BaseModel):
    """Response of the status toggle endpoint."""

    success: bool = True
    task: TaskResponse
