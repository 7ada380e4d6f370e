"""Task pages and the status toggle endpoint.

The router is mounted at the site root and again under ``/{tenant_slug}``.
Redirects go through ``RequestContext.url`` so they keep the prefix the
request arrived with.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Query, Request, status
from fastapi.responses import JSONResponse, RedirectResponse
from pydantic import ValidationError as PydanticValidationError
from starlette.responses import Response

from taskboard.core.auth import TenantContext
from taskboard.core.errors import FieldError
from taskboard.core.tenancy import RequestContext
from taskboard.core.utils.text import format_tags
from taskboard.core.web import render, wants_json
from taskboard.core.web.forms import field_errors, read_form
from taskboard.modules.tasks.models import Task, TaskPriority, TaskStatus
from taskboard.modules.tasks.schemas import (
    TaskCreate,
    TaskResponse,
    TaskStatusResult,
    TaskStatusUpdate,
    TaskUpdate,
)
from taskboard.modules.tasks.services import TaskSvc


router = APIRouter(prefix="/tasks", tags=["tasks"])


def _task_values(task: Task) -> dict[str, str]:
    """Form values for editing an existing task."""
    return {
        "title": task.title,
        "description": task.description or "",
        "due_date": task.due_date.date().isoformat() if task.due_date else "",
        "status": task.status.value,
        "priority": task.priority.value,
        "tags": format_tags(task.tags),
    }


def _render_form(
    request: Request,
    ctx: RequestContext,
    values: dict[str, str],
    task: Task | None = None,
    errors: list[FieldError] | None = None,
    status_code: int = status.HTTP_200_OK,
) -> Response:
    return render(
        request,
        "tasks/form.html",
        {
            "ctx": ctx,
            "task": task,
            "values": values,
            "errors": errors or [],
            "statuses": list(TaskStatus),
            "priorities": list(TaskPriority),
        },
        status_code=status_code,
    )


@router.get(
    "",
    summary="List tasks",
    description="Lists the tenant's tasks, newest first, optionally filtered by status.",
)
async def list_tasks(
    request: Request,
    ctx: TenantContext,
    service: TaskSvc,
    status_filter: Annotated[TaskStatus | None, Query(alias="status")] = None,
) -> Response:
    """Render the task list."""
    tasks = await service.list_tasks(ctx.tenant.id, status=status_filter)
    return render(
        request,
        "tasks/index.html",
        {
            "ctx": ctx,
            "tasks": tasks,
            "status_filter": status_filter,
            "statuses": list(TaskStatus),
        },
    )


@router.get(
    "/create",
    summary="New task form",
)
async def new_task(request: Request, ctx: TenantContext) -> Response:
    """Render an empty task form."""
    return _render_form(request, ctx, values={})


@router.post(
    "",
    summary="Create task",
    description="Creates a task owned by the current user. Invalid input re-renders the form.",
)
async def create_task(request: Request, ctx: TenantContext, service: TaskSvc) -> Response:
    """Create a task from the submitted form."""
    form = await read_form(request)
    try:
        data = TaskCreate.from_form(form)
    except PydanticValidationError as exc:
        return _render_form(
            request,
            ctx,
            values=form,
            errors=field_errors(exc),
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        )

    await service.create_task(data, ctx.tenant.id, ctx.current_user.id)
    return RedirectResponse(ctx.url("/tasks"), status_code=status.HTTP_303_SEE_OTHER)


@router.get(
    "/{task_id}/edit",
    summary="Edit task form",
)
async def edit_task(
    request: Request,
    task_id: int,
    ctx: TenantContext,
    service: TaskSvc,
) -> Response:
    """Render the edit form pre-filled with the task."""
    task = await service.get_task(task_id, ctx.tenant.id)
    return _render_form(request, ctx, values=_task_values(task), task=task)


@router.put(
    "/{task_id}",
    summary="Update task",
    description="Applies the submitted form to a task. Invalid input re-renders the form.",
)
async def update_task(
    request: Request,
    task_id: int,
    ctx: TenantContext,
    service: TaskSvc,
) -> Response:
    """Update a task from the submitted form."""
    task = await service.get_task(task_id, ctx.tenant.id)
    form = await read_form(request)
    try:
        data = TaskUpdate.from_form(form)
    except PydanticValidationError as exc:
        return _render_form(
            request,
            ctx,
            values=form,
            task=task,
            errors=field_errors(exc),
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        )

    await service.update_task(task_id, data, ctx.tenant.id)
    return RedirectResponse(ctx.url("/tasks"), status_code=status.HTTP_303_SEE_OTHER)


@router.delete(
    "/{task_id}",
    summary="Delete task",
)
async def delete_task(
    request: Request,
    task_id: int,
    ctx: TenantContext,
    service: TaskSvc,
) -> Response:
    """Delete a task."""
    await service.delete_task(task_id, ctx.tenant.id)
    if wants_json(request):
        return JSONResponse({"success": True})
    return RedirectResponse(ctx.url("/tasks"), status_code=status.HTTP_303_SEE_OTHER)


@router.patch(
    "/{task_id}/status",
    response_model=TaskStatusResult,
    summary="Change task status",
    description=(
        "Takes {status} as JSON and returns {success, task}. "
        "Failures return a problem document with an error member."
    ),
)
async def update_task_status(
    task_id: int,
    data: TaskStatusUpdate,
    ctx: TenantContext,
    service: TaskSvc,
) -> Any:
    """Change only the status of a task."""
    task = await service.update_task_status(task_id, data.status, ctx.tenant.id)
    return TaskStatusResult(task=TaskResponse.model_validate(task))
