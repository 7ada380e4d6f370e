"""Admin console: dashboard and tenant provisioning.

Every route requires an ADMIN or SUPER_ADMIN operator. Tenant resolution
does not run here; the console works across tenants.
"""

from typing import Any
from uuid import UUID

import structlog
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, RedirectResponse
from pydantic import ValidationError as PydanticValidationError
from starlette.responses import Response

from taskboard.core.auth import AdminUser, require_admin
from taskboard.core.errors import ConflictError, FieldError
from taskboard.core.web import render, wants_json
from taskboard.core.web.forms import field_errors, read_form
from taskboard.modules.tenants.models import Tenant
from taskboard.modules.tenants.schemas import (
    CONFIG_BOOL_FIELDS,
    CONFIG_TEXT_FIELDS,
    TenantCreate,
    TenantUpdate,
)
from taskboard.modules.tenants.services import TenantSvc


logger = structlog.get_logger()

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


def _tenant_values(tenant: Tenant) -> dict[str, str]:
    """Flat form values for editing an existing tenant."""
    values = {
        "name": tenant.name,
        "slug": tenant.slug,
        "domain": tenant.domain or "",
        "is_active": "true" if tenant.is_active else "false",
    }
    config = tenant.config
    if config is not None:
        for field in CONFIG_TEXT_FIELDS:
            values[f"config.{field}"] = getattr(config, field) or ""
        for field in CONFIG_BOOL_FIELDS:
            values[f"config.{field}"] = "true" if getattr(config, field) else "false"
        values["config.max_tasks_per_user"] = str(config.max_tasks_per_user)
    return values


def _conflict_error(exc: ConflictError) -> FieldError:
    return FieldError(
        field=exc.details.get("field", "form"),
        message=exc.message,
        type=exc.error_code,
    )


def _render_form(
    request: Request,
    admin: Any,
    values: dict[str, str],
    tenant: Tenant | None = None,
    errors: list[FieldError] | None = None,
    status_code: int = status.HTTP_200_OK,
) -> Response:
    return render(
        request,
        "admin/tenants/form.html",
        {
            "admin": admin,
            "tenant": tenant,
            "values": values,
            "errors": errors or [],
        },
        status_code=status_code,
    )


@router.get(
    "",
    summary="Admin dashboard",
    description="All tenants with their user and task totals, plus overall totals.",
)
async def dashboard(request: Request, admin: AdminUser, service: TenantSvc) -> Response:
    """Render the admin dashboard."""
    tenants = await service.list_tenants()
    stats = await service.get_dashboard_stats()
    return render(
        request,
        "admin/dashboard.html",
        {"admin": admin, "tenants": tenants, "stats": stats},
    )


@router.get(
    "/tenants",
    summary="List tenants",
)
async def list_tenants(request: Request, admin: AdminUser, service: TenantSvc) -> Response:
    """Render the tenant list."""
    tenants = await service.list_tenants()
    return render(request, "admin/tenants/index.html", {"admin": admin, "tenants": tenants})


@router.get(
    "/tenants/create",
    summary="New tenant form",
)
async def new_tenant(request: Request, admin: AdminUser) -> Response:
    """Render an empty tenant form."""
    return _render_form(request, admin, values={})


@router.post(
    "/tenants",
    summary="Create tenant",
    description=(
        "Creates a tenant with its config (defaults fill unset fields) and a "
        "default administrator. Invalid input re-renders the form."
    ),
)
async def create_tenant(request: Request, admin: AdminUser, service: TenantSvc) -> Response:
    """Create a tenant from the submitted form."""
    form = await read_form(request)
    try:
        data = TenantCreate.from_form(form)
        tenant = await service.create_tenant(data)
    except PydanticValidationError as exc:
        return _render_form(
            request,
            admin,
            values=form,
            errors=field_errors(exc),
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        )
    except ConflictError as exc:
        return _render_form(
            request,
            admin,
            values=form,
            errors=[_conflict_error(exc)],
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        )

    return RedirectResponse(f"/admin/tenants/{tenant.id}", status_code=status.HTTP_303_SEE_OTHER)


@router.get(
    "/tenants/{tenant_id}",
    summary="Show tenant",
    description="Tenant details with config, members and their task counts, and task statistics.",
)
async def show_tenant(
    request: Request,
    tenant_id: UUID,
    admin: AdminUser,
    service: TenantSvc,
) -> Response:
    """Render a tenant's detail page."""
    detail = await service.get_tenant(tenant_id)
    stats = await service.get_tenant_stats(tenant_id)
    return render(
        request,
        "admin/tenants/show.html",
        {"admin": admin, "detail": detail, "stats": stats},
    )


@router.get(
    "/tenants/{tenant_id}/edit",
    summary="Edit tenant form",
)
async def edit_tenant(
    request: Request,
    tenant_id: UUID,
    admin: AdminUser,
    service: TenantSvc,
) -> Response:
    """Render the edit form pre-filled with the tenant and its config."""
    tenant = await service.get_tenant_model(tenant_id)
    return _render_form(request, admin, values=_tenant_values(tenant), tenant=tenant)


@router.put(
    "/tenants/{tenant_id}",
    summary="Update tenant",
    description="Updates a tenant and creates or updates its config.",
)
async def update_tenant(
    request: Request,
    tenant_id: UUID,
    admin: AdminUser,
    service: TenantSvc,
) -> Response:
    """Update a tenant from the submitted form."""
    tenant = await service.get_tenant_model(tenant_id)
    form = await read_form(request)
    try:
        data = TenantUpdate.from_form(form)
        await service.update_tenant(tenant_id, data)
    except PydanticValidationError as exc:
        return _render_form(
            request,
            admin,
            values=form,
            tenant=tenant,
            errors=field_errors(exc),
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        )
    except ConflictError as exc:
        return _render_form(
            request,
            admin,
            values=form,
            tenant=tenant,
            errors=[_conflict_error(exc)],
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        )

    return RedirectResponse(f"/admin/tenants/{tenant_id}", status_code=status.HTTP_303_SEE_OTHER)


@router.delete(
    "/tenants/{tenant_id}",
    summary="Delete tenant",
    description="Deletes a tenant together with its config, users and tasks.",
)
async def delete_tenant(
    request: Request,
    tenant_id: UUID,
    admin: AdminUser,
    service: TenantSvc,
) -> Response:
    """Delete a tenant."""
    await service.delete_tenant(tenant_id)
    logger.info("tenant_deleted_by_admin", tenant_id=str(tenant_id), admin_id=str(admin.id))
    if wants_json(request):
        return JSONResponse({"success": True})
    return RedirectResponse("/admin/tenants", status_code=status.HTTP_303_SEE_OTHER)
