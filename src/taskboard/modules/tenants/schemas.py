"""Pydantic schemas for tenant operations."""

import re
from datetime import datetime
from typing import Annotated, Any, Self
from uuid import UUID

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field

from taskboard.core.constants import (
    HEX_COLOR_PATTERN,
    MAX_EMAIL_LENGTH,
    MAX_NAME_LENGTH,
    MAX_PHONE_LENGTH,
    MAX_SLUG_LENGTH,
    MAX_TASKS_PER_USER,
    MAX_TENANT_NAME_LENGTH,
    MAX_URL_LENGTH,
    MIN_SLUG_LENGTH,
    MIN_TASKS_PER_USER,
    MIN_TENANT_NAME_LENGTH,
    RESERVED_SLUGS,
    SLUG_PATTERN,
)
from taskboard.core.utils.text import is_fqdn
from taskboard.core.web.forms import checkbox, optional_text, section


CONFIG_TEXT_FIELDS = (
    "primary_color",
    "secondary_color",
    "logo_url",
    "company_name",
    "company_email",
    "company_phone",
    "company_address",
)
CONFIG_BOOL_FIELDS = ("allow_registration", "allow_task_comments")


# ============================================================
# Field validators
# ============================================================


def validate_slug(value: str) -> str:
    """Slugs are lowercase letters, digits and hyphens."""
    if not re.match(SLUG_PATTERN, value):
        raise ValueError("Slug may only contain lowercase letters, numbers and hyphens")
    if value in RESERVED_SLUGS:
        raise ValueError(f"Slug '{value}' is reserved")
    return value


def validate_domain(value: str | None) -> str | None:
    """Domains must be fully qualified; stored lowercase."""
    if value is None:
        return None
    if not is_fqdn(value):
        raise ValueError("Domain must be a valid fully qualified domain name")
    return value.lower()


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _bool_field(fields: dict[str, str], key: str) -> bool | None:
    # Forms send a hidden "false" before each checkbox, so a present key
    # always carries the final state
    if key not in fields:
        return None
    return checkbox(fields, key)


Slug = Annotated[
    str,
    Field(min_length=MIN_SLUG_LENGTH, max_length=MAX_SLUG_LENGTH),
    AfterValidator(validate_slug),
]
Domain = Annotated[
    str | None,
    BeforeValidator(_blank_to_none),
    AfterValidator(validate_domain),
]
TenantName = Annotated[
    str,
    Field(min_length=MIN_TENANT_NAME_LENGTH, max_length=MAX_TENANT_NAME_LENGTH),
]


# ============================================================
# Input Schemas
# ============================================================


class TenantConfigInput(BaseModel):
    """Branding, contact and policy fields.

    Every field is optional. On create, missing fields take the documented
    defaults; on update, only fields that were set are changed.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    primary_color: str | None = Field(None, pattern=HEX_COLOR_PATTERN)
    secondary_color: str | None = Field(None, pattern=HEX_COLOR_PATTERN)
    logo_url: str | None = Field(None, max_length=MAX_URL_LENGTH)
    company_name: str | None = Field(None, max_length=MAX_NAME_LENGTH)
    company_email: str | None = Field(None, max_length=MAX_EMAIL_LENGTH)
    company_phone: str | None = Field(None, max_length=MAX_PHONE_LENGTH)
    company_address: str | None = None
    allow_registration: bool | None = None
    max_tasks_per_user: int | None = Field(
        None, ge=MIN_TASKS_PER_USER, le=MAX_TASKS_PER_USER
    )
    allow_task_comments: bool | None = None

    @classmethod
    def form_payload(cls, fields: dict[str, str]) -> dict[str, Any]:
        """Build a payload from the ``config.*`` section of a form.

        Only fields present in the form end up in the payload.
        """
        payload: dict[str, Any] = {}
        for key in CONFIG_TEXT_FIELDS:
            if key in fields:
                payload[key] = optional_text(fields[key])
        for key in CONFIG_BOOL_FIELDS:
            value = _bool_field(fields, key)
            if value is not None:
                payload[key] = value
        if "max_tasks_per_user" in fields:
            payload["max_tasks_per_user"] = optional_text(fields["max_tasks_per_user"])
        return payload


class TenantCreate(BaseModel):
    """Schema for creating a tenant."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: TenantName
    slug: Slug
    domain: Domain = None
    config: TenantConfigInput | None = None

    @classmethod
    def from_form(cls, form: dict[str, str]) -> Self:
        """Validate a submitted create form."""
        return cls.model_validate(
            {
                "name": form.get("name", ""),
                "slug": form.get("slug", ""),
                "domain": form.get("domain"),
                "config": TenantConfigInput.form_payload(section(form, "config")),
            }
        )


class TenantUpdate(BaseModel):
    """Schema for updating a tenant. Unset fields are left unchanged."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: TenantName | None = None
    slug: Slug | None = None
    domain: Domain = None
    is_active: bool | None = None
    config: TenantConfigInput | None = None

    @classmethod
    def from_form(cls, form: dict[str, str]) -> Self:
        """Validate a submitted edit form.

        Fields missing from the form are not part of the update. A blank
        domain clears it.
        """
        payload: dict[str, Any] = {}
        for key in ("name", "slug", "domain"):
            if key in form:
                payload[key] = form[key]
        is_active = _bool_field(form, "is_active")
        if is_active is not None:
            payload["is_active"] = is_active
        config = TenantConfigInput.form_payload(section(form, "config"))
        if config:
            payload["config"] = config
        return cls.model_validate(payload)


# ============================================================
# Response Schemas
# ============================================================


class TenantConfigResponse(BaseModel):
    """Schema for tenant config response data."""

    primary_color: str
    secondary_color: str
    logo_url: str | None = None
    company_name: str | None = None
    company_email: str | None = None
    company_phone: str | None = None
    company_address: str | None = None
    allow_registration: bool
    max_tasks_per_user: int
    allow_task_comments: bool

    model_config = ConfigDict(from_attributes=True)


class TenantResponse(BaseModel):
    """Schema for tenant response data."""

    id: UUID
    name: str
    slug: str
    domain: str | None = None
    is_active: bool
    created_at: datetime
    config: TenantConfigResponse | None = None

    model_config = ConfigDict(from_attributes=True)


class TenantSummary(BaseModel):
    """A tenant with the number of its users and tasks."""

    tenant: TenantResponse
    user_count: int
    task_count: int


class TenantUserSummary(BaseModel):
    """A tenant member with the number of tasks they own."""

    id: UUID
    name: str
    email: str
    role: str
    is_active: bool
    task_count: int


class TenantDetail(BaseModel):
    """A tenant with config, member task counts and totals."""

    tenant: TenantResponse
    users: list[TenantUserSummary]
    user_count: int
    task_count: int


class TenantStats(BaseModel):
    """Aggregate task statistics for one tenant."""

    users: int
    tasks: int
    completed_tasks: int
    pending_tasks: int
    completion_rate: float


class DashboardStats(BaseModel):
    """Totals across all tenants for the admin dashboard."""

    total_tenants: int
    active_tenants: int
    total_users: int
    total_tasks: int
