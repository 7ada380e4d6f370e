"""Tenant database models."""

from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taskboard.core.constants import (
    DEFAULT_ALLOW_REGISTRATION,
    DEFAULT_ALLOW_TASK_COMMENTS,
    DEFAULT_MAX_TASKS_PER_USER,
    DEFAULT_PRIMARY_COLOR,
    DEFAULT_SECONDARY_COLOR,
    MAX_DOMAIN_LENGTH,
    MAX_EMAIL_LENGTH,
    MAX_NAME_LENGTH,
    MAX_PHONE_LENGTH,
    MAX_SLUG_LENGTH,
    MAX_TENANT_NAME_LENGTH,
    MAX_URL_LENGTH,
)
from taskboard.core.database.base import Base, TimestampMixin, UUIDMixin


class Tenant(Base, UUIDMixin, TimestampMixin):
    """Tenant model representing an organization.

    All tenant-scoped data references this table via tenant_id.
    A tenant is resolved per request by ``domain`` or by ``slug``.

    Attributes:
        name: Display name
        slug: Unique URL-safe identifier
        domain: Optional unique host name serving this tenant
        is_active: Inactive tenants never resolve
        config: Branding and policy settings (one-to-one)
    """

    __tablename__ = "tenants"

    name: Mapped[str] = mapped_column(
        String(MAX_TENANT_NAME_LENGTH),
        nullable=False,
        index=True,
    )
    slug: Mapped[str] = mapped_column(
        String(MAX_SLUG_LENGTH),
        nullable=False,
        unique=True,
        index=True,
    )
    domain: Mapped[str | None] = mapped_column(
        String(MAX_DOMAIN_LENGTH),
        nullable=True,
        unique=True,
        index=True,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )

    config: Mapped["TenantConfig | None"] = relationship(
        "TenantConfig",
        back_populates="tenant",
        uselist=False,
        lazy="selectin",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Tenant(id={self.id}, name={self.name}, slug={self.slug})>"


class TenantConfig(Base, UUIDMixin, TimestampMixin):
    """Branding, contact and policy settings owned by one tenant.

    Created together with its tenant and removed with it.
    """

    __tablename__ = "tenant_configs"

    tenant_id: Mapped[UUID] = mapped_column(
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )

    # Branding
    primary_color: Mapped[str] = mapped_column(
        String(7),
        default=DEFAULT_PRIMARY_COLOR,
        nullable=False,
    )
    secondary_color: Mapped[str] = mapped_column(
        String(7),
        default=DEFAULT_SECONDARY_COLOR,
        nullable=False,
    )
    logo_url: Mapped[str | None] = mapped_column(String(MAX_URL_LENGTH), nullable=True)

    # Company contact
    company_name: Mapped[str | None] = mapped_column(String(MAX_NAME_LENGTH), nullable=True)
    company_email: Mapped[str | None] = mapped_column(String(MAX_EMAIL_LENGTH), nullable=True)
    company_phone: Mapped[str | None] = mapped_column(String(MAX_PHONE_LENGTH), nullable=True)
    company_address: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Policies
    allow_registration: Mapped[bool] = mapped_column(
        Boolean,
        default=DEFAULT_ALLOW_REGISTRATION,
        nullable=False,
    )
    max_tasks_per_user: Mapped[int] = mapped_column(
        Integer,
        default=DEFAULT_MAX_TASKS_PER_USER,
        nullable=False,
    )
    allow_task_comments: Mapped[bool] = mapped_column(
        Boolean,
        default=DEFAULT_ALLOW_TASK_COMMENTS,
        nullable=False,
    )

    tenant: Mapped["Tenant"] = relationship(
        "Tenant",
        back_populates="config",
        lazy="raise",
    )

    def __repr__(self) -> str:
        return f"<TenantConfig(id={self.id}, tenant_id={self.tenant_id})>"
