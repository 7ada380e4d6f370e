"""User database models."""

from enum import StrEnum

from sqlalchemy import Boolean, Enum, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from taskboard.core.constants import MAX_EMAIL_LENGTH, MAX_NAME_LENGTH
from taskboard.core.database.base import Base, TenantMixin, TimestampMixin, UUIDMixin


class UserRole(StrEnum):
    """Roles a user can hold inside their tenant."""

    SUPER_ADMIN = "SUPER_ADMIN"
    ADMIN = "ADMIN"
    USER = "USER"


class User(Base, UUIDMixin, TimestampMixin, TenantMixin):
    """User model.

    Users belong to exactly one tenant. Email addresses are unique within
    a tenant, not globally.

    Attributes:
        name: Display name
        email: Email address, unique per tenant
        password_hash: Bcrypt hash of the password
        role: SUPER_ADMIN, ADMIN or USER
        is_active: Whether the user can act in the tenant
    """

    __tablename__ = "users"
    __table_args__ = (
        Index("ix_users_tenant_email", "tenant_id", "email", unique=True),
    )

    name: Mapped[str] = mapped_column(
        String(MAX_NAME_LENGTH),
        nullable=False,
    )
    email: Mapped[str] = mapped_column(
        String(MAX_EMAIL_LENGTH),
        nullable=False,
        index=True,
    )
    password_hash: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )
    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole, name="user_role"),
        default=UserRole.USER,
        nullable=False,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, tenant_id={self.tenant_id})>"
