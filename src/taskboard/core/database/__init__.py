"""Database layer - connection handle, session dependency, base models, and mixins."""

from taskboard.core.database.base import Base, TenantMixin, TimestampMixin, UUIDMixin, utc_now
from taskboard.core.database.session import Database, get_database, get_db


__all__ = [
    "Base",
    "Database",
    "TenantMixin",
    "TimestampMixin",
    "UUIDMixin",
    "get_database",
    "get_db",
    "utc_now",
]
