"""Shared API dependencies."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.core.database import Database, get_database, get_db


# Type alias for the per-request database session
DBSession = Annotated[AsyncSession, Depends(get_db)]

# Type alias for the connection pool handle, for work that needs its own sessions
DatabaseHandle = Annotated[Database, Depends(get_database)]
