"""Pytest configuration and shared fixtures."""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.pool import NullPool

from taskboard.core.database import Base, Database, get_database, get_db
from taskboard.main import create_app

# Import all models to ensure they're registered with Base.metadata
from taskboard.modules.tasks.models import Task  # noqa: F401
from taskboard.modules.tenants.models import Tenant
from taskboard.modules.users.models import User, UserRole
from tests.factories.records import create_tenant, create_user


@pytest.fixture
async def database(tmp_path: Path) -> AsyncGenerator[Database, None]:
    """Create a database handle on a fresh SQLite file.

    Each test gets its own file, so separate sessions (and separate
    connections) see each other's committed data.
    """
    database = Database(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        poolclass=NullPool,
    )

    async with database.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield database

    await database.dispose()


@pytest.fixture
async def db(database: Database) -> AsyncGenerator[AsyncSession, None]:
    """Provide the session shared by fixtures and request handlers.

    Fixtures commit what they create, so code that opens its own
    sessions (tenant statistics) sees the same rows.
    """
    async with database.session_factory() as session:
        yield session


@pytest.fixture
async def app(db: AsyncSession, database: Database) -> AsyncGenerator[FastAPI, None]:
    """Create test application instance."""
    application = create_app()

    # Override database dependencies; commit like get_db does
    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        try:
            yield db
            await db.commit()
        except Exception:
            await db.rollback()
            raise

    application.dependency_overrides[get_db] = override_get_db
    application.dependency_overrides[get_database] = lambda: database

    yield application

    application.dependency_overrides.clear()


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Provide async HTTP client for page and API testing."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


@pytest.fixture
async def json_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client that asks for JSON, so errors come back as problem documents."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers={"Accept": "application/json"},
    ) as client:
        yield client


# ============================================================
# Tenant and User Fixtures
# ============================================================


@pytest.fixture
async def default_tenant(db: AsyncSession) -> Tenant:
    """The fallback tenant, which is also the admin console's operator tenant."""
    return await create_tenant(db, name="Default Organization", slug="default")


@pytest.fixture
async def operator(db: AsyncSession, default_tenant: Tenant) -> User:
    """Admin user of the default tenant; the acting user of the admin console."""
    return await create_user(
        db, default_tenant, "operator@example.com", role=UserRole.ADMIN, name="Operator"
    )


@pytest.fixture
async def tenant(db: AsyncSession) -> Tenant:
    """A tenant reachable by domain and by slug."""
    return await create_tenant(
        db,
        name="Acme Corporation",
        slug="acme",
        domain="acme.example.com",
        primary_color="#123456",
    )


@pytest.fixture
async def user(db: AsyncSession, tenant: Tenant) -> User:
    """Earliest active user of ``tenant``; the acting user of its pages."""
    return await create_user(db, tenant, "alice@acme.example.com", role=UserRole.ADMIN)


@pytest.fixture
async def other_tenant(db: AsyncSession) -> Tenant:
    """A second tenant used to check isolation."""
    return await create_tenant(db, name="Globex Industries", slug="globex")


@pytest.fixture
async def other_user(db: AsyncSession, other_tenant: Tenant) -> User:
    """Active user of ``other_tenant``."""
    return await create_user(db, other_tenant, "bob@globex.example.com")
