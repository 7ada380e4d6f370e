#!/usr/bin/env python
"""
Generate demo/seed data for development.
"""

import argparse
import asyncio
import sys
from datetime import UTC, datetime, timedelta
from typing import Any

from sqlalchemy import delete, select


# Add src to path for imports
sys.path.insert(0, "src")

from taskboard.core.auth.backend import hash_password
from taskboard.core.database import get_database
from taskboard.modules.tasks.models import Task, TaskPriority, TaskStatus
from taskboard.modules.tenants.models import Tenant, TenantConfig
from taskboard.modules.users.models import User, UserRole


DEMO_TENANTS: list[dict[str, Any]] = [
    {
        "name": "Empresa ABC",
        "slug": "empresa-abc",
        "domain": "abc.localhost",
        "config": {
            "primary_color": "#3b82f6",
            "secondary_color": "#1d4ed8",
            "company_name": "Empresa ABC Ltda",
            "company_email": "contato@empresaabc.com",
            "company_phone": "(11) 99999-9999",
            "company_address": "Rua das Flores, 123 - São Paulo/SP",
        },
    },
    {
        "name": "Startup XYZ",
        "slug": "startup-xyz",
        "domain": "xyz.localhost",
        "config": {
            "primary_color": "#10b981",
            "secondary_color": "#059669",
            "company_name": "Startup XYZ",
            "company_email": "hello@startupxyz.com",
            "company_phone": "(21) 88888-8888",
            "company_address": "Av. Paulista, 1000 - São Paulo/SP",
        },
    },
    {
        "name": "Consultoria Tech",
        "slug": "consultoria-tech",
        "domain": "tech.localhost",
        "config": {
            "primary_color": "#f59e0b",
            "secondary_color": "#d97706",
            "company_name": "Consultoria Tech",
            "company_email": "info@consultoriatech.com",
            "company_phone": "(31) 77777-7777",
            "company_address": "Rua da Tecnologia, 456 - Belo Horizonte/MG",
        },
    },
]

# (title, description, due in days, status, priority, tags, owned by admin)
DEMO_TASKS = [
    (
        "Set up the development environment",
        "Install and configure the tools the project needs",
        2,
        TaskStatus.IN_PROGRESS,
        TaskPriority.HIGH,
        ["development", "setup"],
        True,
    ),
    (
        "Review the API documentation",
        "Update and improve the REST API documentation",
        5,
        TaskStatus.PENDING,
        TaskPriority.MEDIUM,
        ["documentation", "api"],
        False,
    ),
    (
        "Write unit tests",
        "Cover the main components of the application",
        3,
        TaskStatus.COMPLETED,
        TaskPriority.HIGH,
        ["tests", "quality"],
        True,
    ),
    (
        "Tune database performance",
        "Analyze and speed up the slowest queries",
        7,
        TaskStatus.PENDING,
        TaskPriority.URGENT,
        ["performance", "database"],
        False,
    ),
    (
        "Prepare the client presentation",
        "Build slides and material for the project presentation",
        1,
        TaskStatus.IN_PROGRESS,
        TaskPriority.MEDIUM,
        ["presentation", "client"],
        True,
    ),
]


def _users(tenant: Tenant) -> tuple[User, User]:
    admin = User(
        tenant_id=tenant.id,
        name="Administrator",
        email="admin@example.com",
        password_hash=hash_password("admin123"),
        role=UserRole.ADMIN,
    )
    member = User(
        tenant_id=tenant.id,
        name="Regular User",
        email="user@example.com",
        password_hash=hash_password("user123"),
        role=UserRole.USER,
    )
    return admin, member


async def seed_default() -> None:
    """Create the default tenant with a super admin."""
    async with get_database().session() as session:
        result = await session.execute(select(Tenant).where(Tenant.slug == "default"))
        existing = result.scalar_one_or_none()

        if existing:
            print(f"Default tenant already exists: {existing.name}")
            return

        tenant = Tenant(name="Default Organization", slug="default", config=TenantConfig())
        session.add(tenant)
        await session.flush()

        session.add(
            User(
                tenant_id=tenant.id,
                name="Super Admin",
                email="superadmin@example.com",
                password_hash=hash_password("superadmin123"),
                role=UserRole.SUPER_ADMIN,
            )
        )
        await session.commit()
        print(f"Created default tenant: {tenant.name} ({tenant.id})")


async def seed_demo() -> None:
    """Replace the sample tenants with fresh users and tasks."""
    slugs = [data["slug"] for data in DEMO_TENANTS]
    now = datetime.now(UTC)

    async with get_database().session() as session:
        result = await session.execute(select(Tenant.id).where(Tenant.slug.in_(slugs)))
        stale_ids = list(result.scalars().all())
        if stale_ids:
            await session.execute(delete(Task).where(Task.tenant_id.in_(stale_ids)))
            await session.execute(delete(User).where(User.tenant_id.in_(stale_ids)))
            await session.execute(
                delete(TenantConfig).where(TenantConfig.tenant_id.in_(stale_ids))
            )
            await session.execute(delete(Tenant).where(Tenant.id.in_(stale_ids)))
            print(f"Removed {len(stale_ids)} existing sample tenants")

        for data in DEMO_TENANTS:
            tenant = Tenant(
                name=data["name"],
                slug=data["slug"],
                domain=data["domain"],
                config=TenantConfig(**data["config"]),
            )
            session.add(tenant)
            await session.flush()

            admin, member = _users(tenant)
            session.add_all([admin, member])
            await session.flush()

            for title, description, due_in, status, priority, tags, by_admin in DEMO_TASKS:
                session.add(
                    Task(
                        tenant_id=tenant.id,
                        user_id=admin.id if by_admin else member.id,
                        title=title,
                        description=description,
                        due_date=now + timedelta(days=due_in),
                        status=status,
                        priority=priority,
                        tags=tags,
                    )
                )
            print(f"Created tenant: {tenant.name} (/{tenant.slug}, {tenant.domain})")

        await session.commit()

    print("Logins: admin@example.com / admin123, user@example.com / user123")


async def main(scenario: str) -> None:
    """Run the seeding based on scenario."""
    if scenario == "default":
        await seed_default()
    elif scenario == "demo":
        await seed_default()
        await seed_demo()
    else:
        print(f"Unknown scenario: {scenario}")
        print("Available scenarios: default, demo")
        sys.exit(1)

    await get_database().dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed database with demo data")
    parser.add_argument(
        "--scenario",
        "-s",
        default="default",
        help="Seed scenario to run (default, demo)",
    )
    args = parser.parse_args()

    asyncio.run(main(args.scenario))
