"""Integration tests for the admin console."""

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.config import settings
from taskboard.modules.tasks.models import Task, TaskStatus
from taskboard.modules.tenants.models import Tenant, TenantConfig
from taskboard.modules.users.models import User, UserRole
from tests.factories.records import create_task, create_tenant, create_user


pytestmark = pytest.mark.integration


def tenant_form(**overrides: str) -> dict[str, str]:
    """A valid create form, as the browser would post it."""
    form = {
        "name": "Initech",
        "slug": "initech",
        "domain": "",
        "config.primary_color": "",
        "config.secondary_color": "",
        "config.allow_registration": "true",
        "config.allow_task_comments": "true",
        "config.max_tasks_per_user": "",
    }
    form.update(overrides)
    return form


async def find_tenant(db: AsyncSession, slug: str) -> Tenant | None:
    query = select(Tenant).where(Tenant.slug == slug).execution_options(populate_existing=True)
    result = await db.execute(query)
    return result.scalar_one_or_none()


class TestAdminGate:
    """Tests for the operator role check."""

    async def test_admin_operator_sees_dashboard(
        self, client: AsyncClient, operator: User, tenant: Tenant
    ):
        response = await client.get("/admin")

        assert response.status_code == 200
        assert "Acme Corporation" in response.text
        assert "Operator (ADMIN)" in response.text

    async def test_regular_user_is_forbidden(
        self, json_client: AsyncClient, db: AsyncSession, default_tenant: Tenant
    ):
        await create_user(db, default_tenant, "clerk@example.com", role=UserRole.USER)

        response = await json_client.get("/admin/tenants")

        assert response.status_code == 403
        body = response.json()
        assert body["error"] == "Access denied"
        assert body["allowed_roles"] == ["ADMIN", "SUPER_ADMIN"]

    async def test_missing_operator_redirects_to_login(
        self, client: AsyncClient, default_tenant: Tenant
    ):
        response = await client.get("/admin")

        assert response.status_code == 303
        assert response.headers["location"] == settings.login_path

    async def test_admin_routes_skip_tenant_resolution(
        self, client: AsyncClient, operator: User, tenant: Tenant
    ):
        # A tenant domain does not turn /admin into a tenant page
        response = await client.get("/admin/tenants", headers={"Host": "acme.example.com"})

        assert response.status_code == 200
        assert "Taskboard admin" in response.text


class TestCreateTenant:
    """Tests for the tenant creation form."""

    async def test_create_form_renders(self, client: AsyncClient, operator: User):
        response = await client.get("/admin/tenants/create")

        assert response.status_code == 200
        assert 'name="config.primary_color"' in response.text

    async def test_create_applies_config_defaults_and_admin(
        self, client: AsyncClient, db: AsyncSession, operator: User
    ):
        response = await client.post(
            "/admin/tenants",
            data=tenant_form(domain="Initech.Example.com"),
        )

        assert response.status_code == 303
        created = await find_tenant(db, "initech")
        assert created is not None
        assert response.headers["location"] == f"/admin/tenants/{created.id}"
        assert created.domain == "initech.example.com"

        config = (
            await db.execute(select(TenantConfig).where(TenantConfig.tenant_id == created.id))
        ).scalar_one()
        assert config.primary_color == "#6366f1"
        assert config.secondary_color == "#8b5cf6"
        assert config.allow_registration is True
        assert config.max_tasks_per_user == 100
        assert config.allow_task_comments is True

        admins = (
            await db.execute(select(User).where(User.tenant_id == created.id))
        ).scalars().all()
        assert [(u.email, u.role) for u in admins] == [
            (settings.default_admin_email, UserRole.ADMIN)
        ]

    async def test_invalid_slug_rerenders_form(
        self, client: AsyncClient, db: AsyncSession, operator: User
    ):
        response = await client.post("/admin/tenants", data=tenant_form(slug="My Org!"))

        assert response.status_code == 422
        assert "lowercase letters, numbers and hyphens" in response.text
        assert 'value="My Org!"' in response.text
        assert await find_tenant(db, "My Org!") is None

    async def test_invalid_color_is_reported_on_its_field(
        self, client: AsyncClient, operator: User
    ):
        response = await client.post(
            "/admin/tenants",
            data=tenant_form(**{"config.primary_color": "blue"}),
        )

        assert response.status_code == 422
        assert "field-error" in response.text

    async def test_duplicate_slug_rerenders_with_conflict(
        self, client: AsyncClient, db: AsyncSession, operator: User, tenant: Tenant
    ):
        response = await client.post(
            "/admin/tenants",
            data=tenant_form(name="Another Acme", slug="acme"),
        )

        assert response.status_code == 422
        assert "field-error" in response.text
        count = await db.scalar(select(func.count()).select_from(Tenant).where(Tenant.slug == "acme"))
        assert count == 1


class TestShowTenant:
    """Tests for the tenant detail page."""

    async def test_shows_stats_and_members(
        self, client: AsyncClient, db: AsyncSession, operator: User, tenant: Tenant, user: User
    ):
        await create_task(db, user, "One", status=TaskStatus.COMPLETED)
        await create_task(db, user, "Two")
        await create_task(db, user, "Three", status=TaskStatus.IN_PROGRESS)
        await create_task(db, user, "Four", status=TaskStatus.COMPLETED)

        response = await client.get(f"/admin/tenants/{tenant.id}")

        assert response.status_code == 200
        assert "50.0%" in response.text
        assert user.email in response.text
        assert "#123456" in response.text

    async def test_completion_rate_is_rounded_for_display(
        self, client: AsyncClient, db: AsyncSession, operator: User, tenant: Tenant, user: User
    ):
        await create_task(db, user, "Done", status=TaskStatus.COMPLETED)
        await create_task(db, user, "Open 1")
        await create_task(db, user, "Open 2")

        response = await client.get(f"/admin/tenants/{tenant.id}")

        assert "33.3%" in response.text

    async def test_unknown_tenant_is_not_found(self, client: AsyncClient, operator: User):
        response = await client.get("/admin/tenants/00000000-0000-0000-0000-000000000000")

        assert response.status_code == 404
        assert "Tenant not found" in response.text


class TestUpdateTenant:
    """Tests for editing tenants."""

    async def test_edit_form_is_prefilled(
        self, client: AsyncClient, operator: User, tenant: Tenant
    ):
        response = await client.get(f"/admin/tenants/{tenant.id}/edit")

        assert response.status_code == 200
        assert 'value="acme.example.com"' in response.text
        assert 'value="#123456"' in response.text
        assert f"/admin/tenants/{tenant.id}?_method=PUT" in response.text

    async def test_update_changes_tenant_and_config(
        self, client: AsyncClient, db: AsyncSession, operator: User, tenant: Tenant
    ):
        response = await client.post(
            f"/admin/tenants/{tenant.id}?_method=PUT",
            data={
                "name": "Acme Holdings",
                "slug": "acme",
                "domain": "",
                "is_active": "false",
                "config.secondary_color": "#abcdef",
                "config.max_tasks_per_user": "250",
            },
        )

        assert response.status_code == 303
        assert response.headers["location"] == f"/admin/tenants/{tenant.id}"

        updated = await find_tenant(db, "acme")
        assert updated is not None
        assert updated.name == "Acme Holdings"
        assert updated.domain is None
        assert updated.is_active is False
        assert updated.config is not None
        assert updated.config.primary_color == "#123456"
        assert updated.config.secondary_color == "#abcdef"
        assert updated.config.max_tasks_per_user == 250

    async def test_update_creates_missing_config(
        self, client: AsyncClient, db: AsyncSession, operator: User
    ):
        bare = await create_tenant(db, name="Bare", slug="bare", with_config=False)

        response = await client.put(
            f"/admin/tenants/{bare.id}",
            data={"config.primary_color": "#000000"},
        )

        assert response.status_code == 303
        config = (
            await db.execute(select(TenantConfig).where(TenantConfig.tenant_id == bare.id))
        ).scalar_one()
        assert config.primary_color == "#000000"

    async def test_out_of_range_limit_rerenders(
        self, client: AsyncClient, operator: User, tenant: Tenant
    ):
        response = await client.put(
            f"/admin/tenants/{tenant.id}",
            data={"config.max_tasks_per_user": "5000"},
        )

        assert response.status_code == 422
        assert 'value="5000"' in response.text


class TestDeleteTenant:
    """Tests for deleting tenants."""

    async def test_delete_cascades(
        self, client: AsyncClient, db: AsyncSession, operator: User, tenant: Tenant, user: User
    ):
        await create_task(db, user, "Doomed")
        tenant_id = tenant.id

        response = await client.post(f"/admin/tenants/{tenant_id}?_method=DELETE")

        assert response.status_code == 303
        assert response.headers["location"] == "/admin/tenants"

        db.expire_all()
        for model in (Tenant, TenantConfig, User, Task):
            column = model.id if model is Tenant else model.tenant_id
            count = await db.scalar(
                select(func.count()).select_from(model).where(column == tenant_id)
            )
            assert count == 0

    async def test_delete_keeps_other_tenants(
        self,
        client: AsyncClient,
        db: AsyncSession,
        operator: User,
        tenant: Tenant,
        other_user: User,
    ):
        await create_task(db, other_user, "Survivor")

        await client.delete(f"/admin/tenants/{tenant.id}")

        assert await find_tenant(db, "globex") is not None
        survivors = await db.scalar(select(func.count()).select_from(Task))
        assert survivors == 1
