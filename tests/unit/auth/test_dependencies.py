"""Unit tests for access gate dependencies."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

import pytest

from taskboard.core.auth.dependencies import (
    get_current_user,
    get_operator_user,
    require_auth,
    require_role,
)
from taskboard.core.errors import ForbiddenError, LoginRequiredError
from taskboard.core.tenancy import TenantMatch
from taskboard.modules.tenants.models import Tenant
from taskboard.modules.users.models import User, UserRole


def make_user(role: UserRole = UserRole.USER, tenant_id=None) -> User:
    """Helper to create an unsaved User."""
    return User(
        id=uuid4(),
        tenant_id=tenant_id or uuid4(),
        name="Test User",
        email="test@example.com",
        password_hash="hash",
        role=role,
        is_active=True,
    )


def make_match(slug: str = "acme", base_path: str = "") -> TenantMatch:
    """Helper to create a resolved tenant."""
    tenant = Tenant(id=uuid4(), name="Acme", slug=slug, is_active=True)
    return TenantMatch(tenant=tenant, matched_by="slug" if base_path else "domain", base_path=base_path)


def make_request() -> MagicMock:
    """Helper to create a request with a writable state."""
    request = MagicMock()
    request.state = SimpleNamespace()
    return request


class TestRequireRole:
    """Tests for require_role dependency factory."""

    @pytest.mark.asyncio
    async def test_allowed_role_passes(self):
        """Verify a user holding an accepted role is returned."""
        check = require_role(UserRole.ADMIN, UserRole.SUPER_ADMIN)
        user = make_user(UserRole.ADMIN)

        assert await check(user=user) is user

    @pytest.mark.asyncio
    async def test_other_role_is_forbidden(self):
        """Verify ForbiddenError for roles outside the accepted set."""
        check = require_role(UserRole.ADMIN, UserRole.SUPER_ADMIN)

        with pytest.raises(ForbiddenError) as exc_info:
            await check(user=make_user(UserRole.USER))

        assert exc_info.value.status_code == 403
        assert exc_info.value.details["allowed_roles"] == ["ADMIN", "SUPER_ADMIN"]


class TestGetCurrentUser:
    """Tests for get_current_user dependency."""

    @pytest.mark.asyncio
    async def test_returns_first_active_user_of_tenant(self):
        """Verify the tenant's first active user becomes the current user."""
        match = make_match()
        user = make_user(tenant_id=match.tenant.id)
        request = make_request()

        with patch("taskboard.modules.users.repos.UserRepository") as mock_repo_class:
            mock_repo = AsyncMock()
            mock_repo.first_active.return_value = user
            mock_repo_class.return_value = mock_repo

            result = await get_current_user(request=request, match=match, db=AsyncMock())

        assert result is user
        assert request.state.user_id == user.id
        mock_repo.first_active.assert_awaited_once_with(match.tenant.id)

    @pytest.mark.asyncio
    async def test_no_active_user_requires_login(self):
        """Verify LoginRequiredError when the tenant has no active user."""
        with patch("taskboard.modules.users.repos.UserRepository") as mock_repo_class:
            mock_repo = AsyncMock()
            mock_repo.first_active.return_value = None
            mock_repo_class.return_value = mock_repo

            with pytest.raises(LoginRequiredError):
                await get_current_user(request=make_request(), match=make_match(), db=AsyncMock())


class TestRequireAuth:
    """Tests for require_auth dependency."""

    @pytest.mark.asyncio
    async def test_builds_context_with_base_path(self):
        """Verify the context carries tenant, user and the slug prefix."""
        match = make_match(base_path="/acme")
        user = make_user(tenant_id=match.tenant.id)

        ctx = await require_auth(match=match, user=user)

        assert ctx.tenant is match.tenant
        assert ctx.current_user is user
        assert ctx.url("/tasks") == "/acme/tasks"


class TestGetOperatorUser:
    """Tests for get_operator_user dependency."""

    @pytest.mark.asyncio
    async def test_missing_operator_tenant_requires_login(self):
        """Verify LoginRequiredError when the operator tenant does not exist."""
        directory = AsyncMock()
        directory.find_by_slug.return_value = None

        with pytest.raises(LoginRequiredError):
            await get_operator_user(request=make_request(), directory=directory, db=AsyncMock())

    @pytest.mark.asyncio
    async def test_returns_operator_tenant_user(self):
        """Verify the operator tenant's first active user is returned."""
        tenant = Tenant(id=uuid4(), name="Default", slug="default", is_active=True)
        user = make_user(UserRole.SUPER_ADMIN, tenant_id=tenant.id)
        directory = AsyncMock()
        directory.find_by_slug.return_value = tenant

        with patch("taskboard.modules.users.repos.UserRepository") as mock_repo_class:
            mock_repo = AsyncMock()
            mock_repo.first_active.return_value = user
            mock_repo_class.return_value = mock_repo

            result = await get_operator_user(
                request=make_request(), directory=directory, db=AsyncMock()
            )

        assert result is user
