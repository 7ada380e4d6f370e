"""User service for business logic."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends

from taskboard.config import settings
from taskboard.core.auth.backend import hash_password
from taskboard.core.errors import ConflictError
from taskboard.modules.users.models import User, UserRole
from taskboard.modules.users.repos import UserRepo


class UserService:
    """Service for user management operations."""

    def __init__(self, repo: UserRepo) -> None:
        self.repo = repo

    async def create_user(
        self,
        tenant_id: UUID,
        name: str,
        email: str,
        password: str,
        role: UserRole = UserRole.USER,
    ) -> User:
        """Create a user with a hashed password.

        Args:
            tenant_id: The tenant this user belongs to
            name: Display name
            email: Email address, unique within the tenant
            password: Plain-text password; only its hash is stored
            role: The user's role

        Returns:
            The created user

        Raises:
            ConflictError: If email already exists for this tenant
        """
        email = email.strip().lower()
        if await self.repo.get_by_email(email, tenant_id):
            raise ConflictError(
                "Email already registered",
                error_code="email_exists",
                details={"email": email},
            )

        user = User(
            tenant_id=tenant_id,
            name=name,
            email=email,
            password_hash=hash_password(password),
            role=role,
        )
        return await self.repo.create(user)

    async def create_default_user(self, tenant_id: UUID) -> User:
        """Create the initial administrator of a new tenant."""
        return await self.create_user(
            tenant_id=tenant_id,
            name=settings.default_admin_name,
            email=settings.default_admin_email,
            password=settings.default_admin_password,
            role=UserRole.ADMIN,
        )


# Type alias for dependency injection
UserSvc = Annotated[UserService, Depends(UserService)]
