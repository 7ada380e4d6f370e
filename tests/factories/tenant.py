"""Factory for tenant input schemas."""

from uuid import uuid4

from polyfactory.factories.pydantic_factory import ModelFactory

from taskboard.modules.tenants.schemas import TenantConfigInput, TenantCreate


class TenantCreateFactory(ModelFactory[TenantCreate]):
    """Factory for generating valid tenant create payloads."""

    __model__ = TenantCreate

    @classmethod
    def name(cls) -> str:
        """Generate a company name."""
        return f"{cls.__faker__.company()}"[:100]

    @classmethod
    def slug(cls) -> str:
        """Generate a URL-safe slug."""
        return f"org-{uuid4().hex[:8]}"

    @classmethod
    def domain(cls) -> None:
        """No domain unless a test asks for one."""
        return None

    @classmethod
    def config(cls) -> None:
        """Leave config unset so the defaults apply."""
        return None


class TenantConfigInputFactory(ModelFactory[TenantConfigInput]):
    """Factory for generating branding and policy input."""

    __model__ = TenantConfigInput

    @classmethod
    def primary_color(cls) -> str:
        return cls.__faker__.hex_color()

    @classmethod
    def secondary_color(cls) -> str:
        return cls.__faker__.hex_color()

    @classmethod
    def logo_url(cls) -> str:
        return cls.__faker__.image_url()

    @classmethod
    def company_email(cls) -> str:
        return cls.__faker__.company_email()

    @classmethod
    def company_phone(cls) -> str:
        return "+1 555 0100"

    @classmethod
    def max_tasks_per_user(cls) -> int:
        return cls.__faker__.pyint(min_value=1, max_value=1000)
