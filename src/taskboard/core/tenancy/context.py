"""Per-request tenant and user context."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal


if TYPE_CHECKING:
    from taskboard.modules.tenants.models import Tenant
    from taskboard.modules.users.models import User


MatchedBy = Literal["domain", "slug", "fallback"]


@dataclass(frozen=True)
class TenantMatch:
    """A tenant resolved from the request.

    Attributes:
        tenant: The active tenant
        matched_by: Which lookup found it
        base_path: URL prefix the tenant's pages live under ("/<slug>" for
            slug matches, empty otherwise)
    """

    tenant: "Tenant"
    matched_by: MatchedBy
    base_path: str = ""


@dataclass(frozen=True)
class RequestContext:
    """Everything a tenant page handler needs to know about the caller.

    Built by the access gate and passed explicitly to handlers instead of
    being attached to the request object.
    """

    tenant: "Tenant"
    current_user: "User"
    base_path: str = ""

    def url(self, path: str) -> str:
        """Build a link that stays under the tenant's base path."""
        return f"{self.base_path}{path}"
