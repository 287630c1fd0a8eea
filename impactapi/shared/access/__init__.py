"""
Organization-scoped access control.

A principal may read anything owned by its home organization or a descendant
of it, plus anything explicitly shared with its organization. Writing
additionally requires being an editor of the owning organization. Superusers
may do everything.

Usage:
    from impactapi.shared.access import Action, ResourceKind, require_access

    @router.get("/indicator/{uri:path}")
    async def get_indicator(
        uri: str,
        principal: Principal = Depends(
            require_access(Action.FETCH_INDICATOR, ResourceKind.INDICATOR)
        ),
    ):
        pass
"""

from .dependencies import get_access_resolver, require_access
from .models import ACTION_POLICIES, AccessLevel, Action
from .services import AccessResolver, policy_for
from .types import (
    AccessDecision,
    AccessTarget,
    DenialReason,
    OrganizationRecord,
    Principal,
    ResourceKind,
    ResourceRecord,
)

__all__ = [
    "ACTION_POLICIES",
    "AccessDecision",
    "AccessLevel",
    "AccessResolver",
    "AccessTarget",
    "Action",
    "DenialReason",
    "OrganizationRecord",
    "Principal",
    "ResourceKind",
    "ResourceRecord",
    "get_access_resolver",
    "policy_for",
    "require_access",
]
