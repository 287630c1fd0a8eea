import logging
from typing import Iterable, Optional, Union

from .exceptions import PolicyMisconfigurationError, PrincipalNotFoundError
from .models import ACTION_POLICIES, AccessLevel, Action
from .repository import AccessRepository
from .types import (
    AccessDecision,
    AccessTarget,
    DenialReason,
    OrganizationRecord,
    Principal,
    ResourceKind,
    ResourceRecord,
)

logger = logging.getLogger(__name__)

PrincipalRef = Union[Principal, str, None]


def policy_for(action: Union[Action, str]) -> AccessLevel:
    """
    Look up the access level registered for an action.

    Args:
        action: An Action member or its string value

    Returns:
        The AccessLevel the action requires

    Raises:
        PolicyMisconfigurationError: If the action is unknown or unregistered
    """
    try:
        action = Action(action)
    except ValueError:
        raise PolicyMisconfigurationError(f"Unknown action: {action}")

    level = ACTION_POLICIES.get(action)
    if level is None:
        raise PolicyMisconfigurationError(f"No access policy for {action.value}")
    return level


class AccessResolver:
    """
    Decides what a principal may see and edit by walking the organization
    hierarchy downward from the principal's home organization.

    Holds nothing but the repository; every call re-reads the store.
    """

    def __init__(self, repository: AccessRepository):
        self.repository = repository

    async def load_principal(self, uri: str) -> Principal:
        """
        Resolve a session principal URI to its account.

        Raises:
            PrincipalNotFoundError: If no account has this URI
        """
        principal = await self.repository.find_account(uri)
        if principal is None:
            raise PrincipalNotFoundError()
        return principal

    async def reachable_organizations(
        self, principal: Union[Principal, str]
    ) -> frozenset[str]:
        """
        URIs of the principal's home organization and all of its descendants.

        Raises:
            PrincipalNotFoundError: If principal is a URI with no account
        """
        principal = await self._ensure_principal(principal)
        return frozenset(await self._reachable_records(principal))

    async def visible_organizations(
        self, principal: Principal
    ) -> list[OrganizationRecord]:
        """All organizations for superusers, otherwise the reachable ones."""
        if principal.is_superuser:
            return await self.repository.find_all_organizations()
        return list((await self._reachable_records(principal)).values())

    async def check_access(
        self,
        principal: PrincipalRef,
        action: Union[Action, str],
        target: Optional[AccessTarget] = None,
    ) -> AccessDecision:
        """
        Decide whether principal may perform action against target.

        Anonymous and unknown principals are denied with a distinct reason
        rather than raised. Repository failures propagate.
        """
        try:
            level = policy_for(action)
        except PolicyMisconfigurationError as e:
            logger.warning(f"Denying unregistered action {action!r}: {e.detail}")
            return AccessDecision(
                allowed=False, reason=DenialReason.UNREGISTERED_ACTION
            )

        if principal is None:
            return AccessDecision(allowed=False, reason=DenialReason.ANONYMOUS)

        if isinstance(principal, str):
            try:
                principal = await self.load_principal(principal)
            except PrincipalNotFoundError:
                return AccessDecision(
                    allowed=False, reason=DenialReason.PRINCIPAL_NOT_FOUND
                )

        reason = await self._evaluate(principal, level, target)
        logger.debug(
            f"Access {reason.value} for {principal.uri} on {Action(action).value}"
        )
        return AccessDecision(
            allowed=reason is DenialReason.GRANTED, reason=reason, principal=principal
        )

    async def has_access(
        self,
        principal: PrincipalRef,
        action: Union[Action, str],
        target: Optional[AccessTarget] = None,
    ) -> bool:
        decision = await self.check_access(principal, action, target)
        return decision.allowed

    async def filter_editable(
        self, resources: Iterable[ResourceRecord], principal: Principal
    ) -> list[ResourceRecord]:
        """
        Mark each resource editable if the principal can write to it.

        Nothing is removed: a visible resource may still be read-only.
        Editable means superuser, or visible and an editor of the owning
        organization, so editability never exceeds visibility.
        """
        resources = list(resources)
        if principal.is_superuser:
            return [r.model_copy(update={"editable": True}) for r in resources]

        reachable = await self._reachable_records(principal)
        owners = dict(reachable)
        missing = {r.organization_uri for r in resources} - owners.keys()
        for record in await self.repository.find_organizations(missing):
            owners[record.uri] = record

        annotated = []
        for resource in resources:
            owner = owners.get(resource.organization_uri)
            editable = (
                self._is_visible(resource, principal, reachable)
                and owner is not None
                and principal.uri in owner.editors
            )
            annotated.append(resource.model_copy(update={"editable": editable}))
        return annotated

    async def visible_resources(
        self, principal: Principal, kind: ResourceKind
    ) -> list[ResourceRecord]:
        """
        All resources of a kind the principal may see, annotated for editing.

        Superusers see everything. Everyone else sees resources owned by a
        reachable organization plus resources shared with their organization.
        """
        if principal.is_superuser:
            resources = await self.repository.find_resources(kind, None)
            return await self.filter_editable(resources, principal)

        reachable = await self._reachable_records(principal)
        resources = await self.repository.find_resources(kind, reachable.keys())
        if principal.organization_uri:
            shared = await self.repository.find_resources_shared_with(
                kind, principal.organization_uri
            )
            resources = resources + shared

        unique: dict[str, ResourceRecord] = {}
        for resource in resources:
            unique.setdefault(resource.uri, resource)
        return await self.filter_editable(unique.values(), principal)

    async def _ensure_principal(self, principal: Union[Principal, str]) -> Principal:
        if isinstance(principal, Principal):
            return principal
        return await self.load_principal(principal)

    async def _reachable_records(
        self, principal: Principal
    ) -> dict[str, OrganizationRecord]:
        """Breadth-first walk, one repository call per hierarchy level."""
        if not principal.organization_uri:
            return {}

        visited: dict[str, OrganizationRecord] = {}
        frontier = await self.repository.find_organizations(
            [principal.organization_uri]
        )
        while frontier:
            next_uris = []
            for record in frontier:
                if record.uri in visited:
                    logger.warning(
                        f"Organization hierarchy cycle detected at {record.uri}"
                    )
                    continue
                visited[record.uri] = record
                next_uris.append(record.uri)
            frontier = await self.repository.find_child_organizations(next_uris)
        return visited

    async def _evaluate(
        self,
        principal: Principal,
        level: AccessLevel,
        target: Optional[AccessTarget],
    ) -> DenialReason:
        if principal.is_superuser:
            return DenialReason.GRANTED
        if level is AccessLevel.SUPERUSER:
            return DenialReason.SUPERUSER_REQUIRED
        if level is AccessLevel.AUTHENTICATED:
            return DenialReason.GRANTED

        if target is None:
            # Listing; the caller narrows results with visible_resources
            if level is AccessLevel.READ:
                return DenialReason.GRANTED
            return DenialReason.MISSING_TARGET

        reachable = await self._reachable_records(principal)

        if target.kind is ResourceKind.ORGANIZATION:
            organization = reachable.get(target.uri)
            if organization is None:
                return DenialReason.NOT_REACHABLE
            return self._check_editor(principal, level, organization)

        resource = await self.repository.find_resource(target.kind, target.uri)
        if resource is None:
            return DenialReason.TARGET_NOT_FOUND
        if not self._is_visible(resource, principal, reachable):
            return DenialReason.NOT_REACHABLE
        if level is AccessLevel.READ:
            return DenialReason.GRANTED

        owner = reachable.get(resource.organization_uri)
        if owner is None:
            found = await self.repository.find_organizations(
                [resource.organization_uri]
            )
            owner = found[0] if found else None
        if owner is None:
            return DenialReason.NOT_EDITOR
        return self._check_editor(principal, level, owner)

    @staticmethod
    def _check_editor(
        principal: Principal, level: AccessLevel, organization: OrganizationRecord
    ) -> DenialReason:
        if level is AccessLevel.WRITE and principal.uri not in organization.editors:
            return DenialReason.NOT_EDITOR
        return DenialReason.GRANTED

    @staticmethod
    def _is_visible(
        resource: ResourceRecord,
        principal: Principal,
        reachable: dict[str, OrganizationRecord],
    ) -> bool:
        if resource.organization_uri in reachable:
            return True
        return (
            principal.organization_uri is not None
            and principal.organization_uri in resource.has_access
        )
