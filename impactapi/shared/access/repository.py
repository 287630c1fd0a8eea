"""
Read-only repository the access resolver traverses.

Every method is a single batch query so that traversal cost is one round trip
per hierarchy level, not one per organization.
"""

import logging
from collections import defaultdict
from typing import Collection, Optional, Protocol

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from impactapi.core.models import (
    Account,
    ImpactModel,
    Indicator,
    Organization,
    Outcome,
    organization_editors,
    resource_access,
)

from .exceptions import UpstreamLookupError
from .types import OrganizationRecord, Principal, ResourceKind, ResourceRecord

logger = logging.getLogger(__name__)

RESOURCE_MODELS = {
    ResourceKind.INDICATOR: Indicator,
    ResourceKind.OUTCOME: Outcome,
    ResourceKind.IMPACT_MODEL: ImpactModel,
}


class AccessRepository(Protocol):
    async def find_account(self, uri: str) -> Optional[Principal]: ...

    async def find_organizations(
        self, uris: Collection[str]
    ) -> list[OrganizationRecord]: ...

    async def find_child_organizations(
        self, parent_uris: Collection[str]
    ) -> list[OrganizationRecord]: ...

    async def find_all_organizations(self) -> list[OrganizationRecord]: ...

    async def find_resource(
        self, kind: ResourceKind, uri: str
    ) -> Optional[ResourceRecord]: ...

    async def find_resources(
        self, kind: ResourceKind, organization_uris: Optional[Collection[str]]
    ) -> list[ResourceRecord]: ...

    async def find_resources_shared_with(
        self, kind: ResourceKind, organization_uri: str
    ) -> list[ResourceRecord]: ...


class SqlAccessRepository:
    """AccessRepository backed by the SQLAlchemy store."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_account(self, uri: str) -> Optional[Principal]:
        try:
            account = await self.db.get(Account, uri)
        except SQLAlchemyError as e:
            raise self._lookup_failed("account", e) from e

        if account is None:
            return None

        return Principal(
            uri=account.uri,
            organization_uri=account.organization_uri,
            is_superuser=account.is_superuser,
            role=account.role,
            email=account.email,
            display_name=account.display_name,
        )

    async def find_organizations(
        self, uris: Collection[str]
    ) -> list[OrganizationRecord]:
        if not uris:
            return []
        return await self._select_organizations(
            select(Organization).where(Organization.uri.in_(list(uris)))
        )

    async def find_child_organizations(
        self, parent_uris: Collection[str]
    ) -> list[OrganizationRecord]:
        if not parent_uris:
            return []
        return await self._select_organizations(
            select(Organization).where(Organization.parent_uri.in_(list(parent_uris)))
        )

    async def find_all_organizations(self) -> list[OrganizationRecord]:
        return await self._select_organizations(
            select(Organization).order_by(Organization.name)
        )

    async def find_resource(
        self, kind: ResourceKind, uri: str
    ) -> Optional[ResourceRecord]:
        model = RESOURCE_MODELS[kind]
        records = await self._select_resources(
            kind, select(model).where(model.uri == uri)
        )
        return records[0] if records else None

    async def find_resources(
        self, kind: ResourceKind, organization_uris: Optional[Collection[str]]
    ) -> list[ResourceRecord]:
        """Resources owned by the given organizations, or all of them when None."""
        model = RESOURCE_MODELS[kind]
        query = select(model)
        if organization_uris is not None:
            if not organization_uris:
                return []
            query = query.where(model.organization_uri.in_(list(organization_uris)))
        return await self._select_resources(kind, query.order_by(model.uri))

    async def find_resources_shared_with(
        self, kind: ResourceKind, organization_uri: str
    ) -> list[ResourceRecord]:
        model = RESOURCE_MODELS[kind]
        shared = select(resource_access.c.resource_uri).where(
            resource_access.c.organization_uri == organization_uri
        )
        return await self._select_resources(
            kind, select(model).where(model.uri.in_(shared)).order_by(model.uri)
        )

    async def _select_organizations(self, query) -> list[OrganizationRecord]:
        try:
            organizations = (await self.db.execute(query)).scalars().all()
            uris = [organization.uri for organization in organizations]
            editors: dict[str, set[str]] = defaultdict(set)
            if uris:
                rows = await self.db.execute(
                    select(
                        organization_editors.c.organization_uri,
                        organization_editors.c.account_uri,
                    ).where(organization_editors.c.organization_uri.in_(uris))
                )
                for organization_uri, account_uri in rows:
                    editors[organization_uri].add(account_uri)
        except SQLAlchemyError as e:
            raise self._lookup_failed("organization", e) from e

        return [
            OrganizationRecord(
                uri=organization.uri,
                name=organization.name,
                parent_uri=organization.parent_uri,
                editors=frozenset(editors.get(organization.uri, ())),
            )
            for organization in organizations
        ]

    async def _select_resources(
        self, kind: ResourceKind, query
    ) -> list[ResourceRecord]:
        try:
            resources = (await self.db.execute(query)).scalars().all()
            uris = [resource.uri for resource in resources]
            grants: dict[str, set[str]] = defaultdict(set)
            if uris:
                rows = await self.db.execute(
                    select(
                        resource_access.c.resource_uri,
                        resource_access.c.organization_uri,
                    ).where(resource_access.c.resource_uri.in_(uris))
                )
                for resource_uri, organization_uri in rows:
                    grants[resource_uri].add(organization_uri)
        except SQLAlchemyError as e:
            raise self._lookup_failed(kind.value, e) from e

        return [
            ResourceRecord(
                uri=resource.uri,
                kind=kind,
                organization_uri=resource.organization_uri,
                has_access=frozenset(grants.get(resource.uri, ())),
            )
            for resource in resources
        ]

    @staticmethod
    def _lookup_failed(entity: str, error: SQLAlchemyError) -> UpstreamLookupError:
        logger.error(f"Failed to load {entity} records: {error}", exc_info=True)
        return UpstreamLookupError()
