"""
Store helpers shared by the resource domains (indicators, outcomes, impact
models): loading rows for resolver records and maintaining hasAccess grants.
"""

import logging
from typing import Collection, Type, TypeVar

from sqlalchemy import delete, insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from impactapi.core.models import Base, Organization, resource_access
from impactapi.shared.access import (
    AccessResolver,
    OrganizationRecord,
    Principal,
    ResourceRecord,
)
from impactapi.shared.access.exceptions import UpstreamLookupError
from impactapi.shared.exceptions import InvalidDataError, NotFoundError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


def _store_failed(operation: str, error: SQLAlchemyError) -> UpstreamLookupError:
    logger.error(f"Failed to {operation}: {error}", exc_info=True)
    return UpstreamLookupError()


async def fetch_rows(
    db: AsyncSession, model: Type[ModelT], uris: Collection[str]
) -> dict[str, ModelT]:
    """Load rows for the given URIs in one query, keyed by URI."""
    if not uris:
        return {}
    try:
        result = await db.execute(select(model).where(model.uri.in_(list(uris))))
        rows = result.scalars().all()
    except SQLAlchemyError as e:
        raise _store_failed(f"load {model.__tablename__}", e) from e
    return {row.uri: row for row in rows}


async def get_owning_organization(
    organization_uri: str, resolver: AccessResolver
) -> OrganizationRecord:
    records = await resolver.repository.find_organizations([organization_uri])
    if not records:
        raise NotFoundError("No such organization")
    return records[0]


def mark_editable(
    records: Collection[ResourceRecord],
    organization: OrganizationRecord,
    principal: Principal,
) -> list[ResourceRecord]:
    """Mark one organization's resources editable for its editors."""
    editable = principal.is_superuser or principal.uri in organization.editors
    return [record.model_copy(update={"editable": editable}) for record in records]


async def validate_organizations(db: AsyncSession, uris: Collection[str]) -> None:
    """
    Raises:
        InvalidDataError: If any URI is not an existing organization
        UpstreamLookupError: If the store fails
    """
    if not uris:
        return
    try:
        result = await db.execute(
            select(Organization.uri).where(Organization.uri.in_(list(uris)))
        )
        found = result.scalars().all()
    except SQLAlchemyError as e:
        raise _store_failed("load organizations", e) from e

    unknown = set(uris) - set(found)
    if unknown:
        raise InvalidDataError(f"Unknown organizations: {', '.join(sorted(unknown))}")


async def replace_access_grants(
    db: AsyncSession, resource_uri: str, organization_uris: Collection[str]
) -> None:
    """Replace the hasAccess grants of a resource."""
    try:
        await db.execute(
            delete(resource_access).where(
                resource_access.c.resource_uri == resource_uri
            )
        )
        if organization_uris:
            await db.execute(
                insert(resource_access),
                [
                    {"resource_uri": resource_uri, "organization_uri": org_uri}
                    for org_uri in sorted(set(organization_uris))
                ],
            )
    except SQLAlchemyError as e:
        raise _store_failed(f"update grants of {resource_uri}", e) from e
