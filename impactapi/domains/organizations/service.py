# impactapi/domains/organizations/service.py
import logging
from typing import List

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from impactapi.core.models import Account, Organization, organization_editors
from impactapi.domains.organizations.models import (
    OrganizationCreate,
    OrganizationResponse,
)
from impactapi.shared.access import AccessResolver, Principal
from impactapi.shared.exceptions import InvalidDataError, NotFoundError
from impactapi.shared.utils import mint_uri

logger = logging.getLogger(__name__)


async def list_organizations(
    principal: Principal, resolver: AccessResolver
) -> List[OrganizationResponse]:
    """
    Organizations visible to the principal, marked editable where the
    principal is an editor (or a superuser).
    """
    records = await resolver.visible_organizations(principal)
    return [OrganizationResponse.from_record(record, principal) for record in records]


async def get_organization(
    uri: str, principal: Principal, resolver: AccessResolver
) -> OrganizationResponse:
    records = await resolver.repository.find_organizations([uri])
    if not records:
        raise NotFoundError("No such organization")
    return OrganizationResponse.from_record(records[0], principal)


class OrganizationService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_organization(
        self, organization_data: OrganizationCreate
    ) -> OrganizationResponse:
        """
        Create an organization, optionally under a parent, with its editors.

        Raises:
            InvalidDataError: If the parent or any editor does not exist
        """
        if organization_data.parent_uri:
            parent = await self.db.get(Organization, organization_data.parent_uri)
            if parent is None:
                raise InvalidDataError("No such parent organization")

        editors = sorted(set(organization_data.editors))
        if editors:
            result = await self.db.execute(
                select(Account.uri).where(Account.uri.in_(editors))
            )
            found = result.scalars().all()
            unknown = set(editors) - set(found)
            if unknown:
                raise InvalidDataError(
                    f"Unknown editors: {', '.join(sorted(unknown))}"
                )

        organization = Organization(
            uri=mint_uri("organization"),
            name=organization_data.name,
            description=organization_data.description,
            parent_uri=organization_data.parent_uri,
        )
        self.db.add(organization)
        await self.db.flush()

        if editors:
            await self.db.execute(
                insert(organization_editors),
                [
                    {"organization_uri": organization.uri, "account_uri": editor}
                    for editor in editors
                ],
            )

        logger.info(f"Created organization {organization.uri}")

        return OrganizationResponse(
            uri=organization.uri,
            name=organization.name,
            parent_uri=organization.parent_uri,
            editable=True,
        )
