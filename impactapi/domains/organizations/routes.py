# impactapi/domains/organizations/routes.py
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from impactapi.core.database import get_db
from impactapi.domains.organizations.models import (
    OrganizationCreate,
    OrganizationResponse,
)
from impactapi.domains.organizations.service import (
    OrganizationService,
    get_organization,
    list_organizations,
)
from impactapi.shared.access import (
    AccessResolver,
    Action,
    Principal,
    ResourceKind,
    get_access_resolver,
    require_access,
)

router = APIRouter(prefix="/organizations", tags=["Organizations"])


@router.get(
    "/",
    response_model=List[OrganizationResponse],
    operation_id="fetchOrganizations",
)
async def get_organizations(
    principal: Principal = Depends(require_access(Action.FETCH_ORGANIZATIONS)),
    resolver: AccessResolver = Depends(get_access_resolver),
) -> List[OrganizationResponse]:
    """
    List the organizations the current account can reach.

    Superusers see every organization; everyone else sees their home
    organization and its descendants.
    """
    return await list_organizations(principal, resolver)


@router.post(
    "/",
    response_model=OrganizationResponse,
    status_code=status.HTTP_201_CREATED,
    operation_id="createOrganization",
)
async def create_organization(
    organization_data: OrganizationCreate,
    principal: Principal = Depends(require_access(Action.CREATE_ORGANIZATION)),
    db: AsyncSession = Depends(get_db),
) -> OrganizationResponse:
    """Create an organization. Restricted to superusers."""
    service = OrganizationService(db)
    return await service.create_organization(organization_data)


@router.get(
    "/{uri:path}",
    response_model=OrganizationResponse,
    operation_id="fetchOrganization",
)
async def get_organization_by_uri(
    uri: str,
    principal: Principal = Depends(
        require_access(Action.FETCH_ORGANIZATION, ResourceKind.ORGANIZATION)
    ),
    resolver: AccessResolver = Depends(get_access_resolver),
) -> OrganizationResponse:
    """Get one organization within the current account's reach."""
    return await get_organization(uri, principal, resolver)
