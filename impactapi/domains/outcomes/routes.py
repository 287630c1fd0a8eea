from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from impactapi.core.database import get_db
from impactapi.domains.outcomes.models import OutcomeResponse
from impactapi.domains.outcomes.service import OutcomeService
from impactapi.shared.access import (
    AccessResolver,
    Action,
    Principal,
    ResourceKind,
    get_access_resolver,
    require_access,
)

router = APIRouter(tags=["Outcomes"])


@router.get(
    "/outcomes",
    response_model=List[OutcomeResponse],
    operation_id="fetchOutcomes",
)
async def get_outcomes(
    principal: Principal = Depends(require_access(Action.FETCH_OUTCOMES)),
    resolver: AccessResolver = Depends(get_access_resolver),
    db: AsyncSession = Depends(get_db),
) -> List[OutcomeResponse]:
    """Get all outcomes reachable by the current account."""
    service = OutcomeService(db, resolver)
    return await service.get_visible_outcomes(principal)


@router.get(
    "/outcomes/organization/{uri:path}",
    response_model=List[OutcomeResponse],
    operation_id="fetchOrganizationOutcomes",
)
async def get_organization_outcomes(
    uri: str,
    principal: Principal = Depends(
        require_access(Action.FETCH_OUTCOMES, ResourceKind.ORGANIZATION)
    ),
    resolver: AccessResolver = Depends(get_access_resolver),
    db: AsyncSession = Depends(get_db),
) -> List[OutcomeResponse]:
    service = OutcomeService(db, resolver)
    return await service.get_organization_outcomes(uri, principal)


@router.get(
    "/outcome/{uri:path}",
    response_model=OutcomeResponse,
    operation_id="fetchOutcome",
)
async def get_outcome(
    uri: str,
    principal: Principal = Depends(
        require_access(Action.FETCH_OUTCOME, ResourceKind.OUTCOME)
    ),
    resolver: AccessResolver = Depends(get_access_resolver),
    db: AsyncSession = Depends(get_db),
) -> OutcomeResponse:
    service = OutcomeService(db, resolver)
    return await service.get_outcome(uri, principal)
