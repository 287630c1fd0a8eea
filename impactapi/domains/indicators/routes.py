# impactapi/domains/indicators/routes.py
from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from impactapi.core.database import get_db
from impactapi.domains.indicators.models import (
    IndicatorCreate,
    IndicatorResponse,
    IndicatorUpdate,
)
from impactapi.domains.indicators.service import IndicatorService
from impactapi.shared.access import (
    AccessResolver,
    Action,
    Principal,
    ResourceKind,
    get_access_resolver,
    require_access,
)

router = APIRouter(tags=["Indicators"])


@router.get(
    "/indicators",
    response_model=List[IndicatorResponse],
    operation_id="fetchIndicators",
)
async def get_indicators(
    principal: Principal = Depends(require_access(Action.FETCH_INDICATORS)),
    resolver: AccessResolver = Depends(get_access_resolver),
    db: AsyncSession = Depends(get_db),
) -> List[IndicatorResponse]:
    """Get all indicators reachable by the current account."""
    service = IndicatorService(db, resolver)
    return await service.get_visible_indicators(principal)


@router.get(
    "/indicators/organization/{uri:path}",
    response_model=List[IndicatorResponse],
    operation_id="fetchOrganizationIndicators",
)
async def get_organization_indicators(
    uri: str,
    principal: Principal = Depends(
        require_access(Action.FETCH_INDICATORS, ResourceKind.ORGANIZATION)
    ),
    resolver: AccessResolver = Depends(get_access_resolver),
    db: AsyncSession = Depends(get_db),
) -> List[IndicatorResponse]:
    """Get the indicators defined by one organization."""
    service = IndicatorService(db, resolver)
    return await service.get_organization_indicators(uri, principal)


@router.post(
    "/indicators/organization/{uri:path}",
    response_model=IndicatorResponse,
    status_code=status.HTTP_201_CREATED,
    operation_id="createIndicator",
)
async def create_indicator(
    uri: str,
    indicator_data: IndicatorCreate,
    principal: Principal = Depends(
        require_access(Action.CREATE_INDICATOR, ResourceKind.ORGANIZATION)
    ),
    resolver: AccessResolver = Depends(get_access_resolver),
    db: AsyncSession = Depends(get_db),
) -> IndicatorResponse:
    """
    Create an indicator for an organization.

    Requires being an editor of the organization (or a superuser).
    """
    service = IndicatorService(db, resolver)
    return await service.create_indicator(uri, indicator_data)


@router.get(
    "/indicator/{uri:path}",
    response_model=IndicatorResponse,
    operation_id="fetchIndicator",
)
async def get_indicator(
    uri: str,
    principal: Principal = Depends(
        require_access(Action.FETCH_INDICATOR, ResourceKind.INDICATOR)
    ),
    resolver: AccessResolver = Depends(get_access_resolver),
    db: AsyncSession = Depends(get_db),
) -> IndicatorResponse:
    service = IndicatorService(db, resolver)
    return await service.get_indicator(uri, principal)


@router.put(
    "/indicator/{uri:path}",
    response_model=IndicatorResponse,
    operation_id="updateIndicator",
)
async def update_indicator(
    uri: str,
    updates: IndicatorUpdate,
    principal: Principal = Depends(
        require_access(Action.UPDATE_INDICATOR, ResourceKind.INDICATOR)
    ),
    resolver: AccessResolver = Depends(get_access_resolver),
    db: AsyncSession = Depends(get_db),
) -> IndicatorResponse:
    """
    Update an indicator.

    Requires being an editor of the owning organization (or a superuser).
    Providing has_access replaces the indicator's sharing grants.
    """
    service = IndicatorService(db, resolver)
    return await service.update_indicator(uri, updates)


@router.delete(
    "/indicator/{uri:path}",
    status_code=status.HTTP_204_NO_CONTENT,
    operation_id="deleteIndicator",
)
async def delete_indicator(
    uri: str,
    principal: Principal = Depends(
        require_access(Action.DELETE_INDICATOR, ResourceKind.INDICATOR)
    ),
    resolver: AccessResolver = Depends(get_access_resolver),
    db: AsyncSession = Depends(get_db),
) -> Response:
    service = IndicatorService(db, resolver)
    await service.delete_indicator(uri)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
