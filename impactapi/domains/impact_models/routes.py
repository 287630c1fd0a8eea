from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from impactapi.core.database import get_db
from impactapi.domains.impact_models.models import (
    ImpactModelInterfacesResponse,
    ImpactModelListResponse,
)
from impactapi.domains.impact_models.service import ImpactModelService
from impactapi.shared.access import (
    AccessResolver,
    Action,
    Principal,
    ResourceKind,
    get_access_resolver,
    require_access,
)
from impactapi.shared.access.dependencies import selected_uri

router = APIRouter(tags=["Impact Models"])


@router.get(
    "/impactModels/{uri:path}",
    response_model=ImpactModelListResponse,
    operation_id="fetchImpactModels",
)
async def get_impact_models(
    uri: str,
    principal: Principal = Depends(
        require_access(Action.FETCH_IMPACT_MODELS, ResourceKind.ORGANIZATION)
    ),
    resolver: AccessResolver = Depends(get_access_resolver),
    db: AsyncSession = Depends(get_db),
) -> ImpactModelListResponse:
    """
    Get impact models for an organization, or all reachable ones.

    Pass ``all`` as the organization to list every impact model the
    current account can see.
    """
    service = ImpactModelService(db, resolver)
    return await service.get_impact_models(selected_uri(uri), principal)


@router.get(
    "/impactModelInterfaces/{uri:path}",
    response_model=ImpactModelInterfacesResponse,
    operation_id="fetchImpactModelInterfaces",
)
async def get_impact_model_interfaces(
    uri: str,
    principal: Principal = Depends(
        require_access(Action.FETCH_IMPACT_MODEL_INTERFACES, ResourceKind.ORGANIZATION)
    ),
    resolver: AccessResolver = Depends(get_access_resolver),
    db: AsyncSession = Depends(get_db),
) -> ImpactModelInterfacesResponse:
    """Get a URI-to-label map of impact models for selection widgets."""
    service = ImpactModelService(db, resolver)
    return await service.get_impact_model_interfaces(
        selected_uri(uri), principal
    )
