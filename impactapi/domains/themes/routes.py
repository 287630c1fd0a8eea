from typing import List, Optional, Union

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from impactapi.core.database import get_db
from impactapi.domains.themes.models import OutcomeThemesResponse, ThemesResponse
from impactapi.domains.themes.service import get_outcome_themes, get_themes
from impactapi.shared.access import (
    AccessResolver,
    Action,
    Principal,
    get_access_resolver,
    require_access,
)

router = APIRouter(prefix="/themes", tags=["Themes"])


@router.get(
    "/",
    response_model=Union[OutcomeThemesResponse, ThemesResponse],
    operation_id="fetchThemes",
)
async def fetch_themes(
    outcome_uris: Optional[List[str]] = Query(None),
    principal: Principal = Depends(require_access(Action.FETCH_THEMES)),
    resolver: AccessResolver = Depends(get_access_resolver),
    db: AsyncSession = Depends(get_db),
) -> Union[OutcomeThemesResponse, ThemesResponse]:
    """
    Get all themes, or the themes of specific outcomes.

    With ``outcome_uris``, returns a map from each visible outcome to its
    theme along with the outcomes themselves.
    """
    if outcome_uris:
        return await get_outcome_themes(outcome_uris, principal, resolver, db)
    return await get_themes(db)
