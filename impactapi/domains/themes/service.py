from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from impactapi.core.models import Outcome, Theme
from impactapi.domains.themes.models import (
    OutcomeThemesResponse,
    OutcomeThemeSummary,
    ThemeResponse,
    ThemesResponse,
)
from impactapi.shared.access import AccessResolver, Principal, ResourceKind
from impactapi.shared.resources import fetch_rows


async def get_themes(db: AsyncSession) -> ThemesResponse:
    result = await db.execute(select(Theme).order_by(Theme.name))
    return ThemesResponse(
        themes=[ThemeResponse.from_model(theme) for theme in result.scalars().all()]
    )


async def get_outcome_themes(
    outcome_uris: List[str],
    principal: Principal,
    resolver: AccessResolver,
    db: AsyncSession,
) -> OutcomeThemesResponse:
    """
    Get the theme of each requested outcome.

    Outcomes the principal cannot see are left out.
    """
    requested = set(outcome_uris)
    visible = [
        record.uri
        for record in await resolver.visible_resources(principal, ResourceKind.OUTCOME)
        if record.uri in requested
    ]
    outcomes = await fetch_rows(db, Outcome, visible)
    themes = await fetch_rows(
        db, Theme, {o.theme_uri for o in outcomes.values() if o.theme_uri}
    )

    return OutcomeThemesResponse(
        themes={
            uri: (
                ThemeResponse.from_model(themes[outcome.theme_uri])
                if outcome.theme_uri in themes
                else None
            )
            for uri, outcome in outcomes.items()
        },
        outcomes=[
            OutcomeThemeSummary(
                uri=outcome.uri, name=outcome.name, theme_uri=outcome.theme_uri
            )
            for outcome in outcomes.values()
        ],
    )
