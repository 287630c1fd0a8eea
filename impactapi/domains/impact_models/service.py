from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from impactapi.core.models import ImpactModel
from impactapi.domains.impact_models.models import (
    ImpactModelInterfacesResponse,
    ImpactModelListResponse,
    ImpactModelResponse,
)
from impactapi.shared.access import (
    AccessResolver,
    Principal,
    ResourceKind,
    ResourceRecord,
)
from impactapi.shared.resources import (
    fetch_rows,
    get_owning_organization,
    mark_editable,
)


class ImpactModelService:
    def __init__(self, db: AsyncSession, resolver: AccessResolver):
        self.db = db
        self.resolver = resolver

    async def get_impact_models(
        self, organization_uri: Optional[str], principal: Principal
    ) -> ImpactModelListResponse:
        """
        List impact models.

        Without an organization, returns every impact model visible to the
        principal, each marked editable individually. With one, returns that
        organization's models and whether the principal may edit them.
        """
        if organization_uri is None:
            records = await self.resolver.visible_resources(
                principal, ResourceKind.IMPACT_MODEL
            )
            return ImpactModelListResponse(
                impact_models=await self._to_responses(records)
            )

        organization = await get_owning_organization(organization_uri, self.resolver)
        records = mark_editable(
            await self.resolver.repository.find_resources(
                ResourceKind.IMPACT_MODEL, [organization.uri]
            ),
            organization,
            principal,
        )
        return ImpactModelListResponse(
            impact_models=await self._to_responses(records),
            editable=principal.is_superuser or principal.uri in organization.editors,
        )

    async def get_impact_model_interfaces(
        self, organization_uri: Optional[str], principal: Principal
    ) -> ImpactModelInterfacesResponse:
        if organization_uri is None:
            records = await self.resolver.visible_resources(
                principal, ResourceKind.IMPACT_MODEL
            )
        else:
            records = await self.resolver.repository.find_resources(
                ResourceKind.IMPACT_MODEL, [organization_uri]
            )

        rows = await fetch_rows(self.db, ImpactModel, [r.uri for r in records])
        return ImpactModelInterfacesResponse(
            impact_model_interfaces={
                uri: row.name or uri for uri, row in sorted(rows.items())
            }
        )

    async def _to_responses(
        self, records: List[ResourceRecord]
    ) -> List[ImpactModelResponse]:
        rows = await fetch_rows(self.db, ImpactModel, [r.uri for r in records])
        return [
            ImpactModelResponse.from_model(rows[record.uri], record)
            for record in records
            if record.uri in rows
        ]
