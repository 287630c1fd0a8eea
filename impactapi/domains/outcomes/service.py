from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from impactapi.core.models import Outcome
from impactapi.domains.outcomes.models import OutcomeResponse
from impactapi.shared.access import (
    AccessResolver,
    Principal,
    ResourceKind,
    ResourceRecord,
)
from impactapi.shared.exceptions import NotFoundError
from impactapi.shared.resources import (
    fetch_rows,
    get_owning_organization,
    mark_editable,
)


class OutcomeService:
    def __init__(self, db: AsyncSession, resolver: AccessResolver):
        self.db = db
        self.resolver = resolver

    async def get_visible_outcomes(self, principal: Principal) -> List[OutcomeResponse]:
        records = await self.resolver.visible_resources(
            principal, ResourceKind.OUTCOME
        )
        return await self._to_responses(records)

    async def get_organization_outcomes(
        self, organization_uri: str, principal: Principal
    ) -> List[OutcomeResponse]:
        organization = await get_owning_organization(organization_uri, self.resolver)
        records = await self.resolver.repository.find_resources(
            ResourceKind.OUTCOME, [organization.uri]
        )
        return await self._to_responses(
            mark_editable(records, organization, principal)
        )

    async def get_outcome(self, uri: str, principal: Principal) -> OutcomeResponse:
        record = await self.resolver.repository.find_resource(
            ResourceKind.OUTCOME, uri
        )
        if record is None:
            raise NotFoundError("No such outcome")
        [record] = await self.resolver.filter_editable([record], principal)
        [response] = await self._to_responses([record])
        return response

    async def _to_responses(
        self, records: List[ResourceRecord]
    ) -> List[OutcomeResponse]:
        rows = await fetch_rows(self.db, Outcome, [r.uri for r in records])
        return [
            OutcomeResponse.from_model(rows[record.uri], record)
            for record in records
            if record.uri in rows
        ]
