# impactapi/domains/indicators/service.py
import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from impactapi.core.models import Indicator
from impactapi.domains.indicators.models import (
    IndicatorCreate,
    IndicatorResponse,
    IndicatorUpdate,
)
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
    replace_access_grants,
    validate_organizations,
)
from impactapi.shared.utils import mint_uri

logger = logging.getLogger(__name__)


class IndicatorService:
    def __init__(self, db: AsyncSession, resolver: AccessResolver):
        self.db = db
        self.resolver = resolver

    async def get_visible_indicators(
        self, principal: Principal
    ) -> List[IndicatorResponse]:
        """
        Get every indicator the principal can see.

        Covers indicators of all reachable organizations plus indicators
        shared with the principal's organization, each marked editable when
        the principal edits the owning organization.
        """
        records = await self.resolver.visible_resources(
            principal, ResourceKind.INDICATOR
        )
        return await self._to_responses(records)

    async def get_organization_indicators(
        self, organization_uri: str, principal: Principal
    ) -> List[IndicatorResponse]:
        organization = await get_owning_organization(organization_uri, self.resolver)
        records = await self.resolver.repository.find_resources(
            ResourceKind.INDICATOR, [organization.uri]
        )
        return await self._to_responses(
            mark_editable(records, organization, principal)
        )

    async def get_indicator(self, uri: str, principal: Principal) -> IndicatorResponse:
        record = await self._get_record(uri)
        [record] = await self.resolver.filter_editable([record], principal)
        [response] = await self._to_responses([record])
        return response

    async def create_indicator(
        self, organization_uri: str, indicator_data: IndicatorCreate
    ) -> IndicatorResponse:
        """
        Create an indicator defined by the given organization.

        Raises:
            NotFoundError: If the organization does not exist
            InvalidDataError: If a has_access organization does not exist
        """
        await get_owning_organization(organization_uri, self.resolver)
        await validate_organizations(self.db, indicator_data.has_access)

        indicator = Indicator(
            uri=mint_uri("indicator"),
            name=indicator_data.name,
            description=indicator_data.description,
            identifier=indicator_data.identifier,
            organization_uri=organization_uri,
        )
        self.db.add(indicator)
        await self.db.flush()
        await replace_access_grants(self.db, indicator.uri, indicator_data.has_access)

        logger.info(f"Created indicator {indicator.uri} for {organization_uri}")
        return IndicatorResponse.from_model(
            indicator,
            ResourceRecord(
                uri=indicator.uri,
                kind=ResourceKind.INDICATOR,
                organization_uri=organization_uri,
                has_access=frozenset(indicator_data.has_access),
                editable=True,
            ),
        )

    async def update_indicator(
        self, uri: str, updates: IndicatorUpdate
    ) -> IndicatorResponse:
        record = await self._get_record(uri)
        indicator = await self.db.get(Indicator, uri)
        if indicator is None:
            raise NotFoundError("No such indicator")

        fields = updates.model_dump(exclude_unset=True, exclude={"has_access"})
        for field, value in fields.items():
            setattr(indicator, field, value)

        has_access = record.has_access
        if updates.has_access is not None:
            await validate_organizations(self.db, updates.has_access)
            await replace_access_grants(self.db, uri, updates.has_access)
            has_access = frozenset(updates.has_access)

        await self.db.flush()
        logger.info(f"Updated indicator {uri}")
        return IndicatorResponse.from_model(
            indicator,
            record.model_copy(update={"has_access": has_access, "editable": True}),
        )

    async def delete_indicator(self, uri: str) -> None:
        indicator = await self.db.get(Indicator, uri)
        if indicator is None:
            raise NotFoundError("No such indicator")

        await replace_access_grants(self.db, uri, [])
        await self.db.delete(indicator)
        await self.db.flush()
        logger.info(f"Deleted indicator {uri}")

    async def _get_record(self, uri: str) -> ResourceRecord:
        record = await self.resolver.repository.find_resource(
            ResourceKind.INDICATOR, uri
        )
        if record is None:
            raise NotFoundError("No such indicator")
        return record

    async def _to_responses(
        self, records: List[ResourceRecord]
    ) -> List[IndicatorResponse]:
        rows = await fetch_rows(self.db, Indicator, [r.uri for r in records])
        return [
            IndicatorResponse.from_model(rows[record.uri], record)
            for record in records
            if record.uri in rows
        ]
