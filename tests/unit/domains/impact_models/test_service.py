"""
Tests for ImpactModelService in impactapi/domains/impact_models/service.py
"""

import pytest
from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from impactapi.core.models import ImpactModel
from impactapi.domains.impact_models.service import ImpactModelService
from impactapi.shared.access import AccessResolver, Principal
from tests.fixtures.access_fixtures import IM1, LEAF, ORG_Y


@pytest.fixture
def service(
    db_session: AsyncSession, db_resolver: AccessResolver
) -> ImpactModelService:
    return ImpactModelService(db_session, db_resolver)


class TestGetImpactModels:
    @pytest.mark.asyncio
    async def test_all_visible_models(
        self, service: ImpactModelService, alice: Principal
    ):
        result = await service.get_impact_models(None, alice)

        assert [m.uri for m in result.impact_models] == [IM1]
        assert result.impact_models[0].name == "Food security model"
        assert result.editable is None

    @pytest.mark.asyncio
    async def test_unrelated_account_sees_none(
        self, service: ImpactModelService, bob: Principal
    ):
        result = await service.get_impact_models(None, bob)

        assert result.impact_models == []

    @pytest.mark.asyncio
    async def test_single_organization_not_editor(
        self, service: ImpactModelService, carol: Principal
    ):
        result = await service.get_impact_models(LEAF, carol)

        assert [m.uri for m in result.impact_models] == [IM1]
        assert result.editable is False
        assert result.impact_models[0].editable is False

    @pytest.mark.asyncio
    async def test_single_organization_superuser(
        self, service: ImpactModelService, admin: Principal
    ):
        result = await service.get_impact_models(LEAF, admin)

        assert result.editable is True
        assert result.impact_models[0].editable is True

    @pytest.mark.asyncio
    async def test_missing_organization(
        self, service: ImpactModelService, admin: Principal
    ):
        with pytest.raises(HTTPException) as exc_info:
            await service.get_impact_models("http://impact.test/no", admin)

        assert exc_info.value.status_code == 404


class TestGetImpactModelInterfaces:
    @pytest.mark.asyncio
    async def test_labels_visible_models(
        self, service: ImpactModelService, alice: Principal
    ):
        result = await service.get_impact_model_interfaces(None, alice)

        assert result.impact_model_interfaces == {IM1: "Food security model"}

    @pytest.mark.asyncio
    async def test_unnamed_model_is_labelled_by_uri(
        self,
        service: ImpactModelService,
        db_session: AsyncSession,
        admin: Principal,
    ):
        unnamed = "http://impact.test/impactModel#2"
        db_session.add(ImpactModel(uri=unnamed, organization_uri=ORG_Y))
        await db_session.flush()

        result = await service.get_impact_model_interfaces(ORG_Y, admin)

        assert result.impact_model_interfaces == {unnamed: unnamed}

    @pytest.mark.asyncio
    async def test_hidden_models_are_left_out(
        self, service: ImpactModelService, bob: Principal
    ):
        result = await service.get_impact_model_interfaces(None, bob)

        assert result.impact_model_interfaces == {}
