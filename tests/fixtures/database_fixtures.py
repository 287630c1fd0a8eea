"""
In-memory SQLite database seeded with the same hierarchy as access_fixtures.
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy import insert
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from impactapi.core.models import (
    Account,
    Base,
    ImpactModel,
    Indicator,
    Organization,
    Outcome,
    Theme,
    organization_editors,
    resource_access,
)
from impactapi.shared.access import AccessResolver
from impactapi.shared.access.repository import SqlAccessRepository

from .access_fixtures import (
    ADMIN,
    ALICE,
    BOB,
    BRANCH,
    CAROL,
    IM1,
    IND1,
    IND2,
    IND3,
    LEAF,
    ORG_X,
    ORG_Y,
    ROOT,
)

THEME_HEALTH = "http://impact.test/theme#health"
THEME_EDUCATION = "http://impact.test/theme#education"
OUT1 = "http://impact.test/outcome#1"
OUT2 = "http://impact.test/outcome#2"


async def seed(session: AsyncSession) -> None:
    session.add_all(
        [
            Organization(uri=ROOT, name="Root"),
            Organization(uri=BRANCH, name="Branch", parent_uri=ROOT),
            Organization(uri=LEAF, name="Leaf", parent_uri=BRANCH),
            Organization(uri=ORG_X, name="X"),
            Organization(uri=ORG_Y, name="Y"),
        ]
    )
    await session.flush()

    session.add_all(
        [
            Account(uri=ALICE, email="alice@example.com", organization_uri=ROOT),
            Account(uri=CAROL, email="carol@example.com", organization_uri=BRANCH),
            Account(uri=BOB, email="bob@example.com", organization_uri=ORG_X),
            Account(
                uri=ADMIN, email="admin@example.com", is_superuser=True, role="admin"
            ),
            Theme(uri=THEME_HEALTH, name="Health"),
            Theme(uri=THEME_EDUCATION, name="Education"),
            Indicator(uri=IND1, name="Meals served", organization_uri=BRANCH),
            Indicator(uri=IND2, name="Trees planted", organization_uri=ORG_Y),
            Indicator(uri=IND3, name="People housed", organization_uri=ROOT),
            Outcome(
                uri=OUT1,
                name="Reduced hunger",
                organization_uri=BRANCH,
                theme_uri=THEME_HEALTH,
            ),
            Outcome(uri=OUT2, name="Greener city", organization_uri=ORG_Y),
            ImpactModel(uri=IM1, name="Food security model", organization_uri=LEAF),
        ]
    )
    await session.flush()

    await session.execute(
        insert(organization_editors),
        [
            {"organization_uri": ROOT, "account_uri": ALICE},
            {"organization_uri": BRANCH, "account_uri": CAROL},
            {"organization_uri": ORG_X, "account_uri": BOB},
        ],
    )
    await session.execute(
        insert(resource_access),
        [{"resource_uri": IND1, "organization_uri": ORG_X}],
    )
    await session.flush()


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Seeded AsyncSession on a private in-memory database."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, expire_on_commit=False)
    async with session_factory() as session:
        await seed(session)
        yield session

    await engine.dispose()


@pytest.fixture
def db_resolver(db_session: AsyncSession) -> AccessResolver:
    """AccessResolver reading the seeded database."""
    return AccessResolver(SqlAccessRepository(db_session))
