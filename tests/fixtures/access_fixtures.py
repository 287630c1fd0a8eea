"""
Test fixtures for access control: an in-memory AccessRepository and a small
organization hierarchy shared by the resolver, dependency and route tests.

Hierarchy:
    ROOT -> BRANCH -> LEAF
    X (unrelated), Y (unrelated)

Accounts:
    ALICE  home ROOT, editor of ROOT
    CAROL  home BRANCH, editor of BRANCH
    BOB    home X, editor of X
    ADMIN  superuser, no home organization

Indicators:
    IND1 owned by BRANCH, shared with X
    IND2 owned by Y
    IND3 owned by ROOT
Impact models:
    IM1 owned by LEAF
"""

from collections import Counter
from typing import Collection, Dict, List, Optional

import pytest

from impactapi.shared.access import (
    AccessResolver,
    OrganizationRecord,
    Principal,
    ResourceKind,
    ResourceRecord,
)

ORG_PREFIX = "http://impact.test/organization#"
ROOT = f"{ORG_PREFIX}root"
BRANCH = f"{ORG_PREFIX}branch"
LEAF = f"{ORG_PREFIX}leaf"
ORG_X = f"{ORG_PREFIX}x"
ORG_Y = f"{ORG_PREFIX}y"

ALICE = "http://impact.test/account#alice"
CAROL = "http://impact.test/account#carol"
BOB = "http://impact.test/account#bob"
ADMIN = "http://impact.test/account#admin"
GHOST = "http://impact.test/account#deleted"

IND1 = "http://impact.test/indicator#1"
IND2 = "http://impact.test/indicator#2"
IND3 = "http://impact.test/indicator#3"
IM1 = "http://impact.test/impactModel#1"


class InMemoryAccessRepository:
    """AccessRepository over plain dicts that counts every call."""

    def __init__(
        self,
        accounts: List[Principal],
        organizations: List[OrganizationRecord],
        resources: List[ResourceRecord],
    ):
        self.accounts = {account.uri: account for account in accounts}
        self.organizations = {org.uri: org for org in organizations}
        self.resources = {resource.uri: resource for resource in resources}
        self.calls: Counter = Counter()
        self.error: Optional[Exception] = None

    def _record(self, name: str) -> None:
        self.calls[name] += 1
        if self.error is not None:
            raise self.error

    async def find_account(self, uri: str) -> Optional[Principal]:
        self._record("find_account")
        return self.accounts.get(uri)

    async def find_organizations(
        self, uris: Collection[str]
    ) -> List[OrganizationRecord]:
        self._record("find_organizations")
        return [self.organizations[uri] for uri in uris if uri in self.organizations]

    async def find_child_organizations(
        self, parent_uris: Collection[str]
    ) -> List[OrganizationRecord]:
        self._record("find_child_organizations")
        parents = set(parent_uris)
        return [org for org in self.organizations.values() if org.parent_uri in parents]

    async def find_all_organizations(self) -> List[OrganizationRecord]:
        self._record("find_all_organizations")
        return list(self.organizations.values())

    async def find_resource(
        self, kind: ResourceKind, uri: str
    ) -> Optional[ResourceRecord]:
        self._record("find_resource")
        resource = self.resources.get(uri)
        return resource if resource and resource.kind is kind else None

    async def find_resources(
        self, kind: ResourceKind, organization_uris: Optional[Collection[str]]
    ) -> List[ResourceRecord]:
        self._record("find_resources")
        owners = None if organization_uris is None else set(organization_uris)
        return sorted(
            (
                r
                for r in self.resources.values()
                if r.kind is kind and (owners is None or r.organization_uri in owners)
            ),
            key=lambda r: r.uri,
        )

    async def find_resources_shared_with(
        self, kind: ResourceKind, organization_uri: str
    ) -> List[ResourceRecord]:
        self._record("find_resources_shared_with")
        return sorted(
            (
                r
                for r in self.resources.values()
                if r.kind is kind and organization_uri in r.has_access
            ),
            key=lambda r: r.uri,
        )


@pytest.fixture
def alice() -> Principal:
    return Principal(uri=ALICE, organization_uri=ROOT, email="alice@example.com")


@pytest.fixture
def carol() -> Principal:
    return Principal(uri=CAROL, organization_uri=BRANCH, email="carol@example.com")


@pytest.fixture
def bob() -> Principal:
    return Principal(uri=BOB, organization_uri=ORG_X, email="bob@example.com")


@pytest.fixture
def admin() -> Principal:
    return Principal(
        uri=ADMIN, is_superuser=True, role="admin", email="admin@example.com"
    )


@pytest.fixture
def organization_records() -> Dict[str, OrganizationRecord]:
    return {
        ROOT: OrganizationRecord(uri=ROOT, name="Root", editors=frozenset({ALICE})),
        BRANCH: OrganizationRecord(
            uri=BRANCH, name="Branch", parent_uri=ROOT, editors=frozenset({CAROL})
        ),
        LEAF: OrganizationRecord(uri=LEAF, name="Leaf", parent_uri=BRANCH),
        ORG_X: OrganizationRecord(uri=ORG_X, name="X", editors=frozenset({BOB})),
        ORG_Y: OrganizationRecord(uri=ORG_Y, name="Y"),
    }


@pytest.fixture
def resource_records() -> List[ResourceRecord]:
    return [
        ResourceRecord(
            uri=IND1,
            kind=ResourceKind.INDICATOR,
            organization_uri=BRANCH,
            has_access=frozenset({ORG_X}),
        ),
        ResourceRecord(uri=IND2, kind=ResourceKind.INDICATOR, organization_uri=ORG_Y),
        ResourceRecord(uri=IND3, kind=ResourceKind.INDICATOR, organization_uri=ROOT),
        ResourceRecord(uri=IM1, kind=ResourceKind.IMPACT_MODEL, organization_uri=LEAF),
    ]


@pytest.fixture
def access_repository(
    alice: Principal,
    carol: Principal,
    bob: Principal,
    admin: Principal,
    organization_records: Dict[str, OrganizationRecord],
    resource_records: List[ResourceRecord],
) -> InMemoryAccessRepository:
    return InMemoryAccessRepository(
        accounts=[alice, carol, bob, admin],
        organizations=list(organization_records.values()),
        resources=resource_records,
    )


@pytest.fixture
def resolver(access_repository: InMemoryAccessRepository) -> AccessResolver:
    return AccessResolver(access_repository)
