"""Access control type definitions."""

from enum import Enum
from typing import FrozenSet, Optional

from pydantic import BaseModel, ConfigDict


class ResourceKind(str, Enum):
    ORGANIZATION = "organization"
    INDICATOR = "indicator"
    OUTCOME = "outcome"
    IMPACT_MODEL = "impactModel"


class DenialReason(str, Enum):
    """Why check_access reached its decision."""

    GRANTED = "granted"
    ANONYMOUS = "anonymous"
    PRINCIPAL_NOT_FOUND = "principal_not_found"
    UNREGISTERED_ACTION = "unregistered_action"
    SUPERUSER_REQUIRED = "superuser_required"
    MISSING_TARGET = "missing_target"
    TARGET_NOT_FOUND = "target_not_found"
    NOT_REACHABLE = "not_reachable"
    NOT_EDITOR = "not_editor"


class Principal(BaseModel):
    """The resolved account making a request."""

    model_config = ConfigDict(frozen=True)

    uri: str
    organization_uri: Optional[str] = None
    is_superuser: bool = False
    role: Optional[str] = None
    email: Optional[str] = None
    display_name: Optional[str] = None


class OrganizationRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    uri: str
    name: Optional[str] = None
    parent_uri: Optional[str] = None
    editors: FrozenSet[str] = frozenset()


class ResourceRecord(BaseModel):
    """
    A resource owned by one organization, optionally shared with others.

    ``has_access`` lists organizations granted visibility independent of the
    hierarchy. ``editable`` is only ever set by the resolver's annotation pass.
    """

    model_config = ConfigDict(frozen=True)

    uri: str
    kind: ResourceKind
    organization_uri: str
    has_access: FrozenSet[str] = frozenset()
    editable: bool = False


class AccessTarget(BaseModel):
    model_config = ConfigDict(frozen=True)

    uri: str
    kind: ResourceKind


class AccessDecision(BaseModel):
    model_config = ConfigDict(frozen=True)

    allowed: bool
    reason: DenialReason
    principal: Optional[Principal] = None
