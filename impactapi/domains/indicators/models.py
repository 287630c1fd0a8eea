# impactapi/domains/indicators/models.py
from typing import List, Optional

from pydantic import BaseModel, field_validator, model_validator

from impactapi.core.models import Indicator
from impactapi.shared.access import ResourceRecord


def _require_name(v: Optional[str]) -> str:
    if v is None or not v.strip():
        raise ValueError("Indicator name must not be empty")
    return v.strip()


class IndicatorCreate(BaseModel):
    name: str
    description: Optional[str] = None
    identifier: Optional[str] = None
    has_access: List[str] = []

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _require_name(v)


class IndicatorUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    identifier: Optional[str] = None
    # None leaves grants untouched; [] revokes them all
    has_access: Optional[List[str]] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: Optional[str]) -> str:
        # Only runs when name is sent; an explicit null cannot clear it
        return _require_name(v)

    @model_validator(mode="after")
    def validate_has_update(self) -> "IndicatorUpdate":
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided for update")
        return self


class IndicatorResponse(BaseModel):
    uri: str
    name: str
    description: Optional[str]
    identifier: Optional[str]
    organization_uri: str
    has_access: List[str]
    editable: bool = False

    @classmethod
    def from_model(
        cls, indicator: Indicator, record: ResourceRecord
    ) -> "IndicatorResponse":
        return cls(
            uri=indicator.uri,
            name=indicator.name,
            description=indicator.description,
            identifier=indicator.identifier,
            organization_uri=indicator.organization_uri,
            has_access=sorted(record.has_access),
            editable=record.editable,
        )
