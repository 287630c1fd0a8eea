# impactapi/domains/organizations/models.py
from typing import List, Optional

from pydantic import BaseModel, field_validator

from impactapi.shared.access import OrganizationRecord, Principal


class OrganizationCreate(BaseModel):
    name: str
    description: Optional[str] = None
    parent_uri: Optional[str] = None
    editors: List[str] = []

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Organization name must not be empty")
        return v.strip()


class OrganizationResponse(BaseModel):
    uri: str
    name: Optional[str]
    parent_uri: Optional[str]
    editable: bool = False

    @classmethod
    def from_record(
        cls, record: OrganizationRecord, principal: Principal
    ) -> "OrganizationResponse":
        return cls(
            uri=record.uri,
            name=record.name,
            parent_uri=record.parent_uri,
            editable=principal.is_superuser or principal.uri in record.editors,
        )
