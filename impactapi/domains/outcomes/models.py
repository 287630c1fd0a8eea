from typing import List, Optional

from pydantic import BaseModel

from impactapi.core.models import Outcome
from impactapi.shared.access import ResourceRecord


class OutcomeResponse(BaseModel):
    uri: str
    name: str
    description: Optional[str]
    organization_uri: str
    theme_uri: Optional[str]
    has_access: List[str]
    editable: bool = False

    @classmethod
    def from_model(cls, outcome: Outcome, record: ResourceRecord) -> "OutcomeResponse":
        return cls(
            uri=outcome.uri,
            name=outcome.name,
            description=outcome.description,
            organization_uri=outcome.organization_uri,
            theme_uri=outcome.theme_uri,
            has_access=sorted(record.has_access),
            editable=record.editable,
        )
