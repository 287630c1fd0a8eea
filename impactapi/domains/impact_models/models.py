from typing import Dict, List, Optional

from pydantic import BaseModel

from impactapi.core.models import ImpactModel
from impactapi.shared.access import ResourceRecord


class ImpactModelResponse(BaseModel):
    uri: str
    name: Optional[str]
    description: Optional[str]
    organization_uri: str
    editable: bool = False

    @classmethod
    def from_model(
        cls, impact_model: ImpactModel, record: ResourceRecord
    ) -> "ImpactModelResponse":
        return cls(
            uri=impact_model.uri,
            name=impact_model.name,
            description=impact_model.description,
            organization_uri=impact_model.organization_uri,
            editable=record.editable,
        )


class ImpactModelListResponse(BaseModel):
    impact_models: List[ImpactModelResponse]
    # Set only when listing a single organization's models
    editable: Optional[bool] = None


class ImpactModelInterfacesResponse(BaseModel):
    """Impact model URI to display label (its name, or the URI when unnamed)."""

    impact_model_interfaces: Dict[str, str]
