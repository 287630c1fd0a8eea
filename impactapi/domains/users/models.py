from typing import Optional

from pydantic import BaseModel

from impactapi.shared.access import Principal


class UserProfileResponse(BaseModel):
    uri: str
    email: Optional[str]
    display_name: Optional[str]
    role: Optional[str]
    is_superuser: bool
    organization_uri: Optional[str]

    @classmethod
    def from_principal(cls, principal: Principal) -> "UserProfileResponse":
        return cls(
            uri=principal.uri,
            email=principal.email,
            display_name=principal.display_name,
            role=principal.role,
            is_superuser=principal.is_superuser,
            organization_uri=principal.organization_uri,
        )
