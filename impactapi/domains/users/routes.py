from fastapi import APIRouter, Depends

from impactapi.domains.users.models import UserProfileResponse
from impactapi.shared.access import Action, Principal, require_access

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/me", response_model=UserProfileResponse, operation_id="fetchUserProfile")
async def get_my_profile(
    principal: Principal = Depends(require_access(Action.FETCH_USER_PROFILE)),
) -> UserProfileResponse:
    """Return the authenticated account's own profile."""
    return UserProfileResponse.from_principal(principal)
