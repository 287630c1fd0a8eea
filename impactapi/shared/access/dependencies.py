import logging
from typing import Awaitable, Callable, Optional

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from impactapi.core.database import get_db
from impactapi.domains.auth.dependencies import get_principal_uri
from impactapi.shared.exceptions import NotAuthorizedError

from .models import Action
from .repository import AccessRepository, SqlAccessRepository
from .services import AccessResolver
from .types import AccessTarget, Principal, ResourceKind

logger = logging.getLogger(__name__)

# Path values the frontend sends when no specific target is selected
NO_TARGET_VALUES = {"", "all", "undefined"}


def get_access_repository(db: AsyncSession = Depends(get_db)) -> AccessRepository:
    return SqlAccessRepository(db)


def get_access_resolver(
    repository: AccessRepository = Depends(get_access_repository),
) -> AccessResolver:
    return AccessResolver(repository)


def selected_uri(uri: Optional[str]) -> Optional[str]:
    """Map the frontend's "no selection" placeholders to None."""
    if uri is None or uri in NO_TARGET_VALUES:
        return None
    return uri


def target_from_path(
    request: Request, target_kind: Optional[ResourceKind]
) -> Optional[AccessTarget]:
    """Build the access target from the route's ``uri`` path parameter."""
    if target_kind is None:
        return None
    uri = selected_uri(request.path_params.get("uri"))
    if uri is None:
        return None
    return AccessTarget(uri=uri, kind=target_kind)


def require_access(
    action: Action,
    target_kind: Optional[ResourceKind] = None,
) -> Callable[..., Awaitable[Principal]]:
    """
    Dependency factory for organization-scoped authorization.

    Creates a dependency that validates the current principal may perform
    the action, optionally against the resource named by the ``uri`` path
    parameter.

    Args:
        action: The action the endpoint performs
        target_kind: Kind of resource the ``uri`` path parameter names

    Returns:
        Async dependency function that validates access and returns the principal
    """

    async def check_access(
        request: Request,
        principal_uri: Optional[str] = Depends(get_principal_uri),
        resolver: AccessResolver = Depends(get_access_resolver),
    ) -> Principal:
        """
        Validate the principal may perform the action.

        Raises:
            NotAuthorizedError: For every kind of denial, so the response
                never reveals which part of the check failed
        """
        target = target_from_path(request, target_kind)
        decision = await resolver.check_access(principal_uri, action, target)

        if not decision.allowed or decision.principal is None:
            logger.info(
                f"Denied {action.value} for {principal_uri or 'anonymous'}: "
                f"{decision.reason.value}"
            )
            raise NotAuthorizedError()

        return decision.principal

    return check_access
