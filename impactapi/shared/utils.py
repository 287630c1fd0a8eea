from uuid import uuid4

from impactapi.core.settings import settings


def mint_uri(kind: str) -> str:
    """Generate a fresh URI for a new entity of the given kind."""
    return f"{settings.RESOURCE_URI_PREFIX}{kind}_{uuid4()}"
