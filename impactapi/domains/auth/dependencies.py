# impactapi/domains/auth/dependencies.py
from typing import Optional

import jwt
from fastapi import Header, HTTPException, status
from jwt import PyJWKClient

from impactapi.core.settings import settings
from impactapi.shared.exceptions import InvalidTokenError

from .types import JwtPayload

_jwks_client = PyJWKClient(settings.JWKS_URL) if settings.JWKS_URL else None


def decode_session_jwt(token: str) -> JwtPayload:
    """
    Verifies a session token. Uses JWT_SECRET (HS256) when configured,
    otherwise the JWKS endpoint (RS256).
    """
    if settings.JWT_SECRET:
        try:
            payload = jwt.decode(
                token,
                settings.JWT_SECRET,
                algorithms=["HS256"],
                options={"verify_aud": False},
            )
            return JwtPayload(**dict(payload))
        except jwt.PyJWTError:
            raise InvalidTokenError("Invalid or expired token")

    if not _jwks_client:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Token verification not configured",
        )
    try:
        signing_key = _jwks_client.get_signing_key_from_jwt(token).key
        payload = jwt.decode(
            token,
            signing_key,
            algorithms=["RS256"],
            options={"verify_aud": False},
        )
        return JwtPayload(**dict(payload))
    except jwt.PyJWTError:
        raise InvalidTokenError("Invalid or expired token")


def get_principal_uri(authorization: Optional[str] = Header(None)) -> Optional[str]:
    """
    Extracts the principal URI (the `sub` claim) from the Authorization header.

    Returns None for anonymous requests so the access resolver can deny them;
    a header that is present but malformed or unverifiable is a 401.
    """
    if authorization is None:
        return None

    if not authorization.startswith("Bearer "):
        raise InvalidTokenError("Missing token")

    token = authorization.split(" ")[1]
    payload = decode_session_jwt(token)
    return payload.sub or None
