"""
Access control exceptions.
"""

from fastapi import status

from impactapi.shared.exceptions import BaseHTTPException


class PrincipalNotFoundError(BaseHTTPException):
    """Raised when the session-identified account does not exist."""

    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Account not found"


class UpstreamLookupError(BaseHTTPException):
    """Raised when the account, organization or resource store fails."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Internal server error"


class PolicyMisconfigurationError(BaseHTTPException):
    """Raised when an action has no registered access policy."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Access policy not configured"
