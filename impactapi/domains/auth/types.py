"""Auth domain type definitions for type safety."""

from typing import Optional

from pydantic import BaseModel, Field


class JwtPayload(BaseModel):
    """Session token payload. ``sub`` carries the account URI."""

    sub: Optional[str] = Field(None, description="Subject (account URI)")
    iss: Optional[str] = Field(None, description="Token issuer")
    aud: Optional[str | list[str]] = Field(None, description="Token audience")
    exp: Optional[int] = Field(None, description="Expiration timestamp")
    iat: Optional[int] = Field(None, description="Issued at timestamp")
    email: Optional[str] = Field(None, description="Account email address")

    model_config = {"extra": "allow"}
