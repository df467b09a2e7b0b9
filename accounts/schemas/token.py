"""
Token schemas for JWT authentication.
"""

from typing import Optional

from pydantic import BaseModel


class UserLoginResponse(BaseModel):
    """Schema for the login response carrying the access token."""

    status: str = "success"
    token: str


class TokenPayload(BaseModel):
    """Schema for decoded JWT payload."""

    sub: Optional[str] = None
