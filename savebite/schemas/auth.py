from __future__ import annotations

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Login payload with user credentials."""
    username: str = Field(..., description="Account username")
    password: str = Field(..., description="Account password (plain)")


class TokenResponse(BaseModel):
    """Bearer token issued on successful login."""
    token: str
