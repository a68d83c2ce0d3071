"""Pydantic schemas for the operator login surface."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Operator login request body"""
    password: str = Field(..., description="Shared operator credential")


class SessionStatusResponse(BaseModel):
    """Current operator session state"""
    authenticated: bool = Field(..., description="True while the session is authenticated")
    expires_at: Optional[datetime] = Field(None, description="When the session lapses (UTC)")


class LoginResponse(SessionStatusResponse):
    """Successful login. The session itself travels in an HttpOnly cookie."""
    expires_in: int = Field(..., description="Session lifetime in seconds")
