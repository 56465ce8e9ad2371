"""Auth domain schemas.

Request and response schemas for authentication operations.
"""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Request schema for username/password login."""

    username: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=1)


class AuthMessage(BaseModel):
    """Generic auth message response."""

    message: str
