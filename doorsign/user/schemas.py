"""User domain schemas.

Request and response schemas for user operations.

Security notes:
- password_hash is internal-only, never exposed in responses
- UserPublicRead contains only fields safe for any authenticated caller
- e-paper endpoints and keys are admin-only (UserRead)
"""

import uuid

from pydantic import EmailStr, Field
from sqlmodel import SQLModel

from doorsign.auth.service import Identity
from doorsign.core.constants import (
    CUSTOM_STATUS_MAX_LENGTH,
    DEFAULT_STATUS,
    STATUS_MAX_LENGTH,
)
from doorsign.core.mixins import UTCDateTime
from doorsign.user.models import User, UserRole

EPAPER_ID_PATTERN = r"^[A-Za-z0-9_.\-]+$"


class UserPublicRead(SQLModel):
    """Door-sign view of a user, safe for every authenticated caller."""

    id: uuid.UUID
    username: str
    role: UserRole
    email: str | None
    first_name: str | None
    last_name: str | None
    avatar_url: str | None
    epaper_id: str | None
    current_status: str
    custom_status_text: str | None
    last_updated: UTCDateTime
    created_at: UTCDateTime
    updated_at: UTCDateTime


class UserRead(UserPublicRead):
    """Full response schema for admin contexts.

    Extends UserPublicRead with the per-user e-paper endpoints and keys.
    """

    epaper_import_url: str | None
    epaper_import_key: str | None
    epaper_export_url: str | None
    epaper_export_key: str | None


class _EpaperFields(SQLModel):
    epaper_id: str | None = Field(default=None, max_length=100, pattern=EPAPER_ID_PATTERN)
    epaper_import_url: str | None = Field(default=None, max_length=500)
    epaper_import_key: str | None = Field(default=None, max_length=255)
    epaper_export_url: str | None = Field(default=None, max_length=500)
    epaper_export_key: str | None = Field(default=None, max_length=255)


class UserCreate(_EpaperFields):
    """Schema for admin provisioning of a user.

    The requested role is honoured except for the very first account,
    which always becomes admin.
    """

    username: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=6, max_length=128)
    role: UserRole = UserRole.regular
    email: EmailStr | None = None
    first_name: str | None = Field(default=None, max_length=50)
    last_name: str | None = Field(default=None, max_length=50)
    avatar_url: str | None = Field(default=None, max_length=500)
    current_status: str = Field(
        default=DEFAULT_STATUS, min_length=1, max_length=STATUS_MAX_LENGTH
    )
    custom_status_text: str | None = Field(
        default=None, max_length=CUSTOM_STATUS_MAX_LENGTH
    )


class UserUpdate(_EpaperFields):
    """Schema for admin profile edits. Status changes go through /members."""

    username: str | None = Field(default=None, min_length=1, max_length=100)
    password: str | None = Field(default=None, min_length=6, max_length=128)
    role: UserRole | None = None
    email: EmailStr | None = None
    first_name: str | None = Field(default=None, max_length=50)
    last_name: str | None = Field(default=None, max_length=50)
    avatar_url: str | None = Field(default=None, max_length=500)


def serialize_user(user: User, identity: Identity) -> UserPublicRead:
    """Pick the response shape for the caller's role."""
    if identity.is_admin:
        return UserRead.model_validate(user)
    return UserPublicRead.model_validate(user)
