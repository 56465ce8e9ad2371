"""User domain models.

SQLModel table definition for User. A user is both a login account and the
subject of a door sign.
"""

import uuid
from datetime import datetime
from enum import Enum

from sqlmodel import Field, SQLModel

from doorsign.core.constants import (
    CUSTOM_STATUS_MAX_LENGTH,
    DEFAULT_STATUS,
    STATUS_MAX_LENGTH,
)
from doorsign.core.mixins import TimestampMixin, utc_now


class UserRole(str, Enum):
    """Account role.

    - admin: may provision users, manage the catalog and update any status
    - regular: may update only their own status
    """

    admin = "admin"
    regular = "regular"


class User(TimestampMixin, SQLModel, table=True):
    """User database model.

    Note: password_hash is internal-only and the epaper_*_key columns are
    admin-only; neither may appear in non-admin API responses.
    """

    __tablename__: str = "users"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    username: str = Field(index=True, unique=True, max_length=100)
    password_hash: str = Field(max_length=255)
    role: UserRole = Field(default=UserRole.regular, max_length=20)

    email: str | None = Field(default=None, max_length=255)
    first_name: str | None = Field(default=None, max_length=50)
    last_name: str | None = Field(default=None, max_length=50)
    avatar_url: str | None = Field(default=None, max_length=500)

    # External e-paper identity and optional per-user provider credentials
    epaper_id: str | None = Field(default=None, index=True, max_length=100)
    epaper_import_url: str | None = Field(default=None, max_length=500)
    epaper_import_key: str | None = Field(default=None, max_length=255)
    epaper_export_url: str | None = Field(default=None, max_length=500)
    epaper_export_key: str | None = Field(default=None, max_length=255)

    current_status: str = Field(default=DEFAULT_STATUS, max_length=STATUS_MAX_LENGTH)
    custom_status_text: str | None = Field(
        default=None, max_length=CUSTOM_STATUS_MAX_LENGTH
    )
    last_updated: datetime = Field(default_factory=utc_now)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.admin
