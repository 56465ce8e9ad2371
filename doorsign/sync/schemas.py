"""Sync domain schemas."""

import uuid

from pydantic import BaseModel
from sqlmodel import SQLModel

from doorsign.core.mixins import UTCDateTime


class SyncRunRead(BaseModel):
    success: bool
    updated_count: int
    error: str | None
    synced_at: UTCDateTime


class SyncStatusRead(SQLModel):
    """Latest ledger entry; all fields null when no run has happened yet."""

    synced_at: UTCDateTime | None = None
    success: bool | None = None
    error_message: str | None = None
    updated_count: int | None = None


class VerificationRead(BaseModel):
    user_id: uuid.UUID
    username: str
    epaper_id: str
    local_status: str
    displayed_status: str
    external_status: str | None
    in_sync: bool
