"""Sync ledger model."""

from datetime import datetime

from sqlmodel import Field, SQLModel

from doorsign.core.mixins import utc_now


class SyncStatus(SQLModel, table=True):
    """One reconciliation run. The newest row is the current sync health."""

    __tablename__: str = "sync_status"

    id: int | None = Field(default=None, primary_key=True)
    synced_at: datetime = Field(default_factory=utc_now, index=True)
    success: bool
    error_message: str | None = Field(default=None, max_length=1000)
    updated_count: int = Field(default=0, ge=0)
