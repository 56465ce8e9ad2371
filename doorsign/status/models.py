"""Status history model.

Append-only audit trail: one row per committed status change.
"""

import uuid
from datetime import datetime

from sqlmodel import Field, SQLModel

from doorsign.core.constants import CUSTOM_STATUS_MAX_LENGTH, STATUS_MAX_LENGTH
from doorsign.core.mixins import utc_now


class StatusHistory(SQLModel, table=True):
    __tablename__: str = "status_history"

    id: int | None = Field(default=None, primary_key=True)
    user_id: uuid.UUID = Field(foreign_key="users.id", index=True, ondelete="CASCADE")
    status: str = Field(max_length=STATUS_MAX_LENGTH)
    custom_status_text: str | None = Field(
        default=None, max_length=CUSTOM_STATUS_MAX_LENGTH
    )
    # Username of whoever made the change; "sync" for reconciliation runs.
    changed_by: str | None = Field(default=None, max_length=100)
    changed_at: datetime = Field(default_factory=utc_now, index=True)
