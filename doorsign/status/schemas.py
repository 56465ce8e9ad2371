"""Status domain schemas."""

import uuid

from pydantic import BaseModel, ConfigDict, Field
from sqlmodel import SQLModel

from doorsign.core.constants import CUSTOM_STATUS_MAX_LENGTH, STATUS_MAX_LENGTH
from doorsign.core.mixins import UTCDateTime


class StatusUpdateRequest(BaseModel):
    """Request schema for setting a member's status."""

    # Length limits apply to the trimmed values, as in normalize_status.
    model_config = ConfigDict(str_strip_whitespace=True)

    user_id: uuid.UUID
    status: str = Field(max_length=STATUS_MAX_LENGTH)
    custom_text: str | None = Field(default=None, max_length=CUSTOM_STATUS_MAX_LENGTH)


class StatusHistoryRead(SQLModel):
    id: int
    user_id: uuid.UUID
    status: str
    custom_status_text: str | None
    changed_by: str | None
    changed_at: UTCDateTime
