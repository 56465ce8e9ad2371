"""Status option schemas.

sort_order is accepted only as a non-negative integer string on the way in;
the store still tolerates legacy non-numeric values and lists them last.
"""

from pydantic import BaseModel, Field
from sqlmodel import SQLModel

from doorsign.core.constants import STATUS_MAX_LENGTH
from doorsign.core.mixins import UTCDateTime
from doorsign.status_option.models import StatusColor

SORT_ORDER_PATTERN = r"^\d+$"


class StatusOptionCreate(BaseModel):
    name: str = Field(min_length=1, max_length=STATUS_MAX_LENGTH)
    color: StatusColor = StatusColor.blue
    sort_order: str = Field(default="0", max_length=20, pattern=SORT_ORDER_PATTERN)


class StatusOptionUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=STATUS_MAX_LENGTH)
    color: StatusColor | None = None
    sort_order: str | None = Field(
        default=None, max_length=20, pattern=SORT_ORDER_PATTERN
    )


class StatusOptionRead(SQLModel):
    id: int
    name: str
    color: StatusColor
    sort_order: str
    created_at: UTCDateTime
    updated_at: UTCDateTime
