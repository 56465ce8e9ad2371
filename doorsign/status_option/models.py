"""Status option catalog model."""

from enum import Enum

from sqlmodel import Field, SQLModel

from doorsign.core.constants import STATUS_MAX_LENGTH
from doorsign.core.mixins import TimestampMixin


class StatusColor(str, Enum):
    """Fixed badge palette for status options."""

    blue = "blue"
    green = "green"
    red = "red"
    yellow = "yellow"
    purple = "purple"
    orange = "orange"
    gray = "gray"


class StatusOption(TimestampMixin, SQLModel, table=True):
    """Quick-select status suggestion.

    sort_order is stored as text; it is compared numerically when listing and
    values that do not parse as an integer sort after all others.
    """

    __tablename__: str = "status_options"

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(index=True, unique=True, max_length=STATUS_MAX_LENGTH)
    color: StatusColor = Field(default=StatusColor.blue, max_length=20)
    sort_order: str = Field(default="0", max_length=20)
