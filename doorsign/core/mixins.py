"""Reusable model mixins and timestamp helpers.

Provides common field patterns for SQLModel table definitions and the
UTC normalization shared by every response schema.
"""

from datetime import UTC, datetime
from typing import Annotated

from pydantic import PlainSerializer
from sqlalchemy import text
from sqlmodel import Field


def utc_now() -> datetime:
    """Return current UTC time without microseconds."""
    return datetime.now(UTC).replace(microsecond=0)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes (SQLite returns them naive)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def isoformat_utc(value: datetime) -> str:
    """Format as ISO 8601 in UTC with a Z suffix (e.g. 2026-01-19T12:34:56Z)."""
    return as_utc(value).replace(microsecond=0).isoformat().replace("+00:00", "Z")


class TimestampMixin:
    """Mixin that adds created_at and updated_at timestamps.

    Timestamps are stored without microseconds for cleaner output.

    Usage:
        class MyModel(TimestampMixin, SQLModel, table=True):
            id: int = Field(primary_key=True)
            name: str
    """

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column_kwargs={"server_default": text("CURRENT_TIMESTAMP")},
    )
    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_column_kwargs={
            "server_default": text("CURRENT_TIMESTAMP"),
            "onupdate": utc_now,
        },
    )


# Datetime type for response schemas: always rendered as UTC with a Z suffix.
UTCDateTime = Annotated[
    datetime, PlainSerializer(isoformat_utc, return_type=str, when_used="json")
]
