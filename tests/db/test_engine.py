"""Tests for doorsign/db/engine.py."""

import uuid

import pytest
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, SQLModel
from sqlmodel.pool import StaticPool

from doorsign.db.engine import build_engine, get_engine
from doorsign.status.models import StatusHistory


def test_sqlite_foreign_keys_enabled():
    engine = build_engine("sqlite://", poolclass=StaticPool)

    with engine.connect() as conn:
        assert conn.execute(text("PRAGMA foreign_keys")).scalar() == 1


def test_history_requires_existing_user():
    engine = build_engine("sqlite://", poolclass=StaticPool)
    SQLModel.metadata.create_all(engine)

    with Session(engine) as session:
        session.add(StatusHistory(user_id=uuid.uuid4(), status="Out"))
        with pytest.raises(IntegrityError):
            session.commit()


def test_get_engine_is_cached():
    assert get_engine() is get_engine()
