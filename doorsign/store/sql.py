"""SQL status store backed by SQLModel.

Works on any SQLAlchemy URL; SQLite in development, PostgreSQL in
production. Sessions use expire_on_commit=False so returned rows are plain
detached objects, matching the copies handed out by the in-memory store.
"""

import logging
import uuid
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any

from sqlalchemy import Engine, delete, func, text, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, SQLModel, select

import doorsign.models  # noqa: F401  (registers every table in SQLModel.metadata)
from doorsign.core.exceptions import DuplicateKeyError, StorageError
from doorsign.core.mixins import utc_now
from doorsign.status.models import StatusHistory
from doorsign.status_option.exceptions import StatusOptionExistsError
from doorsign.status_option.models import StatusOption
from doorsign.store.ordering import sort_status_options
from doorsign.sync.models import SyncStatus
from doorsign.user.exceptions import UsernameExistsError
from doorsign.user.models import User

logger = logging.getLogger(__name__)


# SQLSTATE unique_violation, exposed by the PostgreSQL drivers
UNIQUE_VIOLATION = "23505"


def _is_unique_violation(error: IntegrityError) -> bool:
    orig = error.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code is not None:
        return code == UNIQUE_VIOLATION
    # SQLite reports only a message: "UNIQUE constraint failed: users.username"
    return "unique constraint" in str(orig).lower()


class SqlStatusStore:
    """SQLModel implementation of StatusStore."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    @property
    def engine(self) -> Engine:
        return self._engine

    @contextmanager
    def _session(
        self, duplicate_error: type[DuplicateKeyError] = DuplicateKeyError
    ) -> Iterator[Session]:
        """Open a session and translate SQLAlchemy failures.

        A unique-constraint violation becomes duplicate_error. Anything else
        from SQLAlchemy, foreign key failures included, becomes StorageError.
        Uncommitted work is rolled back on close.
        """
        try:
            with Session(self._engine, expire_on_commit=False) as session:
                yield session
        except IntegrityError as e:
            if _is_unique_violation(e):
                raise duplicate_error() from e
            logger.error("Integrity check failed: %s", e.orig)
            raise StorageError() from e
        except SQLAlchemyError as e:
            logger.error("Storage operation failed: %s", e, exc_info=True)
            raise StorageError() from e

    def ping(self) -> None:
        with self._session() as session:
            session.exec(text("SELECT 1"))

    def create_schema(self) -> None:
        try:
            SQLModel.metadata.create_all(self._engine)
        except SQLAlchemyError as e:
            raise StorageError("Failed to create database schema") from e

    # Users

    def get_user(self, user_id: uuid.UUID) -> User | None:
        with self._session() as session:
            return session.get(User, user_id)

    def get_user_by_username(self, username: str) -> User | None:
        with self._session() as session:
            return session.exec(select(User).where(User.username == username)).first()

    def list_users(self) -> list[User]:
        with self._session() as session:
            statement = select(User).order_by(User.created_at, User.username)
            return list(session.exec(statement).all())

    def count_users(self) -> int:
        with self._session() as session:
            return session.exec(select(func.count()).select_from(User)).one()

    def create_user(self, user: User) -> User:
        with self._session(UsernameExistsError) as session:
            session.add(user)
            session.commit()
            session.refresh(user)
            return user

    def update_user(self, user_id: uuid.UUID, fields: Mapping[str, Any]) -> User | None:
        with self._session(UsernameExistsError) as session:
            user = session.get(User, user_id)
            if user is None:
                return None
            for key, value in fields.items():
                setattr(user, key, value)
            session.add(user)
            session.commit()
            session.refresh(user)
            return user

    def update_status(
        self, user_id: uuid.UUID, status: str, custom_text: str | None
    ) -> User | None:
        now = utc_now()
        # One UPDATE statement: the row change and timestamp land atomically.
        statement = (
            update(User)
            .where(User.id == user_id)
            .values(
                current_status=status,
                custom_status_text=custom_text,
                last_updated=now,
                updated_at=now,
            )
        )
        with self._session() as session:
            result = session.exec(statement)
            session.commit()
            if result.rowcount == 0:
                return None
            return session.get(User, user_id)

    def delete_user(self, user_id: uuid.UUID) -> bool:
        with self._session() as session:
            user = session.get(User, user_id)
            if user is None:
                return False
            session.exec(delete(StatusHistory).where(StatusHistory.user_id == user_id))
            session.delete(user)
            session.commit()
            return True

    # Status history

    def create_history(self, entry: StatusHistory) -> StatusHistory:
        with self._session() as session:
            session.add(entry)
            session.commit()
            session.refresh(entry)
            return entry

    def list_history(
        self, user_id: uuid.UUID, limit: int | None = None
    ) -> list[StatusHistory]:
        statement = (
            select(StatusHistory)
            .where(StatusHistory.user_id == user_id)
            .order_by(StatusHistory.changed_at.desc(), StatusHistory.id.desc())
        )
        if limit is not None:
            statement = statement.limit(limit)
        with self._session() as session:
            return list(session.exec(statement).all())

    # Status options

    def list_status_options(self) -> list[StatusOption]:
        with self._session() as session:
            rows = session.exec(select(StatusOption).order_by(StatusOption.id)).all()
        return sort_status_options(rows)

    def get_status_option(self, option_id: int) -> StatusOption | None:
        with self._session() as session:
            return session.get(StatusOption, option_id)

    def create_status_option(self, option: StatusOption) -> StatusOption:
        with self._session(StatusOptionExistsError) as session:
            session.add(option)
            session.commit()
            session.refresh(option)
            return option

    def update_status_option(
        self, option_id: int, fields: Mapping[str, Any]
    ) -> StatusOption | None:
        with self._session(StatusOptionExistsError) as session:
            option = session.get(StatusOption, option_id)
            if option is None:
                return None
            for key, value in fields.items():
                setattr(option, key, value)
            session.add(option)
            session.commit()
            session.refresh(option)
            return option

    def delete_status_option(self, option_id: int) -> bool:
        with self._session() as session:
            option = session.get(StatusOption, option_id)
            if option is None:
                return False
            session.delete(option)
            session.commit()
            return True

    # Sync ledger

    def record_sync(self, entry: SyncStatus) -> SyncStatus:
        with self._session() as session:
            session.add(entry)
            session.commit()
            session.refresh(entry)
            return entry

    def get_latest_sync(self) -> SyncStatus | None:
        statement = select(SyncStatus).order_by(
            SyncStatus.synced_at.desc(), SyncStatus.id.desc()
        )
        with self._session() as session:
            return session.exec(statement).first()
