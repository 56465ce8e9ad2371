"""In-memory status store.

Used for tests and local development. Rows are copied on the way in and on
the way out so callers can never mutate stored state by accident, which
mirrors the detached objects returned by the SQL store.
"""

import itertools
import threading
import uuid
from collections.abc import Mapping
from typing import Any, TypeVar

from sqlmodel import SQLModel

from doorsign.core.exceptions import StorageError
from doorsign.core.mixins import utc_now
from doorsign.status.models import StatusHistory
from doorsign.status_option.exceptions import StatusOptionExistsError
from doorsign.status_option.models import StatusOption
from doorsign.store.ordering import sort_status_options
from doorsign.sync.models import SyncStatus
from doorsign.user.exceptions import UsernameExistsError
from doorsign.user.models import User


M = TypeVar("M", bound=SQLModel)


def _copy(row: M) -> M:
    return type(row)(**row.model_dump())


class InMemoryStatusStore:
    """Thread-safe dict-backed implementation of StatusStore."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._users: dict[uuid.UUID, User] = {}
        self._history: dict[int, StatusHistory] = {}
        self._options: dict[int, StatusOption] = {}
        self._syncs: dict[int, SyncStatus] = {}
        self._history_ids = itertools.count(1)
        self._option_ids = itertools.count(1)
        self._sync_ids = itertools.count(1)

    def ping(self) -> None:
        return None

    def create_schema(self) -> None:
        return None

    # Users

    def get_user(self, user_id: uuid.UUID) -> User | None:
        with self._lock:
            user = self._users.get(user_id)
            return _copy(user) if user else None

    def get_user_by_username(self, username: str) -> User | None:
        with self._lock:
            for user in self._users.values():
                if user.username == username:
                    return _copy(user)
            return None

    def list_users(self) -> list[User]:
        with self._lock:
            users = [_copy(u) for u in self._users.values()]
        return sorted(users, key=lambda u: (u.created_at, u.username))

    def count_users(self) -> int:
        with self._lock:
            return len(self._users)

    def create_user(self, user: User) -> User:
        with self._lock:
            self._ensure_username_free(user.username)
            stored = _copy(user)
            self._users[stored.id] = stored
            return _copy(stored)

    def update_user(self, user_id: uuid.UUID, fields: Mapping[str, Any]) -> User | None:
        with self._lock:
            current = self._users.get(user_id)
            if current is None:
                return None
            username = fields.get("username")
            if username is not None and username != current.username:
                self._ensure_username_free(username)
            updated = _copy(current)
            for key, value in fields.items():
                setattr(updated, key, value)
            updated.updated_at = utc_now()
            self._users[user_id] = updated
            return _copy(updated)

    def update_status(
        self, user_id: uuid.UUID, status: str, custom_text: str | None
    ) -> User | None:
        with self._lock:
            current = self._users.get(user_id)
            if current is None:
                return None
            updated = _copy(current)
            now = utc_now()
            updated.current_status = status
            updated.custom_status_text = custom_text
            updated.last_updated = now
            updated.updated_at = now
            self._users[user_id] = updated
            return _copy(updated)

    def delete_user(self, user_id: uuid.UUID) -> bool:
        with self._lock:
            if self._users.pop(user_id, None) is None:
                return False
            self._history = {
                key: row for key, row in self._history.items() if row.user_id != user_id
            }
            return True

    def _ensure_username_free(self, username: str) -> None:
        if any(u.username == username for u in self._users.values()):
            raise UsernameExistsError()

    # Status history

    def create_history(self, entry: StatusHistory) -> StatusHistory:
        with self._lock:
            if entry.user_id not in self._users:
                raise StorageError("Status history owner does not exist")
            stored = _copy(entry)
            stored.id = next(self._history_ids)
            self._history[stored.id] = stored
            return _copy(stored)

    def list_history(
        self, user_id: uuid.UUID, limit: int | None = None
    ) -> list[StatusHistory]:
        with self._lock:
            rows = [_copy(r) for r in self._history.values() if r.user_id == user_id]
        rows.sort(key=lambda r: (r.changed_at, r.id), reverse=True)
        return rows if limit is None else rows[:limit]

    # Status options

    def list_status_options(self) -> list[StatusOption]:
        with self._lock:
            rows = [_copy(self._options[key]) for key in sorted(self._options)]
        return sort_status_options(rows)

    def get_status_option(self, option_id: int) -> StatusOption | None:
        with self._lock:
            option = self._options.get(option_id)
            return _copy(option) if option else None

    def create_status_option(self, option: StatusOption) -> StatusOption:
        with self._lock:
            self._ensure_option_name_free(option.name)
            stored = _copy(option)
            stored.id = next(self._option_ids)
            self._options[stored.id] = stored
            return _copy(stored)

    def update_status_option(
        self, option_id: int, fields: Mapping[str, Any]
    ) -> StatusOption | None:
        with self._lock:
            current = self._options.get(option_id)
            if current is None:
                return None
            name = fields.get("name")
            if name is not None and name != current.name:
                self._ensure_option_name_free(name)
            updated = _copy(current)
            for key, value in fields.items():
                setattr(updated, key, value)
            updated.updated_at = utc_now()
            self._options[option_id] = updated
            return _copy(updated)

    def delete_status_option(self, option_id: int) -> bool:
        with self._lock:
            return self._options.pop(option_id, None) is not None

    def _ensure_option_name_free(self, name: str) -> None:
        if any(o.name == name for o in self._options.values()):
            raise StatusOptionExistsError()

    # Sync ledger

    def record_sync(self, entry: SyncStatus) -> SyncStatus:
        with self._lock:
            stored = _copy(entry)
            stored.id = next(self._sync_ids)
            self._syncs[stored.id] = stored
            return _copy(stored)

    def get_latest_sync(self) -> SyncStatus | None:
        with self._lock:
            if not self._syncs:
                return None
            latest = max(self._syncs.values(), key=lambda s: (s.synced_at, s.id))
            return _copy(latest)
