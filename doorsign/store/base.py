"""Status store contract.

Every component reaches persisted state through this protocol. The SQL and
in-memory implementations must be indistinguishable to callers: same
ordering, same None/bool returns for missing rows, same exceptions.

Failure contract:
- DuplicateKeyError subclasses on unique violations (username, option name)
- StorageError on any other persistence failure
"""

import uuid
from collections.abc import Mapping
from typing import Any, Protocol

from doorsign.status.models import StatusHistory
from doorsign.status_option.models import StatusOption
from doorsign.sync.models import SyncStatus
from doorsign.user.models import User


class StatusStore(Protocol):
    """Persistence for users, status history, status options and sync runs."""

    def ping(self) -> None:
        """Raise StorageError when the backend is unreachable."""
        ...

    def create_schema(self) -> None:
        """Create missing tables (no-op for the in-memory backend)."""
        ...

    # Users
    def get_user(self, user_id: uuid.UUID) -> User | None: ...

    def get_user_by_username(self, username: str) -> User | None: ...

    def list_users(self) -> list[User]:
        """All users ordered by creation time, then username."""
        ...

    def count_users(self) -> int: ...

    def create_user(self, user: User) -> User: ...

    def update_user(self, user_id: uuid.UUID, fields: Mapping[str, Any]) -> User | None:
        """Apply profile/credential field changes; None if the user is gone."""
        ...

    def update_status(
        self, user_id: uuid.UUID, status: str, custom_text: str | None
    ) -> User | None:
        """Atomically set status, custom text and last_updated.

        Returns None when the user does not exist.
        """
        ...

    def delete_user(self, user_id: uuid.UUID) -> bool:
        """Delete the user and all their history rows."""
        ...

    # Status history
    def create_history(self, entry: StatusHistory) -> StatusHistory: ...

    def list_history(
        self, user_id: uuid.UUID, limit: int | None = None
    ) -> list[StatusHistory]:
        """History rows for one user, newest first."""
        ...

    # Status options
    def list_status_options(self) -> list[StatusOption]:
        """Options by numeric sort order; unparsable last; ties by insertion."""
        ...

    def get_status_option(self, option_id: int) -> StatusOption | None: ...

    def create_status_option(self, option: StatusOption) -> StatusOption: ...

    def update_status_option(
        self, option_id: int, fields: Mapping[str, Any]
    ) -> StatusOption | None: ...

    def delete_status_option(self, option_id: int) -> bool: ...

    # Sync ledger
    def record_sync(self, entry: SyncStatus) -> SyncStatus: ...

    def get_latest_sync(self) -> SyncStatus | None: ...
