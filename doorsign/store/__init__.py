"""Status store package.

The backend is chosen once at startup from settings and injected into the
services; nothing in the app reaches for a module-level store.
"""

from doorsign.core.settings import Settings, StorageBackend
from doorsign.store.base import StatusStore
from doorsign.store.memory import InMemoryStatusStore
from doorsign.store.sql import SqlStatusStore


def build_store(settings: Settings) -> StatusStore:
    """Create the store selected by STORAGE_BACKEND."""
    if settings.storage_backend == StorageBackend.memory:
        return InMemoryStatusStore()

    from doorsign.db.engine import get_engine

    return SqlStatusStore(get_engine())


__all__ = [
    "InMemoryStatusStore",
    "SqlStatusStore",
    "StatusStore",
    "build_store",
]
