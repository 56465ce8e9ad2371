from functools import lru_cache

from sqlalchemy import Engine, event
from sqlmodel import create_engine

from doorsign.core.settings import get_settings


def build_engine(database_url: str, **kwargs) -> Engine:
    """Create an engine, enabling SQLite foreign keys for cascade deletes."""
    connect_args: dict[str, object] = {}
    is_sqlite = database_url.startswith("sqlite")
    if is_sqlite:
        # Required for SQLite when used with FastAPI across threads.
        connect_args = {"check_same_thread": False}

    engine = create_engine(database_url, echo=False, connect_args=connect_args, **kwargs)

    if is_sqlite:

        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, _record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


@lru_cache
def get_engine() -> Engine:
    """Process-wide engine for the configured DATABASE_URL."""
    return build_engine(get_settings().database_url)
