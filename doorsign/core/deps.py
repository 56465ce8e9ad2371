"""Centralized dependency type aliases for FastAPI routes.

Import the shared dependencies from this single module:
    from doorsign.core.deps import SettingsDep, StoreDep
"""

from typing import Annotated

from fastapi import Depends, Request

from doorsign.core.exceptions import InternalError
from doorsign.core.settings import Settings, get_settings
from doorsign.store.base import StatusStore


def get_store(request: Request) -> StatusStore:
    """Return the store selected at startup (see main.lifespan)."""
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise InternalError("Status store is not initialized")
    return store


# Application settings
SettingsDep = Annotated[Settings, Depends(get_settings)]

# Status store chosen once per process
StoreDep = Annotated[StatusStore, Depends(get_store)]
