"""Health domain router.

Health check endpoint for monitoring and load balancers.
"""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from doorsign.core.constants import Routes
from doorsign.core.deps import StoreDep
from doorsign.core.exceptions import StorageError

logger = logging.getLogger(__name__)

router = APIRouter(prefix=Routes.HEALTH.prefix, tags=[Routes.HEALTH.tag])


@router.get("")
async def health(store: StoreDep):
    """Health check endpoint with store connectivity verification."""
    try:
        store.ping()
        return {"status": "ok", "storage": "ok"}
    except StorageError as e:
        logger.warning("Health check failed: %s", e.message)
        return JSONResponse(
            status_code=503,
            content={"status": "unhealthy", "storage": "error"},
        )
