"""Sync routes.

Manual reconciliation and drift inspection for admins; the last run's
outcome is visible to every signed-in user.
"""

from fastapi import APIRouter, Depends

from doorsign.auth.dependencies import require_admin_role, require_auth
from doorsign.core.constants import CommonResponses, Routes
from doorsign.sync.exceptions import SyncFailedError
from doorsign.sync.schemas import SyncRunRead, SyncStatusRead, VerificationRead
from doorsign.sync.service import SyncServiceDep

router = APIRouter(
    prefix=Routes.SYNC.prefix,
    tags=[Routes.SYNC.tag],
    dependencies=[Depends(require_auth)],
    responses={**CommonResponses.UNAUTHORIZED},
)


@router.post(
    "",
    response_model=SyncRunRead,
    dependencies=[Depends(require_admin_role)],
    responses={**CommonResponses.FORBIDDEN, 500: {"description": "Sync run failed"}},
)
async def run_sync(sync: SyncServiceDep):
    """Pull statuses from the e-paper provider and apply any changes."""
    result = await sync.run()
    if not result.success:
        raise SyncFailedError(f"Failed to sync statuses: {result.error}")
    return SyncRunRead(
        success=result.success,
        updated_count=result.updated_count,
        error=result.error,
        synced_at=result.synced_at,
    )


@router.get("/status", response_model=SyncStatusRead)
async def get_sync_status(sync: SyncServiceDep):
    latest = sync.latest()
    if latest is None:
        return SyncStatusRead()
    return SyncStatusRead.model_validate(latest, from_attributes=True)


@router.get(
    "/verify",
    response_model=list[VerificationRead],
    dependencies=[Depends(require_admin_role)],
    responses={**CommonResponses.FORBIDDEN},
)
async def verify_sync(sync: SyncServiceDep):
    """Report which members' displays disagree with the stored status."""
    return [
        VerificationRead(
            user_id=entry.user_id,
            username=entry.username,
            epaper_id=entry.epaper_id,
            local_status=entry.local_status,
            displayed_status=entry.displayed_status,
            external_status=entry.external_status,
            in_sync=entry.in_sync,
        )
        for entry in await sync.verify()
    ]
