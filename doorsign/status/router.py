"""Member status routes.

Every authenticated user sees the whole board; only the owner or an admin may
change a member's status.
"""

import uuid

from fastapi import APIRouter, Depends, Query

from doorsign.auth.dependencies import CurrentIdentityDep, require_auth
from doorsign.core.constants import CommonResponses, Routes
from doorsign.status.schemas import StatusHistoryRead, StatusUpdateRequest
from doorsign.status.service import StatusServiceDep
from doorsign.user.schemas import serialize_user
from doorsign.user.service import UserServiceDep

router = APIRouter(
    prefix=Routes.MEMBER.prefix,
    tags=[Routes.MEMBER.tag],
    dependencies=[Depends(require_auth)],
    responses={**CommonResponses.UNAUTHORIZED},
)


@router.get("", response_model=None)
async def list_members(identity: CurrentIdentityDep, users: UserServiceDep):
    """List every member with their current status."""
    return [serialize_user(user, identity) for user in users.list_users()]


@router.get(
    "/{user_id}",
    response_model=None,
    responses={**CommonResponses.NOT_FOUND},
)
async def get_member(
    user_id: uuid.UUID, identity: CurrentIdentityDep, users: UserServiceDep
):
    return serialize_user(users.get_user(user_id), identity)


@router.get(
    "/{user_id}/history",
    response_model=list[StatusHistoryRead],
    responses={**CommonResponses.NOT_FOUND},
)
async def get_member_history(
    user_id: uuid.UUID,
    statuses: StatusServiceDep,
    limit: int | None = Query(default=50, ge=1, le=500),
):
    """Status changes for one member, newest first."""
    return statuses.list_history(user_id, limit=limit)


@router.post(
    "/status",
    response_model=None,
    responses={
        **CommonResponses.BAD_REQUEST,
        **CommonResponses.FORBIDDEN,
        **CommonResponses.NOT_FOUND,
        **CommonResponses.STORAGE_ERROR,
    },
)
async def update_member_status(
    body: StatusUpdateRequest,
    identity: CurrentIdentityDep,
    statuses: StatusServiceDep,
):
    """Set a member's status.

    Regular users may only update themselves. The e-paper display is updated
    best-effort after the change is saved.
    """
    user = await statuses.update_status(
        identity, body.user_id, body.status, body.custom_text
    )
    return serialize_user(user, identity)
