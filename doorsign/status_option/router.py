"""Status option routes.

Any signed-in user can read the catalog; only admins can change it.
"""

from fastapi import APIRouter, Depends, status

from doorsign.auth.dependencies import require_admin_role, require_auth
from doorsign.core.constants import CommonResponses, Routes
from doorsign.core.deps import StoreDep
from doorsign.status_option.exceptions import StatusOptionNotFoundError
from doorsign.status_option.models import StatusOption
from doorsign.status_option.schemas import (
    StatusOptionCreate,
    StatusOptionRead,
    StatusOptionUpdate,
)

router = APIRouter(
    prefix=Routes.STATUS_OPTION.prefix,
    tags=[Routes.STATUS_OPTION.tag],
    dependencies=[Depends(require_auth)],
    responses={**CommonResponses.UNAUTHORIZED},
)


@router.get("", response_model=list[StatusOptionRead])
async def list_status_options(store: StoreDep):
    """List quick-select statuses in display order."""
    return store.list_status_options()


@router.post(
    "",
    response_model=StatusOptionRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin_role)],
    responses={**CommonResponses.FORBIDDEN, **CommonResponses.BAD_REQUEST},
)
async def create_status_option(body: StatusOptionCreate, store: StoreDep):
    return store.create_status_option(StatusOption(**body.model_dump()))


@router.patch(
    "/{option_id}",
    response_model=StatusOptionRead,
    dependencies=[Depends(require_admin_role)],
    responses={
        **CommonResponses.FORBIDDEN,
        **CommonResponses.NOT_FOUND,
        **CommonResponses.BAD_REQUEST,
    },
)
async def update_status_option(
    option_id: int, body: StatusOptionUpdate, store: StoreDep
):
    fields = {k: v for k, v in body.model_dump(exclude_unset=True).items() if v is not None}
    option = store.update_status_option(option_id, fields)
    if option is None:
        raise StatusOptionNotFoundError()
    return option


@router.delete(
    "/{option_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin_role)],
    responses={**CommonResponses.FORBIDDEN, **CommonResponses.NOT_FOUND},
)
async def delete_status_option(option_id: int, store: StoreDep):
    if not store.delete_status_option(option_id):
        raise StatusOptionNotFoundError()
