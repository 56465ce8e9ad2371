"""User domain router.

Admin-only account management. Status changes go through /api/members.
"""

import uuid

from fastapi import APIRouter, Depends, status

from doorsign.auth.dependencies import AdminIdentityDep, require_admin_role
from doorsign.core.constants import CommonResponses, Routes
from doorsign.user.schemas import UserCreate, UserRead, UserUpdate
from doorsign.user.service import UserServiceDep

router = APIRouter(
    prefix=Routes.USER.prefix,
    tags=[Routes.USER.tag],
    dependencies=[Depends(require_admin_role)],
    responses={
        **CommonResponses.UNAUTHORIZED,
        **CommonResponses.FORBIDDEN,
    },
)


@router.get("", response_model=list[UserRead])
async def list_users(users: UserServiceDep):
    """List all users. Admin only."""
    return users.list_users()


@router.post(
    "",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    responses={**CommonResponses.BAD_REQUEST},
)
async def create_user(body: UserCreate, users: UserServiceDep):
    """Create a user. Admin only.

    The first account in an empty system is always created as admin.
    """
    return users.create_user(body)


@router.get(
    "/{user_id}",
    response_model=UserRead,
    responses={**CommonResponses.NOT_FOUND},
)
async def get_user(user_id: uuid.UUID, users: UserServiceDep):
    """Get a user by ID. Admin only."""
    return users.get_user(user_id)


@router.patch(
    "/{user_id}",
    response_model=UserRead,
    responses={**CommonResponses.NOT_FOUND, **CommonResponses.BAD_REQUEST},
)
async def update_user(
    user_id: uuid.UUID,
    body: UserUpdate,
    identity: AdminIdentityDep,
    users: UserServiceDep,
):
    """Update a user's profile, role, password or e-paper settings. Admin only."""
    return users.update_user(identity, user_id, body)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={**CommonResponses.NOT_FOUND},
)
async def delete_user(
    user_id: uuid.UUID, identity: AdminIdentityDep, users: UserServiceDep
):
    """Delete a user and their status history. Admins cannot delete themselves."""
    users.delete_user(identity, user_id)
