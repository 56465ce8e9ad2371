"""Auth domain router.

Username/password login backed by a signed session cookie.
"""

import logging

from fastapi import APIRouter, Request

from doorsign.auth.dependencies import SESSION_USER_KEY, CurrentUserDep
from doorsign.auth.schemas import AuthMessage, LoginRequest
from doorsign.auth.service import Identity, authenticate
from doorsign.core.constants import CommonResponses, Routes
from doorsign.core.deps import StoreDep
from doorsign.user.exceptions import UserNotFoundError
from doorsign.user.schemas import serialize_user

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix=Routes.AUTH.prefix,
    tags=[Routes.AUTH.tag],
    responses={**CommonResponses.BAD_REQUEST},
)


@router.post(
    "/login",
    response_model=None,
    responses={**CommonResponses.UNAUTHORIZED},
)
async def login(payload: LoginRequest, request: Request, store: StoreDep):
    """Verify credentials and start a session.

    Returns the signed-in user; e-paper credentials are included for admins.
    """
    identity = authenticate(store, payload.username.strip(), payload.password)

    user = store.get_user(identity.id)
    if user is None:
        raise UserNotFoundError()

    request.session.clear()
    request.session[SESSION_USER_KEY] = str(user.id)
    logger.info("User %s logged in", user.username, extra={"user_id": user.id})
    return serialize_user(user, identity)


@router.post("/logout", response_model=AuthMessage)
async def logout(request: Request):
    """Clear the session. Safe to call when already signed out."""
    request.session.clear()
    return AuthMessage(message="Logout successful")


@router.get(
    "/user",
    response_model=None,
    responses={**CommonResponses.UNAUTHORIZED},
)
async def get_current_user_info(user: CurrentUserDep):
    """Get the signed-in user."""
    return serialize_user(user, Identity.from_user(user))
