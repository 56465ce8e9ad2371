"""Auth domain dependencies.

Session-backed authentication for FastAPI routes. The login route stores the
user id in the signed Starlette session cookie; every protected route
re-loads that user from the store, so deleted accounts lose access at once.
"""

import logging
import uuid
from typing import Annotated

from fastapi import Depends, Request

from doorsign.auth.exceptions import NotAuthenticatedError
from doorsign.auth.service import Identity, require_admin
from doorsign.core.deps import StoreDep
from doorsign.user.models import User

logger = logging.getLogger(__name__)

SESSION_USER_KEY = "user_id"


def get_current_user(request: Request, store: StoreDep) -> User:
    """Return the logged-in user.

    Raises:
        NotAuthenticatedError: no session, a malformed session, or the
            session's user no longer exists
    """
    raw_id = request.session.get(SESSION_USER_KEY)
    if not raw_id:
        raise NotAuthenticatedError()

    try:
        user_id = uuid.UUID(str(raw_id))
    except ValueError as e:
        request.session.clear()
        raise NotAuthenticatedError() from e

    user = store.get_user(user_id)
    if user is None:
        logger.info("Session refers to missing user %s", user_id)
        request.session.clear()
        raise NotAuthenticatedError()

    return user


CurrentUserDep = Annotated[User, Depends(get_current_user)]


def get_current_identity(user: CurrentUserDep) -> Identity:
    return Identity.from_user(user)


CurrentIdentityDep = Annotated[Identity, Depends(get_current_identity)]


def get_admin_identity(identity: CurrentIdentityDep) -> Identity:
    """Verify the current caller has admin privileges.

    Raises:
        AdminRequiredError: If the caller is not an admin
    """
    require_admin(identity)
    return identity


AdminIdentityDep = Annotated[Identity, Depends(get_admin_identity)]


def require_auth(_identity: CurrentIdentityDep) -> None:
    """Require authentication without injecting the identity.

    Use as a router-level dependency when all routes require auth:
        router = APIRouter(dependencies=[Depends(require_auth)])

    FastAPI caches dependencies, so there's no duplicate lookup overhead.
    """


def require_admin_role(_identity: AdminIdentityDep) -> None:
    """Require admin privileges without injecting the identity.

    Use as a router-level or endpoint-level dependency:
        @router.post("/", dependencies=[Depends(require_admin_role)])
    """
