"""Identity and access rules.

The authorization predicates here are the only place role checks live.
Every status mutation path goes through require_self_or_admin, whatever the
calling UI already allows.
"""

import logging
import uuid
from dataclasses import dataclass

from doorsign.auth.exceptions import (
    AdminRequiredError,
    ForbiddenError,
    InvalidCredentialsError,
)
from doorsign.core.security import verify_password_or_dummy
from doorsign.store.base import StatusStore
from doorsign.user.models import User, UserRole

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    """The authenticated caller as seen by authorization checks."""

    id: uuid.UUID
    username: str
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.admin

    @classmethod
    def from_user(cls, user: User) -> "Identity":
        return cls(id=user.id, username=user.username, role=user.role)


def authenticate(store: StatusStore, username: str, password: str) -> Identity:
    """Verify a username/password pair.

    Raises:
        InvalidCredentialsError: unknown username or wrong password. Both
            cases run one hash verification so they cannot be told apart
            by timing.
    """
    user = store.get_user_by_username(username)
    hashed = user.password_hash if user else None

    if not verify_password_or_dummy(password, hashed) or user is None:
        logger.info("Failed login attempt for %r", username)
        raise InvalidCredentialsError()

    return Identity.from_user(user)


def require_admin(identity: Identity) -> None:
    if not identity.is_admin:
        raise AdminRequiredError()


def require_self_or_admin(identity: Identity, target_user_id: uuid.UUID) -> None:
    """Allow admins, or the owner of the target record."""
    if identity.is_admin or identity.id == target_user_id:
        return
    raise ForbiddenError()
