"""User provisioning and profile management.

Holds the bootstrap rule: the first account ever created is an admin,
whatever role the caller asked for, so the system can never be provisioned
into a state with no administrator.
"""

import logging
import re
import uuid
from typing import Annotated, Any

from fastapi import Depends

from doorsign.auth.service import Identity
from doorsign.core.deps import StoreDep
from doorsign.core.security import hash_password
from doorsign.core.settings import Settings
from doorsign.store.base import StatusStore
from doorsign.user.exceptions import (
    SelfDeletionError,
    SelfDemotionError,
    UserNotFoundError,
)
from doorsign.user.models import User, UserRole
from doorsign.user.schemas import UserCreate, UserUpdate

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, store: StatusStore) -> None:
        self._store = store

    def list_users(self) -> list[User]:
        return self._store.list_users()

    def get_user(self, user_id: uuid.UUID) -> User:
        user = self._store.get_user(user_id)
        if user is None:
            raise UserNotFoundError()
        return user

    def create_user(self, data: UserCreate) -> User:
        """Provision an account.

        Raises:
            UsernameExistsError: the username is taken
        """
        role = data.role
        if self._store.count_users() == 0:
            if role != UserRole.admin:
                logger.info("First account %r forced to admin", data.username)
            role = UserRole.admin

        fields = data.model_dump(exclude={"password", "role"})
        user = User(
            **fields,
            role=role,
            password_hash=hash_password(data.password),
        )
        created = self._store.create_user(user)
        logger.info(
            "Created user %s (%s)",
            created.username,
            created.role.value,
            extra={"user_id": created.id},
        )
        return created

    def update_user(self, actor: Identity, user_id: uuid.UUID, data: UserUpdate) -> User:
        """Apply an admin profile edit.

        Raises:
            UserNotFoundError: target does not exist
            SelfDemotionError: an admin removing their own admin role
            UsernameExistsError: the new username is taken
        """
        fields: dict[str, Any] = data.model_dump(exclude_unset=True)
        # Required columns cannot be cleared
        for key in ("username", "password", "role"):
            if fields.get(key, ...) is None:
                del fields[key]

        if fields.get("role") == UserRole.regular and actor.id == user_id:
            raise SelfDemotionError()

        password = fields.pop("password", None)
        if password is not None:
            fields["password_hash"] = hash_password(password)

        user = self._store.update_user(user_id, fields)
        if user is None:
            raise UserNotFoundError()
        return user

    def delete_user(self, actor: Identity, user_id: uuid.UUID) -> None:
        """Delete a user and, through the store, their history.

        Raises:
            SelfDeletionError: the caller targets their own account
            UserNotFoundError: target does not exist
        """
        if actor.id == user_id:
            raise SelfDeletionError()
        if not self._store.delete_user(user_id):
            raise UserNotFoundError()
        logger.info("Deleted user", extra={"user_id": user_id, "actor": actor.username})


def bootstrap_admin(store: StatusStore, settings: Settings) -> User | None:
    """Create the default admin on an empty store when credentials are configured."""
    if not settings.admin_username or not settings.admin_password:
        return None
    if store.count_users() > 0:
        return None

    logger.info("No users found; creating default admin %r", settings.admin_username)
    return UserService(store).create_user(
        UserCreate(
            username=settings.admin_username,
            password=settings.admin_password,
            role=UserRole.admin,
            email=settings.admin_email,
            first_name="Admin",
            last_name="User",
            epaper_id="admin_" + re.sub(r"[^A-Za-z0-9_.\-]", "_", settings.admin_username),
        )
    )


def get_user_service(store: StoreDep) -> UserService:
    return UserService(store)


UserServiceDep = Annotated[UserService, Depends(get_user_service)]
