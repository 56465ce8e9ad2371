"""Interactive status updates.

Order of effects for one update: validate, authorize, commit, then the two
best-effort side effects (history row and e-paper push). Anything that fails
before the commit is raised to the caller; anything after it is only logged.
"""

import logging
import uuid
from typing import Annotated

from fastapi import Depends

from doorsign.auth.service import Identity, require_self_or_admin
from doorsign.core.constants import CUSTOM_STATUS_MAX_LENGTH, STATUS_MAX_LENGTH
from doorsign.core.deps import StoreDep
from doorsign.epaper.client import EpaperClient, EpaperDep, PushOutcome
from doorsign.status.exceptions import StatusValidationError
from doorsign.status.models import StatusHistory
from doorsign.store.base import StatusStore
from doorsign.user.exceptions import UserNotFoundError
from doorsign.user.models import User

logger = logging.getLogger(__name__)


def normalize_status(status: str, custom_text: str | None) -> tuple[str, str | None]:
    """Trim and bound-check a status pair; blank custom text becomes None.

    Raises:
        StatusValidationError: empty status or either value too long
    """
    status = (status or "").strip()
    if not status:
        raise StatusValidationError("Status is required")
    if len(status) > STATUS_MAX_LENGTH:
        raise StatusValidationError(
            f"Status must be at most {STATUS_MAX_LENGTH} characters"
        )

    if custom_text is not None:
        custom_text = custom_text.strip() or None
    if custom_text is not None and len(custom_text) > CUSTOM_STATUS_MAX_LENGTH:
        raise StatusValidationError(
            f"Custom status text must be at most {CUSTOM_STATUS_MAX_LENGTH} characters"
        )

    return status, custom_text


class StatusService:
    def __init__(self, store: StatusStore, epaper: EpaperClient) -> None:
        self._store = store
        self._epaper = epaper

    async def update_status(
        self,
        identity: Identity,
        user_id: uuid.UUID,
        status: str,
        custom_text: str | None = None,
    ) -> User:
        """Set a user's status on behalf of the caller.

        Raises:
            StatusValidationError: malformed status or custom text
            UserNotFoundError: target does not exist
            ForbiddenError: caller is neither the target nor an admin
            StorageError: the commit failed; nothing else happened
        """
        status, custom_text = normalize_status(status, custom_text)

        target = self._store.get_user(user_id)
        if target is None:
            raise UserNotFoundError()

        require_self_or_admin(identity, user_id)

        updated = self._store.update_status(user_id, status, custom_text)
        if updated is None:
            # Deleted between lookup and commit
            raise UserNotFoundError()

        logger.info(
            "Status of %s set to %r",
            updated.username,
            status,
            extra={"user_id": user_id, "actor": identity.username},
        )

        self._record_history(updated, changed_by=identity.username)
        await self._push(updated)
        return updated

    def list_history(
        self, user_id: uuid.UUID, limit: int | None = None
    ) -> list[StatusHistory]:
        if self._store.get_user(user_id) is None:
            raise UserNotFoundError()
        return self._store.list_history(user_id, limit=limit)

    def _record_history(self, user: User, *, changed_by: str) -> None:
        try:
            self._store.create_history(
                StatusHistory(
                    user_id=user.id,
                    status=user.current_status,
                    custom_status_text=user.custom_status_text,
                    changed_by=changed_by,
                )
            )
        except Exception:
            logger.exception(
                "Failed to record status history", extra={"user_id": user.id}
            )

    async def _push(self, user: User) -> None:
        result = await self._epaper.push(
            self._epaper.import_endpoint_for(user),
            user.epaper_id,
            user.current_status,
            user.custom_status_text,
        )
        extra = {
            "user_id": user.id,
            "epaper_id": user.epaper_id,
            "outcome": result.outcome.value,
        }
        if result.outcome == PushOutcome.failed:
            logger.warning("E-paper push failed: %s", result.reason, extra=extra)
        elif result.outcome == PushOutcome.skipped:
            logger.debug("E-paper push skipped: %s", result.reason, extra=extra)
        else:
            logger.debug("E-paper push sent", extra=extra)


def get_status_service(store: StoreDep, epaper: EpaperDep) -> StatusService:
    return StatusService(store, epaper)


StatusServiceDep = Annotated[StatusService, Depends(get_status_service)]
