"""Bulk reconciliation of local statuses against the e-paper provider.

A run pulls each distinct export endpoint once (bounded concurrency), then
walks the participating users one by one. A user whose provider value is set
and differs from what the sign should show (custom text, else the status)
gets that value committed locally with the custom text cleared. Failures are isolated per user; only run-level
errors (listing users, for example) mark the run as failed. Every run,
successful or not, leaves exactly one ledger row.
"""

import asyncio
import logging
import uuid
from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime
from typing import Annotated

from fastapi import Depends

from doorsign.core.constants import SYNC_ACTOR
from doorsign.core.deps import SettingsDep, StoreDep
from doorsign.core.settings import Settings
from doorsign.epaper.client import (
    EpaperClient,
    EpaperDep,
    EpaperEndpoint,
    get_epaper_client,
    status_key,
)
from doorsign.status.models import StatusHistory
from doorsign.store.base import StatusStore
from doorsign.sync.models import SyncStatus
from doorsign.user.models import User

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SyncResult:
    success: bool
    updated_count: int
    error: str | None
    synced_at: datetime


@dataclass(frozen=True)
class VerificationEntry:
    """Local versus provider status for one participating user."""

    user_id: uuid.UUID
    username: str
    epaper_id: str
    local_status: str
    displayed_status: str
    external_status: str | None

    @property
    def in_sync(self) -> bool:
        return self.external_status == self.displayed_status


class SyncService:
    def __init__(
        self,
        store: StatusStore,
        epaper: EpaperClient,
        *,
        sync_back_enabled: bool = False,
        concurrency: int = 5,
    ) -> None:
        self._store = store
        self._epaper = epaper
        self._sync_back_enabled = sync_back_enabled
        self._semaphore = asyncio.Semaphore(max(concurrency, 1))

    async def run(self) -> SyncResult:
        """Reconcile every participating user and record the run."""
        if not self._sync_back_enabled:
            logger.debug("Sync-back disabled; recording no-op run")
            return self._record(success=True, updated_count=0)

        try:
            groups = self._participants()
            snapshots = await self._pull_all(groups)
        except Exception as e:
            logger.exception("Sync run failed")
            return self._record(success=False, updated_count=0, error=_describe(e))

        updated = 0
        for endpoint, users in groups.items():
            snapshot = snapshots[endpoint]
            for user in users:
                try:
                    if self._reconcile(user, snapshot):
                        updated += 1
                except Exception:
                    logger.exception(
                        "Failed to sync user %s",
                        user.username,
                        extra={"user_id": user.id, "epaper_id": user.epaper_id},
                    )

        logger.info("Sync run finished", extra={"updated_count": updated})
        return self._record(success=True, updated_count=updated)

    async def verify(self) -> list[VerificationEntry]:
        """Compare local and provider statuses without committing anything."""
        groups = self._participants()
        snapshots = await self._pull_all(groups)

        entries: list[VerificationEntry] = []
        for endpoint, users in groups.items():
            snapshot = snapshots[endpoint]
            for user in users:
                entries.append(
                    VerificationEntry(
                        user_id=user.id,
                        username=user.username,
                        epaper_id=user.epaper_id or "",
                        local_status=user.current_status,
                        displayed_status=_displayed(user),
                        external_status=snapshot.get(status_key(user.epaper_id or "")),
                    )
                )
        return entries

    def latest(self) -> SyncStatus | None:
        return self._store.get_latest_sync()

    def _participants(self) -> dict[EpaperEndpoint, list[User]]:
        groups: dict[EpaperEndpoint, list[User]] = defaultdict(list)
        for user in self._store.list_users():
            if not user.epaper_id:
                continue
            endpoint = self._epaper.export_endpoint_for(user)
            if endpoint is None:
                continue
            groups[endpoint].append(user)
        return dict(groups)

    async def _pull_all(
        self, groups: dict[EpaperEndpoint, list[User]]
    ) -> dict[EpaperEndpoint, dict[str, str]]:
        async def pull(endpoint: EpaperEndpoint) -> dict[str, str]:
            async with self._semaphore:
                return await self._epaper.pull(endpoint)

        endpoints = list(groups)
        results = await asyncio.gather(*(pull(endpoint) for endpoint in endpoints))
        return dict(zip(endpoints, results, strict=True))

    def _reconcile(self, user: User, snapshot: dict[str, str]) -> bool:
        external = (snapshot.get(status_key(user.epaper_id or "")) or "").strip()
        if not external or external == _displayed(user):
            return False

        updated = self._store.update_status(user.id, external, None)
        if updated is None:
            logger.debug("User %s vanished during sync", user.id)
            return False

        try:
            self._store.create_history(
                StatusHistory(
                    user_id=user.id,
                    status=external,
                    custom_status_text=None,
                    changed_by=SYNC_ACTOR,
                )
            )
        except Exception:
            logger.exception(
                "Failed to record sync history", extra={"user_id": user.id}
            )

        logger.info(
            "Synced %s: %r -> %r",
            user.username,
            user.current_status,
            external,
            extra={"user_id": user.id, "epaper_id": user.epaper_id},
        )
        return True

    def _record(
        self, *, success: bool, updated_count: int, error: str | None = None
    ) -> SyncResult:
        entry = SyncStatus(
            success=success, updated_count=updated_count, error_message=error
        )
        try:
            entry = self._store.record_sync(entry)
        except Exception:
            logger.exception("Failed to record sync run in the ledger")

        return SyncResult(
            success=success,
            updated_count=updated_count,
            error=error,
            synced_at=entry.synced_at,
        )


def _displayed(user: User) -> str:
    """What the sign shows for a user: custom text wins over the status."""
    return user.custom_status_text or user.current_status


def _describe(error: Exception) -> str:
    return getattr(error, "message", None) or str(error) or type(error).__name__


def build_sync_service(store: StatusStore, settings: Settings) -> SyncService:
    """Construct the service outside a request (scheduler, scripts)."""
    return SyncService(
        store,
        get_epaper_client(settings),
        sync_back_enabled=settings.sync_back_enabled,
        concurrency=settings.sync_concurrency,
    )


def get_sync_service(
    store: StoreDep, epaper: EpaperDep, settings: SettingsDep
) -> SyncService:
    return SyncService(
        store,
        epaper,
        sync_back_enabled=settings.sync_back_enabled,
        concurrency=settings.sync_concurrency,
    )


SyncServiceDep = Annotated[SyncService, Depends(get_sync_service)]
