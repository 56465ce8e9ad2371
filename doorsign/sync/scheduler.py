"""Periodic reconciliation job (APScheduler)."""

import logging
from collections.abc import Callable

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from doorsign.sync.service import SyncService

logger = logging.getLogger(__name__)

SYNC_JOB_ID = "epaper_sync"


def create_scheduler(
    sync_service_factory: Callable[[], SyncService], interval_minutes: int
) -> AsyncIOScheduler:
    """Build a scheduler running one sync every ``interval_minutes``."""

    async def sync_job() -> None:
        logger.debug("Running periodic e-paper sync")
        try:
            result = await sync_service_factory().run()
        except Exception:
            logger.exception("Periodic sync job crashed")
            return
        if not result.success:
            logger.warning("Periodic sync failed: %s", result.error)

    scheduler = AsyncIOScheduler()
    scheduler.add_job(
        sync_job,
        trigger=IntervalTrigger(minutes=interval_minutes),
        id=SYNC_JOB_ID,
        name=f"E-paper sync (every {interval_minutes} min)",
        replace_existing=True,
        max_instances=1,
        coalesce=True,
    )
    return scheduler


def start_scheduler(
    sync_service_factory: Callable[[], SyncService], interval_minutes: int
) -> AsyncIOScheduler | None:
    """Start periodic sync; an interval of 0 disables it."""
    if interval_minutes <= 0:
        logger.info("Periodic sync disabled (interval is 0)")
        return None

    scheduler = create_scheduler(sync_service_factory, interval_minutes)
    scheduler.start()
    logger.info("Periodic sync scheduled every %d minute(s)", interval_minutes)
    return scheduler


def stop_scheduler(scheduler: AsyncIOScheduler | None) -> None:
    if scheduler is not None and scheduler.running:
        scheduler.shutdown(wait=False)
