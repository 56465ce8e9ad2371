"""Tests for doorsign/sync/scheduler.py - periodic sync job."""

from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from doorsign.sync.scheduler import (
    SYNC_JOB_ID,
    create_scheduler,
    start_scheduler,
    stop_scheduler,
)
from doorsign.sync.service import SyncResult


def _factory(result=None, error=None):
    service = MagicMock()
    service.run = AsyncMock(
        return_value=result
        or SyncResult(success=True, updated_count=0, error=None, synced_at=datetime.now()),
        side_effect=error,
    )
    return service, lambda: service


def test_create_scheduler_registers_interval_job():
    _, factory = _factory()

    scheduler = create_scheduler(factory, 5)

    job = scheduler.get_job(SYNC_JOB_ID)
    assert job is not None
    assert job.trigger.interval.total_seconds() == 300


def test_zero_interval_disables():
    _, factory = _factory()

    assert start_scheduler(factory, 0) is None
    stop_scheduler(None)


@pytest.mark.asyncio
async def test_start_and_stop():
    _, factory = _factory()

    scheduler = start_scheduler(factory, 5)

    assert scheduler.running
    stop_scheduler(scheduler)
    assert not scheduler.running


@pytest.mark.asyncio
async def test_job_runs_sync():
    service, factory = _factory()
    scheduler = create_scheduler(factory, 5)

    await scheduler.get_job(SYNC_JOB_ID).func()

    service.run.assert_awaited_once()


@pytest.mark.asyncio
async def test_job_survives_crash():
    service, factory = _factory(error=RuntimeError("boom"))
    scheduler = create_scheduler(factory, 5)

    await scheduler.get_job(SYNC_JOB_ID).func()

    service.run.assert_awaited_once()
