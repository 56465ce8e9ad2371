"""Tests for doorsign/core/retry.py - backoff for provider calls."""

import httpx
import pytest
from hypothesis import given
from hypothesis import settings as hypothesis_settings
from hypothesis import strategies as st

from doorsign.core.retry import DEFAULT_ATTEMPTS, _calculate_delay, with_retry


@hypothesis_settings(max_examples=50)
@given(
    attempt=st.integers(min_value=0, max_value=10),
    base_delay=st.floats(min_value=0.01, max_value=1.0),
)
def test_exponential_backoff_property(attempt, base_delay):
    """Property: delay = base_delay * 2^attempt."""
    assert abs(_calculate_delay(attempt, base_delay) - base_delay * 2**attempt) < 1e-9


def _flaky(failures: int, error: Exception):
    calls = 0

    async def fn():
        nonlocal calls
        calls += 1
        if calls <= failures:
            raise error
        return calls

    return fn


@pytest.mark.asyncio
async def test_recovers_from_transient_error():
    fn = _flaky(1, httpx.ConnectError("refused"))

    result = await with_retry(fn, exceptions=(httpx.TransportError,), base_delay=0.01)

    assert result == 2


@pytest.mark.asyncio
async def test_gives_up_after_attempts():
    calls = 0

    async def always_fail():
        nonlocal calls
        calls += 1
        raise httpx.ReadTimeout(f"timeout {calls}")

    with pytest.raises(httpx.ReadTimeout, match=f"timeout {DEFAULT_ATTEMPTS}"):
        await with_retry(always_fail, exceptions=(httpx.TransportError,), base_delay=0.01)

    assert calls == DEFAULT_ATTEMPTS


@pytest.mark.asyncio
async def test_unlisted_errors_are_not_retried():
    fn = _flaky(1, ValueError("bad json"))

    with pytest.raises(ValueError):
        await with_retry(fn, attempts=3, exceptions=(httpx.TransportError,))


@pytest.mark.asyncio
async def test_at_least_one_attempt():
    fn = _flaky(0, ValueError())

    assert await with_retry(fn, attempts=0) == 1
