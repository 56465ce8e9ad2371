"""Retry utilities for async operations.

Provides exponential backoff retry logic for transient provider failures.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Default retry configuration
DEFAULT_ATTEMPTS = 2
DEFAULT_BASE_DELAY = 0.2  # seconds


def _calculate_delay(attempt: int, base_delay: float = DEFAULT_BASE_DELAY) -> float:
    """Calculate exponential backoff delay for a given attempt.

    Args:
        attempt: Zero-indexed attempt number
        base_delay: Base delay in seconds

    Returns:
        Delay in seconds (base_delay * 2^attempt)
    """
    return base_delay * (2**attempt)


async def with_retry(
    fn: Callable[[], Awaitable[T]],
    attempts: int = DEFAULT_ATTEMPTS,
    exceptions: tuple[type[Exception], ...] = (Exception,),
    base_delay: float = DEFAULT_BASE_DELAY,
) -> T:
    """Execute async function with exponential backoff retry.

    Args:
        fn: Async function to execute (typically a lambda or partial)
        attempts: Maximum number of attempts (at least one is always made)
        exceptions: Tuple of exception types to catch and retry
        base_delay: Base delay in seconds for exponential backoff

    Returns:
        Result from successful function execution

    Raises:
        The last exception if all attempts fail

    Example:
        response = await with_retry(
            lambda: client.get(url, params=params),
            exceptions=(httpx.TransportError,),
        )
    """
    attempts = max(attempts, 1)

    for attempt in range(attempts):
        try:
            return await fn()
        except exceptions as e:
            if attempt == attempts - 1:
                raise
            delay = _calculate_delay(attempt, base_delay)
            logger.debug(
                "Attempt %d/%d failed (%s), retrying in %.2fs",
                attempt + 1,
                attempts,
                type(e).__name__,
                delay,
            )
            await asyncio.sleep(delay)

    raise AssertionError("unreachable")
