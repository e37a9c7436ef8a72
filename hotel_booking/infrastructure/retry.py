"""
Retry utilities for transient supplier failures.

Supplier gateways return results instead of raising, so retries are
decided by a predicate on the returned value.
"""

import asyncio
import logging
import random
from typing import Awaitable, Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def backoff_delay(attempt: int, base_delay: float, max_delay: float) -> float:
    """
    Exponential backoff with jitter: base_delay * 2**attempt, capped at
    max_delay, then scaled by a random factor in [0.5, 1.0].
    """
    delay = min(max_delay, base_delay * (2 ** attempt))
    return delay * random.uniform(0.5, 1.0)


async def retry_async(
    func: Callable[[], Awaitable[T]],
    should_retry: Callable[[T], bool],
    max_attempts: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 8.0,
    operation: str = "",
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """
    Call func until it returns a value should_retry rejects or attempts run out.

    Args:
        func: The async call to execute
        should_retry: Predicate on the returned value
        max_attempts: Total number of calls, first one included (default: 3)
        base_delay: Base delay in seconds for exponential backoff (default: 1.0)
        max_delay: Upper bound for a single delay (default: 8.0)
        operation: Name used in log records
        sleep: Injectable sleep, for tests

    Returns:
        The last value returned by func
    """
    attempt = 0
    while True:
        result = await func()
        attempt += 1
        if not should_retry(result):
            return result

        if attempt >= max_attempts:
            logger.error(
                "Supplier call still failing after max retries",
                extra={"operation": operation, "attempts": attempt},
            )
            return result

        delay = backoff_delay(attempt - 1, base_delay, max_delay)
        logger.warning(
            "Transient supplier failure, retrying",
            extra={
                "operation": operation,
                "attempt": attempt,
                "max_attempts": max_attempts,
                "retry_delay": round(delay, 3),
            },
        )
        await sleep(delay)
