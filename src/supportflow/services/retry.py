"""
Retry with exponential backoff for async operations.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

import structlog

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class RetryExhausted(Exception):
    """Every attempt failed; ``last_error`` is the final failure."""

    def __init__(self, attempts: int, last_error: Exception):
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(f"Gave up after {attempts} attempts: {last_error}")


def exponential_delay(base_seconds: float) -> Callable[[int], float]:
    """Delay after failed attempt n is ``base_seconds * 2 ** (n - 1)``."""

    def delay(attempt: int) -> float:
        return base_seconds * 2 ** (attempt - 1)

    return delay


async def retry_with_backoff(
    operation: Callable[[int], Awaitable[T]],
    attempts: int,
    delay: Callable[[int], float],
    give_up_on: tuple[type[Exception], ...] = (),
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    **log_context,
) -> T:
    """
    Run ``operation(n)`` for n = 1..attempts until one call succeeds.

    Exceptions listed in ``give_up_on`` propagate immediately. Cancellation is
    never caught, so an outer cancel interrupts both attempts and sleeps.

    Raises:
        RetryExhausted: when the last attempt fails
    """
    if attempts < 1:
        raise ValueError("attempts must be at least 1")

    for attempt in range(1, attempts + 1):
        try:
            return await operation(attempt)
        except give_up_on:
            raise
        except Exception as e:
            logger.warning(
                "Attempt failed",
                attempt=attempt,
                attempts=attempts,
                error=str(e),
                error_type=type(e).__name__,
                **log_context,
            )
            if attempt == attempts:
                raise RetryExhausted(attempts, e) from e

            wait = delay(attempt)
            logger.info("Retrying", retry_in_seconds=wait, next_attempt=attempt + 1, **log_context)
            await sleep(wait)

    raise AssertionError("unreachable")
