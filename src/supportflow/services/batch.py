"""
Batch Processing

Runs items one at a time with per-item failure isolation: a failing item is
recorded and the batch moves on.
"""

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

import structlog

logger = structlog.get_logger(__name__)

T = TypeVar("T")
R = TypeVar("R")


async def process_isolated(
    items: Sequence[tuple[str, T]],
    handler: Callable[[str, T], Awaitable[R]],
    pause_seconds: float = 0.0,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> tuple[list[R], list[tuple[str, str]]]:
    """
    Apply ``handler`` to each ``(item_id, item)`` pair sequentially.

    Returns ``(successes, failures)``; successes keep input order and failures
    are ``(item_id, error message)`` pairs in input order. A fixed pause
    separates consecutive items. Cancellation is not isolated.
    """
    successes: list[R] = []
    failures: list[tuple[str, str]] = []

    for index, (item_id, item) in enumerate(items):
        if index and pause_seconds:
            await sleep(pause_seconds)

        try:
            successes.append(await handler(item_id, item))
        except Exception as e:
            failures.append((item_id, str(e)))
            logger.error("Batch item failed", item_id=item_id, index=index, error=str(e))

    if failures:
        logger.warning(
            "Batch completed with errors",
            total=len(items),
            failed=len(failures),
            failed_ids=[item_id for item_id, _ in failures],
        )

    return successes, failures
