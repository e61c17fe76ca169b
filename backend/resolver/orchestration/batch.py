"""Fixed-size batching with a pause between batches."""

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

T = TypeVar("T")
R = TypeVar("R")

DEFAULT_BATCH_SIZE = 5
DEFAULT_BATCH_DELAY_SECONDS = 0.2


async def resolve_in_batches(
    items: Sequence[T],
    resolve: Callable[[T], Awaitable[R]],
    batch_size: int = DEFAULT_BATCH_SIZE,
    delay_seconds: float = DEFAULT_BATCH_DELAY_SECONDS,
    sleep_fn: Callable[[float], Awaitable[None]] | None = None,
) -> list[R]:
    """Run ``resolve`` over ``items`` in concurrent batches.

    Items inside a batch run concurrently; batches run one after another with
    ``delay_seconds`` between them (none after the last). Results keep input
    order.

    Args:
        items: Inputs to resolve
        resolve: Async function applied to each item
        batch_size: Items per batch (must be positive)
        delay_seconds: Pause between batches
        sleep_fn: Injectable sleep function (default: asyncio.sleep)

    Raises:
        ValueError: If batch_size is not positive
    """
    if batch_size <= 0:
        raise ValueError("batch_size must be positive")

    sleep = sleep_fn or asyncio.sleep
    results: list[R] = []
    for start in range(0, len(items), batch_size):
        batch = items[start : start + batch_size]
        results.extend(await asyncio.gather(*(resolve(item) for item in batch)))
        if start + batch_size < len(items):
            await sleep(delay_seconds)
    return results
