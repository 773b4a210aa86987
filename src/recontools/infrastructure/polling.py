"""Bounded polling and pacing helpers."""

import asyncio
from typing import AsyncIterator, Awaitable, Callable

# Injected delay function; tests pass a no-op
Sleep = Callable[[float], Awaitable[None]]


async def no_sleep(_: float) -> None:
    """Delay function that returns immediately."""
    return None


async def poll_attempts(
    max_polls: int,
    interval: float,
    sleep: Sleep = asyncio.sleep,
) -> AsyncIterator[int]:
    """Yield poll attempt numbers 1..max_polls, waiting ``interval`` before each.

    The iterator is the only cancellation mechanism of a poll loop: once it
    is exhausted the caller treats the budget as spent.
    """
    for attempt in range(1, max_polls + 1):
        await sleep(interval)
        yield attempt
