"""Bounded concurrency for per-page crawl work.

Detail pages are independent of each other, so the crawl orchestrator fans
them out and lets a semaphore cap how many are in flight at once.  The
politeness delay between network requests is the page fetcher's concern,
not this module's.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, TypeVar

_T = TypeVar("_T")

DEFAULT_MAX_WORKERS = 4


async def throttled_gather(
    coros: list[Awaitable[_T]],
    semaphore: asyncio.Semaphore | None = None,
    return_exceptions: bool = True,
) -> list[_T | BaseException]:
    """Run awaitables concurrently with semaphore throttling.

    Each coroutine is wrapped so it acquires the semaphore before executing
    and releases it afterward.

    Parameters
    ----------
    coros:
        Awaitable objects to execute concurrently.
    semaphore:
        Semaphore for concurrency control.  Defaults to a fresh
        ``asyncio.Semaphore(DEFAULT_MAX_WORKERS)``.
    return_exceptions:
        If ``True``, exceptions are returned in the results list rather
        than being raised.  Mirrors ``asyncio.gather`` semantics.

    Returns
    -------
    list[_T | BaseException]
        Results in the same order as the input coroutines.
    """
    if semaphore is None:
        semaphore = asyncio.Semaphore(DEFAULT_MAX_WORKERS)

    async def _wrapped(coro: Awaitable[_T]) -> _T:
        async with semaphore:
            return await coro

    tasks = [_wrapped(c) for c in coros]
    return await asyncio.gather(*tasks, return_exceptions=return_exceptions)
