"""
Small asyncio helpers: racing an operation against a timer and bounded fan-out.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Iterable, List, Tuple, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


def _consume_result(task: "asyncio.Task[Any]") -> None:
    # Abandoned tasks must not surface as "exception was never retrieved".
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.debug("Abandoned operation finished with error: %r", exc)


async def first_completed(operation: Awaitable[T], timeout_sec: float) -> Tuple[bool, T | None]:
    """
    Wait for whichever settles first: ``operation`` or a timer of ``timeout_sec``.

    Returns ``(True, result)`` when the operation wins and ``(False, None)``
    when the timer wins. Errors raised by the operation propagate. A losing
    operation is cancelled; work already handed to a thread keeps running and
    its result is discarded.
    """
    task = asyncio.ensure_future(operation)
    timer = asyncio.ensure_future(asyncio.sleep(timeout_sec))
    try:
        done, _ = await asyncio.wait({task, timer}, return_when=asyncio.FIRST_COMPLETED)
    except BaseException:
        task.cancel()
        timer.cancel()
        raise

    if task in done:
        timer.cancel()
        return True, task.result()

    task.add_done_callback(_consume_result)
    task.cancel()
    return False, None


async def gather_bounded(func: Callable[[T], Awaitable[R]], items: Iterable[T], limit: int) -> List[R]:
    """
    Run ``func`` over ``items`` concurrently with at most ``limit`` in flight.

    Results keep the order of ``items``. The first failure propagates.
    """
    if limit <= 0:
        raise ValueError(f"limit must be positive, got {limit}")
    semaphore = asyncio.Semaphore(limit)

    async def _run(item: T) -> R:
        async with semaphore:
            return await func(item)

    return list(await asyncio.gather(*(_run(item) for item in items)))


__all__ = ["first_completed", "gather_bounded"]
