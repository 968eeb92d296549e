"""Bounded concurrent fan-out over vault notes.

Every note read during context assembly is independent, so reads are
issued on a thread pool. Results are only handed back once every read has
completed, failed, or been abandoned: callers never observe a partial scan.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Sequence
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from typing import TypeVar

from ..domain.exceptions import OperationCancelledError

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

POLL_INTERVAL = 0.05


def fan_out(
    fn: Callable[[T], R],
    items: Sequence[T],
    *,
    max_workers: int = 16,
    read_timeout: float | None = None,
    cancel_event: threading.Event | None = None,
) -> list[R | None]:
    """Apply ``fn`` to every item concurrently and join on all of them.

    Args:
        fn: Work for one item. Exceptions it raises propagate to the caller.
        items: Items to process.
        max_workers: Upper bound on concurrent calls.
        read_timeout: Seconds a single call may run before it is abandoned.
            Abandoned items yield ``None``. ``None`` disables the timeout.
        cancel_event: When set, pending work is cancelled and
            ``OperationCancelledError`` is raised.

    Returns:
        One result per item, in item order.
    """
    results: list[R | None] = [None] * len(items)
    if not items:
        return results

    started: dict[int, float] = {}
    pools: list[ThreadPoolExecutor] = []

    def run(index: int, item: T) -> R:
        started[index] = time.monotonic()
        return fn(item)

    def submit(indexes: Sequence[int]) -> dict[Future[R], int]:
        pool = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="vault-scan")
        pools.append(pool)
        return {pool.submit(run, index, items[index]): index for index in indexes}

    try:
        pending = submit(range(len(items)))
        while pending:
            if cancel_event is not None and cancel_event.is_set():
                raise OperationCancelledError(
                    "Vault scan cancelled",
                    context={"pending": len(pending), "total": len(items)},
                )

            done, _ = wait(pending, timeout=POLL_INTERVAL, return_when=FIRST_COMPLETED)
            for future in done:
                results[pending.pop(future)] = future.result()

            if read_timeout is not None:
                pending = _abandon_overdue(pending, started, read_timeout, submit)
    finally:
        # Abandoned reads finish in the background and close their own handles.
        for pool in pools:
            pool.shutdown(wait=False, cancel_futures=True)

    return results


def _abandon_overdue(
    pending: dict[Future[R], int],
    started: dict[int, float],
    read_timeout: float,
    submit: Callable[[Sequence[int]], dict[Future[R], int]],
) -> dict[Future[R], int]:
    """Drop overdue items and move queued ones onto fresh workers.

    An abandoned call keeps its worker thread, so items still queued behind
    it are resubmitted to a new pool.
    """
    now = time.monotonic()
    overdue = [
        future
        for future, index in pending.items()
        if index in started and now - started[index] > read_timeout and not future.done()
    ]
    if not overdue:
        return pending

    for future in overdue:
        index = pending.pop(future)
        future.cancel()
        logger.warning("Abandoned read of item %d after %.2fs", index, read_timeout)

    queued = [index for future, index in pending.items() if future.cancel()]
    if not queued:
        return pending

    remaining = {future: index for future, index in pending.items() if not future.cancelled()}
    remaining.update(submit(queued))
    return remaining
