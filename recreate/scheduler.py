"""Fixed-size thread pool with fail-fast semantics."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from typing import TypeVar

T = TypeVar("T")
R = TypeVar("R")

DEFAULT_WORKERS = 20

logger = logging.getLogger(__name__)


class WorkScheduler:
    """Runs independent tasks on a pool of *workers* threads.

    Results come back in input order regardless of completion order. The first
    failing task aborts the batch: tasks that have not started are cancelled
    and the exception is re-raised to the caller. With ``workers == 1`` tasks
    run inline, one after another.
    """

    def __init__(self, workers: int = DEFAULT_WORKERS) -> None:
        if workers < 1:
            msg = f"workers must be >= 1, got {workers}"
            raise ValueError(msg)
        self.workers = workers

    def __repr__(self) -> str:
        return f"WorkScheduler(workers={self.workers})"

    def map(self, fn: Callable[[T], R], items: Iterable[T]) -> list[R]:
        items = list(items)
        if self.workers == 1 or len(items) <= 1:
            return [fn(item) for item in items]

        with ThreadPoolExecutor(max_workers=self.workers) as ex:
            futures = [ex.submit(fn, item) for item in items]
            done, pending = wait(futures, return_when=FIRST_EXCEPTION)
            failed = next((f for f in futures if f in done and f.exception()), None)
            if failed is not None:
                for fut in pending:
                    fut.cancel()
                logger.debug(
                    "Task failed, cancelled %d pending task(s)", len(pending),
                )
                raise failed.exception()
            return [f.result() for f in futures]
