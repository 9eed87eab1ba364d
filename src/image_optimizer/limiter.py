"""Bounded-concurrency scheduling of conversion work."""

from __future__ import annotations

import threading
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from types import TracebackType
from typing import Self, TypeVar

from image_optimizer.application.options import DEFAULT_POOL_SIZE

T = TypeVar("T")
R = TypeVar("R")


class ConcurrencyLimiter:
    """Run at most ``pool_size`` work units at once.

    Submissions beyond the pool size wait in a FIFO queue and start as soon
    as a worker frees up. With ``pool_size=1`` tasks run one after another
    in submission order. Queued work is never cancelled: leaving the
    context manager blocks until every scheduled unit has finished.

    Parameters
    ----------
    pool_size : int, default=4
        Maximum number of concurrently running work units.
    """

    def __init__(self, pool_size: int = DEFAULT_POOL_SIZE) -> None:
        if pool_size < 1:
            raise ValueError("pool_size must be at least 1.")
        self.pool_size = pool_size
        self._executor = ThreadPoolExecutor(
            max_workers=pool_size, thread_name_prefix="optimize"
        )
        self._lock = threading.Lock()
        self._in_flight = 0
        self._peak_in_flight = 0

    @property
    def in_flight(self) -> int:
        with self._lock:
            return self._in_flight

    @property
    def peak_in_flight(self) -> int:
        """Highest number of work units observed running at the same time."""
        with self._lock:
            return self._peak_in_flight

    def schedule(self, task: T, work: Callable[[T], R]) -> Future[R]:
        """Queue ``work(task)`` and return a future for its result."""
        return self._executor.submit(self._run, task, work)

    def _run(self, task: T, work: Callable[[T], R]) -> R:
        with self._lock:
            self._in_flight += 1
            self._peak_in_flight = max(self._peak_in_flight, self._in_flight)
        try:
            return work(task)
        finally:
            with self._lock:
                self._in_flight -= 1

    def shutdown(self) -> None:
        """Wait for all scheduled work and release the worker threads."""
        self._executor.shutdown(wait=True)

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.shutdown()
