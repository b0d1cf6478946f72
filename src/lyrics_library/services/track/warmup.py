"""
Cache Warmer

Bounded background pool for best-effort cache writes. Jobs are submitted from
the request path without waiting; a fixed set of worker tasks drains a bounded
queue, each job runs under its own timeout, and failures are logged and
counted, never re-raised.

Usage:
    warmer = CacheWarmer(workers=2, max_pending=256, task_timeout=5.0)
    await warmer.start()

    warmer.submit("cache.save_track", functools.partial(cache.save_track, track))

    await warmer.stop(drain_timeout=5.0)
"""

import asyncio
import contextlib
from collections.abc import Awaitable, Callable
from dataclasses import asdict, dataclass
from typing import Any

from lyrics_library.logging import get_logger

logger = get_logger(__name__)

WarmJob = Callable[[], Awaitable[Any]]


@dataclass
class WarmerStats:
    """Counters describing the warmer's lifetime activity."""

    submitted: int = 0
    completed: int = 0
    failed: int = 0
    timed_out: int = 0
    dropped: int = 0


class CacheWarmer:
    """Bounded worker pool executing fire-and-forget cache writes."""

    def __init__(self, workers: int = 2, max_pending: int = 256, task_timeout: float | None = 5.0):
        if workers < 1:
            raise ValueError("workers must be at least 1")
        if max_pending < 1:
            raise ValueError("max_pending must be at least 1")

        self.workers = workers
        self.max_pending = max_pending
        self.task_timeout = task_timeout

        self._queue: asyncio.Queue[tuple[str, WarmJob]] = asyncio.Queue(maxsize=max_pending)
        self._tasks: list[asyncio.Task[None]] = []
        self._accepting = False
        self._stats = WarmerStats()

    @property
    def running(self) -> bool:
        return self._accepting

    async def start(self) -> None:
        """Spawn the worker tasks. Calling it on a running warmer is a no-op."""
        if self._accepting:
            return

        self._tasks = [
            asyncio.create_task(self._worker(index), name=f"cache-warmer-{index}")
            for index in range(self.workers)
        ]
        self._accepting = True
        logger.info(
            "cache_warmer_started",
            workers=self.workers,
            max_pending=self.max_pending,
            task_timeout=self.task_timeout,
        )

    def submit(self, name: str, job: WarmJob) -> bool:
        """
        Queue a cache write without waiting for it.

        Returns:
            True if the job was queued, False if it was dropped because the
            warmer is stopped or the queue is full.
        """
        if not self._accepting:
            self._stats.dropped += 1
            logger.warning("cache_warm_dropped", job=name, reason="not_running")
            return False

        try:
            self._queue.put_nowait((name, job))
        except asyncio.QueueFull:
            self._stats.dropped += 1
            logger.warning("cache_warm_dropped", job=name, reason="queue_full")
            return False

        self._stats.submitted += 1
        return True

    async def _worker(self, index: int) -> None:
        while True:
            name, job = await self._queue.get()
            try:
                await self._run(name, job)
            finally:
                self._queue.task_done()

    async def _run(self, name: str, job: WarmJob) -> None:
        try:
            await asyncio.wait_for(job(), timeout=self.task_timeout)
        except TimeoutError:
            self._stats.timed_out += 1
            logger.warning("cache_warm_timeout", job=name, timeout=self.task_timeout)
        except Exception as exc:
            self._stats.failed += 1
            logger.warning("cache_warm_failed", job=name, error=str(exc), exc_info=True)
        else:
            self._stats.completed += 1

    async def join(self) -> None:
        """Wait until every queued job has been processed."""
        await self._queue.join()

    async def stop(self, drain_timeout: float | None = 5.0) -> None:
        """
        Stop accepting work, drain the queue, then cancel the workers.

        Args:
            drain_timeout: Seconds to wait for queued jobs; jobs still pending
                afterwards are dropped
        """
        if not self._tasks:
            self._accepting = False
            return

        self._accepting = False
        try:
            await asyncio.wait_for(self._queue.join(), timeout=drain_timeout)
        except TimeoutError:
            logger.warning("cache_warmer_drain_timeout", pending=self._queue.qsize())

        for task in self._tasks:
            task.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)
        self._tasks = []

        abandoned = 0
        while not self._queue.empty():
            with contextlib.suppress(asyncio.QueueEmpty):
                self._queue.get_nowait()
                self._queue.task_done()
                abandoned += 1
        self._stats.dropped += abandoned

        logger.info("cache_warmer_stopped", abandoned=abandoned, **asdict(self._stats))

    def stats(self) -> dict[str, int]:
        return {**asdict(self._stats), "pending": self._queue.qsize()}
