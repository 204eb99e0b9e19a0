"""Long-running loops that periodically drain a task queue."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from indices.sink import IndexSink, create_index_sink

from .config import IndexingSettings, get_indexing_settings
from .handlers import ImagesIndexingHandler, ImagesRemovalHandler, QueueHandler


logger = logging.getLogger(__name__)


def short_message(exc: BaseException) -> str:
    """One-line description of ``exc`` and its direct cause."""
    message = f"{type(exc).__name__}: {exc}"
    inner = exc.__cause__ or exc.__context__
    if inner is not None:
        message = f"{message} <- {type(inner).__name__}: {inner}"
    return message


class IndexingWorker:
    """Runs ``handler`` once per cycle until stopped.

    Failures in ``prepare`` or in a cycle are logged and the loop carries on;
    this is the only place queue errors are caught. ``stop`` is cooperative:
    a cycle already running finishes before the loop exits, while the pause
    between cycles ends immediately.
    """

    def __init__(
        self,
        name: str,
        handler: QueueHandler,
        *,
        bucket_size: int,
        interval: float,
        start_delay: float = 0.0,
    ) -> None:
        if bucket_size <= 0:
            raise ValueError("bucket_size must be positive")
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.name = name
        self.handler = handler
        self.bucket_size = bucket_size
        self.interval = interval
        self.start_delay = start_delay
        self.cycles = 0
        self.failures = 0
        self._stop_event = asyncio.Event()

    def stop(self) -> None:
        if not self._stop_event.is_set():
            logger.info("Signal: %s stop requested", self.name)
        self._stop_event.set()

    @property
    def stopping(self) -> bool:
        return self._stop_event.is_set()

    async def _sleep(self, seconds: float) -> bool:
        """Wait up to ``seconds``; ``True`` if the stop signal arrived."""
        if seconds <= 0:
            return self._stop_event.is_set()
        try:
            await asyncio.wait_for(self._stop_event.wait(), timeout=seconds)
        except asyncio.TimeoutError:
            return False
        return True

    async def run(self) -> None:
        logger.info("%s service started", self.name)
        try:
            if await self._sleep(self.start_delay):
                return

            try:
                await asyncio.to_thread(self.handler.prepare)
            except Exception as exc:
                logger.error("%s prepare failed: %s", self.name, short_message(exc))

            while not self._stop_event.is_set():
                await self.run_cycle()
                if await self._sleep(self.interval):
                    break
        finally:
            logger.info("%s service stopped", self.name)

    async def run_cycle(self) -> Optional[int]:
        """Run one drain; returns the number of processed tasks or ``None`` on failure."""
        self.cycles += 1
        try:
            processed = await asyncio.to_thread(self.handler.handle, self.bucket_size)
        except Exception as exc:
            self.failures += 1
            logger.error("%s cycle failed: %s", self.name, short_message(exc))
            logger.debug("%s cycle traceback", self.name, exc_info=True)
            return None
        if processed:
            logger.info("event=cycle_completed worker=%s processed=%d", self.name, processed)
        return processed


def build_workers(
    sink: Optional[IndexSink] = None,
    settings: Optional[IndexingSettings] = None,
) -> list[IndexingWorker]:
    """Indexing and removal loops sharing one sink, one loop per task class."""
    settings = settings or get_indexing_settings()
    sink = sink or create_index_sink()
    return [
        IndexingWorker(
            "Images indexing",
            ImagesIndexingHandler(sink),
            bucket_size=settings.bucket_size,
            interval=settings.interval,
            start_delay=settings.start_delay,
        ),
        IndexingWorker(
            "Images removal",
            ImagesRemovalHandler(sink),
            bucket_size=settings.removal_bucket_size,
            interval=settings.interval,
            start_delay=settings.start_delay,
        ),
    ]


class WorkerSupervisor:
    """Starts workers as asyncio tasks and stops them together."""

    def __init__(self, workers: list[IndexingWorker]) -> None:
        self.workers = workers
        self._tasks: list[asyncio.Task] = []

    def start(self) -> None:
        for worker in self.workers:
            self._tasks.append(asyncio.create_task(worker.run(), name=worker.name))

    async def stop(self) -> None:
        for worker in self.workers:
            worker.stop()
        results = await asyncio.gather(*self._tasks, return_exceptions=True)
        for worker, result in zip(self.workers, results):
            if isinstance(result, BaseException):
                logger.error("%s exited with %s", worker.name, short_message(result))
        self._tasks.clear()
