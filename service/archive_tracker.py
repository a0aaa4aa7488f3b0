# service/archive_tracker.py
import asyncio
import logging
from typing import Awaitable, Set

logger = logging.getLogger(__name__)


class ArchiveTracker:
    """
    Keeps handles on archival uploads that run after the tick has answered.

    Flow:
    - schedule() wraps the coroutine in a task and holds a strong reference.
    - A done-callback logs the outcome and releases the handle.
    - drain() is awaited on shutdown so in-flight uploads get a bounded chance to finish.
    """

    def __init__(self) -> None:
        self._tasks: Set[asyncio.Task] = set()

    def schedule(self, coro: Awaitable[object], *, label: str) -> asyncio.Task:
        task = asyncio.ensure_future(coro)
        task.set_name(f"archive:{label}")
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        return task

    def _on_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            logger.warning("archive.cancelled task=%s", task.get_name())
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                "archive.error task=%s err=%s", task.get_name(), type(exc).__name__
            )

    def pending(self) -> int:
        return len(self._tasks)

    async def drain(self, timeout: float) -> int:
        """
        Wait up to `timeout` seconds for in-flight archives; cancel stragglers.
        Returns how many had to be cancelled.
        """
        if not self._tasks:
            return 0
        done, still_running = await asyncio.wait(set(self._tasks), timeout=timeout)
        for task in still_running:
            task.cancel()
        if still_running:
            await asyncio.gather(*still_running, return_exceptions=True)
        logger.info(
            "archive.drain finished=%d cancelled=%d", len(done), len(still_running)
        )
        return len(still_running)


archive_tracker = ArchiveTracker()
