"""Best-effort background side tasks (cache mirroring after remote reads)."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable

logger = logging.getLogger(__name__)


class BackgroundTasks:
    """Runs fire-and-forget coroutines whose failure must not reach the caller.

    Failures are logged once and never retried. ``drain()`` waits for the
    tasks currently in flight, for shutdown and tests.
    """

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task] = set()

    def spawn(self, coro: Awaitable, *, label: str) -> asyncio.Task:
        task = asyncio.ensure_future(coro)
        task.set_name(label)
        self._tasks.add(task)
        task.add_done_callback(self._finished)
        return task

    def _finished(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            logger.debug("Side task %s cancelled", task.get_name())
            return
        exc = task.exception()
        if exc is not None:
            logger.warning("Side task %s failed: %s", task.get_name(), exc)

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def drain(self) -> None:
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def cancel_all(self) -> None:
        for task in list(self._tasks):
            task.cancel()
        await self.drain()
