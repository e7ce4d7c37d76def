"""Fire-and-forget task supervision."""

import asyncio
import logging
from typing import Coroutine, Set

logger = logging.getLogger(__name__)


class TaskSupervisor:
    """Owns background tasks and logs their failures.

    Holds a strong reference to every task until it finishes, so tasks are not
    garbage collected mid-flight, and never lets a task's exception reach the
    code that spawned it.
    """

    def __init__(self) -> None:
        self._tasks: Set[asyncio.Task] = set()

    def __len__(self) -> int:
        return len(self._tasks)

    def spawn(self, coro: Coroutine, name: str = None) -> asyncio.Task:
        """Schedule a coroutine and return immediately."""
        task = asyncio.create_task(self._guard(coro, name), name=name)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _guard(self, coro: Coroutine, name: str) -> None:
        try:
            await coro
        except asyncio.CancelledError:
            logger.debug("Task %s cancelled", name)
            raise
        except Exception:
            logger.exception("Task %s crashed", name)

    async def join(self) -> None:
        """Wait for all tasks, including ones spawned while waiting."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def cancel_all(self) -> None:
        """Cancel every running task and wait for them to unwind."""
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    async def shutdown(self, timeout: float = 30.0) -> None:
        """Give tasks up to timeout seconds to finish, then cancel the rest."""
        if not self._tasks:
            return
        try:
            await asyncio.wait_for(self.join(), timeout=timeout)
        except asyncio.TimeoutError:
            logger.warning("Cancelling %d unfinished tasks", len(self._tasks))
            await self.cancel_all()
