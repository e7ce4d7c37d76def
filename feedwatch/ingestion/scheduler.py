"""Periodic refresh scheduling."""

import asyncio
import logging
from typing import Optional

from ..exceptions import RegistryError
from ..models import Feed
from .supervisor import TaskSupervisor
from .worker import RefreshWorker

logger = logging.getLogger(__name__)


class IngestionScheduler:
    """Start a refresh of every registered feed on a fixed cadence.

    A cycle only spawns workers; it never waits for them. Workers from an
    earlier cycle may still be running when the next one starts.
    """

    def __init__(
        self,
        registry,
        worker: RefreshWorker,
        supervisor: TaskSupervisor,
        interval: float = 10.0,
    ) -> None:
        """Initialize scheduler."""
        self.registry = registry
        self.worker = worker
        self.supervisor = supervisor
        self.interval = interval
        self.cycles = 0

    def spawn_refresh(self, feed: Feed) -> asyncio.Task:
        """Refresh one feed in the background."""
        logger.debug("Spawned refresh for %s", feed.url)
        return self.supervisor.spawn(self.worker.refresh(feed), name=f"refresh-feed-{feed.id}")

    async def run_cycle(self) -> int:
        """
        Run one cycle.

        Returns:
            Number of refreshes spawned
        """
        self.cycles += 1
        try:
            feeds = await self.registry.list_feeds()
        except RegistryError as e:
            logger.error("Skipping cycle %d: %s", self.cycles, e)
            return 0

        for feed in feeds:
            self.spawn_refresh(feed)

        return len(feeds)

    async def run_forever(self, max_cycles: Optional[int] = None) -> None:
        """Tick every interval seconds until cancelled or max_cycles is reached.

        Ticks stay aligned to the start time. A tick missed because a cycle ran
        long is skipped, not made up.
        """
        loop = asyncio.get_running_loop()
        next_tick = loop.time()
        ran = 0

        logger.info("Scheduler started, refreshing every %.1fs", self.interval)
        while max_cycles is None or ran < max_cycles:
            await self.run_cycle()
            ran += 1
            if max_cycles is not None and ran >= max_cycles:
                break

            next_tick += self.interval
            now = loop.time()
            if next_tick < now:
                missed = int((now - next_tick) // self.interval) + 1
                next_tick += missed * self.interval
            await asyncio.sleep(next_tick - now)
