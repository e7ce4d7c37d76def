"""Ingestion service wiring and the entry points used by boundary layers."""

import asyncio
import logging
from typing import List, Optional

from psycopg_pool import AsyncConnectionPool

from .config import Config
from .db import EntryStore, FeedRegistry, close_connection_pool, create_connection_pool
from .exceptions import RegistryError
from .ingestion import (
    FeedFetcher,
    IngestionScheduler,
    RefreshResult,
    RefreshWorker,
    TaskSupervisor,
    extract_items,
)
from .models import Feed, FeedEntry

logger = logging.getLogger(__name__)


class IngestionService:
    """Owns the scheduler, the worker and the shared store handle."""

    def __init__(
        self,
        registry: FeedRegistry,
        entries: EntryStore,
        fetcher: FeedFetcher,
        interval: float = 10.0,
        pool: Optional[AsyncConnectionPool] = None,
    ) -> None:
        """Initialize service from already-built components."""
        self.registry = registry
        self.entries = entries
        self.fetcher = fetcher
        self.pool = pool
        self.supervisor = TaskSupervisor()
        self.worker = RefreshWorker(fetcher, entries)
        self.scheduler = IngestionScheduler(registry, self.worker, self.supervisor, interval)
        self._scheduler_task: Optional[asyncio.Task] = None

    @classmethod
    async def from_config(cls, config: Config) -> "IngestionService":
        """Open a connection pool and build every component from config."""
        settings = config.config
        pool = await create_connection_pool(config.get_db_config())
        fetcher = FeedFetcher(
            timeout=settings.fetch.timeout_seconds,
            user_agent=settings.fetch.user_agent,
        )
        return cls(
            registry=FeedRegistry(pool),
            entries=EntryStore(pool),
            fetcher=fetcher,
            interval=settings.scheduler.interval_seconds,
            pool=pool,
        )

    async def __aenter__(self) -> "IngestionService":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.stop()

    def start(self) -> None:
        """Start the periodic scheduler in the background."""
        if self._scheduler_task is None or self._scheduler_task.done():
            self._scheduler_task = asyncio.create_task(
                self.scheduler.run_forever(), name="ingestion-scheduler"
            )

    async def stop(self, timeout: float = 30.0) -> None:
        """Stop the scheduler, drain in-flight refreshes and close the pool."""
        if self._scheduler_task is not None:
            self._scheduler_task.cancel()
            try:
                await self._scheduler_task
            except asyncio.CancelledError:
                pass
            self._scheduler_task = None

        await self.supervisor.shutdown(timeout=timeout)

        if self.pool is not None:
            await close_connection_pool(self.pool)
            self.pool = None

    async def add_feed(self, url: str, name: str) -> Feed:
        """Register a feed after checking it serves a parseable document.

        The first refresh of the new feed starts in the background before this
        returns.

        Raises:
            FetchError: if the URL cannot be fetched
            ParseError: if the response is not a feed document
            RegistryError: if the store rejects the feed
        """
        raw = await self.fetcher.fetch(url)
        extract_items(raw)

        feed = await self.registry.insert_feed(url, name)
        logger.info("Registered feed %s (%s)", feed.id, feed.url)

        self.refresh_now(feed)
        return feed

    def refresh_now(self, feed: Feed) -> asyncio.Task:
        """Start one out-of-band refresh of a feed."""
        return self.scheduler.spawn_refresh(feed)

    async def refresh_feed(self, feed_id: int) -> RefreshResult:
        """Refresh a feed and wait for the result."""
        feed = await self.registry.get_feed(feed_id)
        if feed is None:
            raise RegistryError(f"Feed {feed_id} not found")
        return await self.worker.refresh(feed)

    async def list_feeds(self) -> List[Feed]:
        return await self.registry.list_feeds()

    async def list_entries(self, feed_id: int, limit: int = 50) -> List[FeedEntry]:
        return await self.entries.list_entries(feed_id, limit=limit)
