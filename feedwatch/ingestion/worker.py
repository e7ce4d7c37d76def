"""Per-feed refresh: fetch, extract, persist."""

import logging

from ..exceptions import FetchError, ParseError, PersistenceError
from ..models import Feed
from .extractor import extract_items
from .fetcher import FeedFetcher
from .models import InsertOutcome, RefreshResult

logger = logging.getLogger(__name__)


class RefreshWorker:
    """Refresh one feed at a time.

    The worker is stateless between calls; any number of refreshes, including
    several for the same feed, may run concurrently. Every failure is caught
    here and reported in the returned RefreshResult.
    """

    def __init__(self, fetcher: FeedFetcher, entries) -> None:
        """Initialize worker with a fetcher and an entry store."""
        self.fetcher = fetcher
        self.entries = entries

    async def refresh(self, feed: Feed) -> RefreshResult:
        """Fetch a feed and persist every item not stored yet."""
        result = RefreshResult(feed_id=feed.id, feed_url=feed.url, success=False)

        try:
            raw = await self.fetcher.fetch(feed.url)
            items = extract_items(raw)
        except (FetchError, ParseError) as e:
            logger.warning("Refresh of feed %s (%s) failed: %s", feed.id, feed.url, e)
            result.error = str(e)
            return result

        result.success = True
        result.item_count = len(items)

        for item in items:
            if not item.has_dedup_key:
                logger.warning(
                    "Dropping item without guid or link in feed %s (%s): %r", feed.id, feed.url, item.title
                )
                result.skipped += 1
                continue

            try:
                outcome = await self.entries.insert_entry(feed.id, item)
            except PersistenceError as e:
                logger.error("Could not store item %r for feed %s (%s): %s", item.guid or item.link, feed.id, feed.url, e)
                result.failed += 1
                continue

            if outcome == InsertOutcome.INSERTED:
                logger.info("New item in %s: %s", feed.name, item.title)
                result.new += 1
            else:
                result.duplicates += 1

        logger.debug(
            "Refreshed feed %s (%s): %d new, %d duplicates, %d failed, %d skipped",
            feed.id,
            feed.url,
            result.new,
            result.duplicates,
            result.failed,
            result.skipped,
        )
        return result
