"""Sample documents and in-memory fakes shared by the tests."""

import asyncio
from typing import Callable, Dict, List, Optional, Tuple

import httpx

from feedwatch.exceptions import PersistenceError, RegistryError
from feedwatch.ingestion import FeedFetcher, InsertOutcome
from feedwatch.models import Feed, FeedEntry


RSS_THREE_ITEMS = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>Feed A</title>
    <link>https://a.example.com</link>
    <description>Test feed</description>
    <item>
      <title>First</title>
      <link>https://a.example.com/1</link>
      <guid>a-1</guid>
      <pubDate>Thu, 05 Sep 2024 12:00:00 GMT</pubDate>
    </item>
    <item>
      <title>Second</title>
      <link>https://a.example.com/2</link>
      <guid>a-2</guid>
      <pubDate>Thu, 05 Sep 2024 14:30:00 +0200</pubDate>
    </item>
    <item>
      <title>Third</title>
      <link>https://a.example.com/3</link>
      <guid>a-3</guid>
      <pubDate>not a date</pubDate>
    </item>
  </channel>
</rss>
"""

RSS_NO_GUID = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>Feed B</title>
    <link>https://b.example.com</link>
    <description>Items without guids</description>
    <item>
      <title>Linked only</title>
      <link>https://b.example.com/post</link>
    </item>
    <item>
      <title>Nothing to key on</title>
    </item>
  </channel>
</rss>
"""

NOT_A_FEED = b"<html><head><title>Hello</title></head><body>Not a feed</body></html>"


class FakeRegistry:
    """In-memory feed registry."""

    def __init__(self, feeds: Optional[List[Feed]] = None) -> None:
        self.feeds: List[Feed] = list(feeds or [])
        self.fail_listing = False

    async def list_feeds(self) -> List[Feed]:
        if self.fail_listing:
            raise RegistryError("connection refused")
        return list(self.feeds)

    async def get_feed(self, feed_id: int) -> Optional[Feed]:
        return next((f for f in self.feeds if f.id == feed_id), None)

    async def insert_feed(self, url: str, name: str) -> Feed:
        feed = Feed(id=len(self.feeds) + 1, url=url, name=name)
        self.feeds.append(feed)
        return feed


class FakeEntryStore:
    """In-memory entry store with insert-or-ignore semantics."""

    def __init__(self) -> None:
        self.rows: Dict[Tuple[int, str], FeedEntry] = {}
        self.fail_guids = set()

    async def insert_entry(self, feed_id, item) -> InsertOutcome:
        # Yield like a real round trip so concurrent refreshes interleave
        await asyncio.sleep(0)
        if item.guid in self.fail_guids:
            raise PersistenceError(f"value too long for guid {item.guid}")

        # Same key as the dedup_key generated column in feedwatch.db.init.SCHEMA_SQL
        key = (feed_id, f"guid:{item.guid}" if item.guid else f"link:{item.link}")
        if key in self.rows:
            return InsertOutcome.DUPLICATE

        self.rows[key] = FeedEntry(id=len(self.rows) + 1, feed_id=feed_id, **item.model_dump())
        return InsertOutcome.INSERTED

    async def list_entries(self, feed_id: int, limit: int = 50) -> List[FeedEntry]:
        return [e for e in self.rows.values() if e.feed_id == feed_id][:limit]

    def for_feed(self, feed_id: int) -> List[FeedEntry]:
        return [e for e in self.rows.values() if e.feed_id == feed_id]


def make_fetcher(routes: Dict[str, Callable[[httpx.Request], httpx.Response]]) -> FeedFetcher:
    """Build a fetcher whose requests are answered by per-URL handlers."""

    def handler(request: httpx.Request) -> httpx.Response:
        route = routes.get(str(request.url))
        if route is None:
            return httpx.Response(404)
        return route(request)

    return FeedFetcher(timeout=5.0, transport=httpx.MockTransport(handler))


def serve(body: bytes, status_code: int = 200) -> Callable[[httpx.Request], httpx.Response]:
    """Handler returning a fixed body."""
    return lambda request: httpx.Response(
        status_code, content=body, headers={"content-type": "application/rss+xml"}
    )
