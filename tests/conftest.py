"""
Shared fixtures for feedwatch tests.

The store is replaced with in-memory fakes that enforce the same
(feed_id, guid-or-link) uniqueness the database schema does.
"""

from typing import Callable, Dict

import httpx
import pytest

from feedwatch.ingestion import FeedFetcher
from feedwatch.models import Feed
from helpers import RSS_THREE_ITEMS, FakeEntryStore, FakeRegistry, make_fetcher, serve


@pytest.fixture
def feed_a() -> Feed:
    return Feed(id=1, url="https://a/feed.xml", name="Feed A")


@pytest.fixture
def feed_b() -> Feed:
    return Feed(id=2, url="https://b/feed.xml", name="Feed B")


@pytest.fixture
def registry(feed_a) -> FakeRegistry:
    return FakeRegistry([feed_a])


@pytest.fixture
def entry_store() -> FakeEntryStore:
    return FakeEntryStore()


@pytest.fixture
def routes() -> Dict[str, Callable[[httpx.Request], httpx.Response]]:
    return {"https://a/feed.xml": serve(RSS_THREE_ITEMS)}


@pytest.fixture
def fetcher(routes) -> FeedFetcher:
    return make_fetcher(routes)
