"""Data models for feedwatch."""

from .entry import FeedEntry
from .feed import Feed

__all__ = ["Feed", "FeedEntry"]
