"""Feed entry model for persisted items."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from .base import DBModel


class FeedEntry(DBModel):
    """Item ingested from a feed. Immutable once written."""

    title: Optional[str] = Field(None, description="Item title")
    link: Optional[str] = Field(None, description="Item URL")
    pub_date: Optional[datetime] = Field(None, description="Publication date, naive UTC")
    guid: Optional[str] = Field(None, description="External identifier advertised by the feed")
    feed_id: Optional[int] = Field(None, description="Foreign key to feeds table")
