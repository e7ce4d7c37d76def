"""Data models for ingestion."""

import enum
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class CandidateItem(BaseModel):
    """Item extracted from a feed document, not yet persisted."""

    title: Optional[str] = Field(None, description="Item title")
    link: Optional[str] = Field(None, description="Item URL")
    pub_date: Optional[datetime] = Field(None, description="Publication date, naive UTC")
    guid: Optional[str] = Field(None, description="External identifier")

    @property
    def has_dedup_key(self) -> bool:
        """Whether the store can tell this item apart from its re-ingestion."""
        return bool(self.guid or self.link)


class InsertOutcome(str, enum.Enum):
    """Result of a single insert attempt."""

    INSERTED = "inserted"
    DUPLICATE = "duplicate"


class RefreshResult(BaseModel):
    """Result of one refresh of a single feed."""

    feed_id: Optional[int] = Field(None, description="Feed database ID")
    feed_url: str = Field(..., description="Feed URL")
    success: bool = Field(..., description="Whether fetch and parse succeeded")
    error: Optional[str] = Field(None, description="Error message if failed")
    item_count: int = Field(0, description="Number of items extracted")
    new: int = Field(0, description="Items inserted")
    duplicates: int = Field(0, description="Items already stored")
    failed: int = Field(0, description="Items the store rejected with an error")
    skipped: int = Field(0, description="Items with neither guid nor link")
