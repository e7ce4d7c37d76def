"""Feed model for registered syndication sources."""

from pydantic import Field

from .base import DBModel


class Feed(DBModel):
    """Registered feed source."""

    url: str = Field(..., description="Feed URL")
    name: str = Field(..., description="Display name")
