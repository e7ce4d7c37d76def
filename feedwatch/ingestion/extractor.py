"""Feed document parsing."""

import io
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, List, Optional
from xml.sax import SAXException

import feedparser

from ..exceptions import ParseError
from .models import CandidateItem


def parse_rfc2822(value: Optional[str]) -> Optional[datetime]:
    """Parse an RFC-2822 date into a naive UTC datetime.

    Returns None for missing or unparseable values. Dates without an offset
    (``-0000``) are taken to be UTC.
    """
    if not value:
        return None

    try:
        parsed = parsedate_to_datetime(value.strip())
        if parsed.tzinfo is None:
            return parsed
        # Converting can leave the datetime range near year 1 or 9999
        return parsed.astimezone(timezone.utc).replace(tzinfo=None)
    except (TypeError, ValueError, IndexError, OverflowError):
        return None


def _text(entry: Any, key: str) -> Optional[str]:
    value = entry.get(key)
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def extract_items(raw: bytes) -> List[CandidateItem]:
    """Extract candidate items from a feed document, in document order.

    Raises:
        ParseError: if the document as a whole is not a recognizable feed
    """
    # A file object keeps feedparser from treating the payload as a URL or path
    feed = feedparser.parse(io.BytesIO(raw))

    # feedparser recovers from broken XML with a loose parser; treat that as invalid
    if feed.get("bozo") and isinstance(feed.get("bozo_exception"), SAXException):
        raise ParseError(f"Invalid feed document: {feed.bozo_exception}")
    if not feed.get("version"):
        reason = feed.get("bozo_exception") or "unrecognized format"
        raise ParseError(f"Not a feed document: {reason}")

    items = []
    for entry in feed.entries:
        items.append(
            CandidateItem(
                title=_text(entry, "title"),
                link=_text(entry, "link"),
                pub_date=parse_rfc2822(entry.get("published")),
                guid=_text(entry, "id"),
            )
        )

    return items
