"""Feed fetching, parsing and refresh scheduling."""

from .extractor import extract_items, parse_rfc2822
from .fetcher import FeedFetcher
from .models import CandidateItem, InsertOutcome, RefreshResult
from .scheduler import IngestionScheduler
from .supervisor import TaskSupervisor
from .worker import RefreshWorker

__all__ = [
    "CandidateItem",
    "FeedFetcher",
    "IngestionScheduler",
    "InsertOutcome",
    "RefreshResult",
    "RefreshWorker",
    "TaskSupervisor",
    "extract_items",
    "parse_rfc2822",
]
