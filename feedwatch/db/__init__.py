"""Database access for feedwatch."""

from ..ingestion.models import InsertOutcome
from .connection import close_connection_pool, create_connection_pool
from .entries import EntryStore
from .feeds import FeedRegistry
from .init import init_database, validate_connection

__all__ = [
    "EntryStore",
    "FeedRegistry",
    "InsertOutcome",
    "close_connection_pool",
    "create_connection_pool",
    "init_database",
    "validate_connection",
]
