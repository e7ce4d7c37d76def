"""Feedwatch - periodic feed ingestion with idempotent persistence."""

__version__ = "0.1.0"
