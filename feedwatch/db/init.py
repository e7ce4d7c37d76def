"""Database initialization and schema management."""

import logging

from psycopg import Error as PsycopgError
from psycopg_pool import AsyncConnectionPool

from ..exceptions import PersistenceError

logger = logging.getLogger(__name__)


SCHEMA_SQL = """
-- Feeds table
CREATE TABLE IF NOT EXISTS feeds (
    id SERIAL PRIMARY KEY,
    url TEXT NOT NULL,
    name TEXT NOT NULL,
    created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
);

-- Feed entries table
-- dedup_key is the guid when present, else the link. Rows with neither have
-- a NULL key and are never written by the refresh worker.
CREATE TABLE IF NOT EXISTS feed_entries (
    id SERIAL PRIMARY KEY,
    title TEXT,
    link TEXT,
    pub_date TIMESTAMP,
    guid TEXT,
    feed_id INTEGER REFERENCES feeds(id),
    dedup_key TEXT GENERATED ALWAYS AS (COALESCE('guid:' || guid, 'link:' || link)) STORED,
    created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
    UNIQUE (feed_id, dedup_key)
);

-- Create indexes
CREATE INDEX IF NOT EXISTS idx_feed_entries_feed_id_pub_date ON feed_entries(feed_id, pub_date DESC);
"""


async def validate_connection(pool: AsyncConnectionPool) -> bool:
    """Validate database connection."""
    try:
        async with pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute("SELECT 1 AS ok")
                result = await cur.fetchone()
                return result is not None and result["ok"] == 1
    except PsycopgError as e:
        logger.error("Database connection failed: %s", e)
        return False


async def init_database(pool: AsyncConnectionPool) -> None:
    """Initialize database schema."""
    try:
        async with pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(SCHEMA_SQL)
        logger.info("Database schema initialized successfully")
    except PsycopgError as e:
        raise PersistenceError(f"Failed to initialize database schema: {e}") from e
