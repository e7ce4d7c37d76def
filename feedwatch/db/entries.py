"""Feed entry storage and deduplication."""

from typing import List

from psycopg import Error as PsycopgError
from psycopg_pool import AsyncConnectionPool

from ..exceptions import PersistenceError
from ..ingestion.models import CandidateItem, InsertOutcome
from ..models import FeedEntry


class EntryStore:
    """Insert-or-ignore gateway for feed entries.

    Duplicates are rejected by the UNIQUE (feed_id, dedup_key) constraint in a
    single statement, so overlapping refreshes of one feed cannot race.
    """

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self.pool = pool

    async def insert_entry(self, feed_id: int, item: CandidateItem) -> InsertOutcome:
        """Insert an item for a feed unless an equivalent row already exists."""
        try:
            async with self.pool.connection() as conn:
                async with conn.cursor() as cur:
                    await cur.execute(
                        """
                        INSERT INTO feed_entries (title, link, pub_date, guid, feed_id)
                        VALUES (%s, %s, %s, %s, %s)
                        ON CONFLICT DO NOTHING
                        RETURNING id
                        """,
                        (item.title, item.link, item.pub_date, item.guid, feed_id),
                    )
                    row = await cur.fetchone()
        except PsycopgError as e:
            raise PersistenceError(f"Failed to store entry for feed {feed_id}: {e}") from e

        return InsertOutcome.INSERTED if row else InsertOutcome.DUPLICATE

    async def list_entries(self, feed_id: int, limit: int = 50) -> List[FeedEntry]:
        """Get the latest entries for a feed, newest first."""
        try:
            async with self.pool.connection() as conn:
                async with conn.cursor() as cur:
                    await cur.execute(
                        """
                        SELECT id, title, link, pub_date, guid, feed_id, created_at
                        FROM feed_entries
                        WHERE feed_id = %s
                        ORDER BY pub_date DESC NULLS LAST, id DESC
                        LIMIT %s
                        """,
                        (feed_id, limit),
                    )
                    rows = await cur.fetchall()
        except PsycopgError as e:
            raise PersistenceError(f"Failed to list entries for feed {feed_id}: {e}") from e

        return [FeedEntry(**row) for row in rows]
