"""Feed source registry."""

from typing import List, Optional

from psycopg import Error as PsycopgError
from psycopg_pool import AsyncConnectionPool

from ..exceptions import RegistryError
from ..models import Feed


class FeedRegistry:
    """Durable list of registered feeds."""

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self.pool = pool

    async def list_feeds(self) -> List[Feed]:
        """Get all registered feeds."""
        try:
            async with self.pool.connection() as conn:
                async with conn.cursor() as cur:
                    await cur.execute(
                        """
                        SELECT id, url, name, created_at
                        FROM feeds
                        ORDER BY id
                        """
                    )
                    rows = await cur.fetchall()
        except PsycopgError as e:
            raise RegistryError(f"Failed to list feeds: {e}") from e

        return [Feed(**row) for row in rows]

    async def get_feed(self, feed_id: int) -> Optional[Feed]:
        """Get a single feed by ID."""
        try:
            async with self.pool.connection() as conn:
                async with conn.cursor() as cur:
                    await cur.execute(
                        "SELECT id, url, name, created_at FROM feeds WHERE id = %s",
                        (feed_id,),
                    )
                    row = await cur.fetchone()
        except PsycopgError as e:
            raise RegistryError(f"Failed to load feed {feed_id}: {e}") from e

        return Feed(**row) if row else None

    async def insert_feed(self, url: str, name: str) -> Feed:
        """
        Register a new feed.

        Returns:
            The stored feed with its assigned ID
        """
        try:
            async with self.pool.connection() as conn:
                async with conn.cursor() as cur:
                    await cur.execute(
                        """
                        INSERT INTO feeds (url, name)
                        VALUES (%s, %s)
                        RETURNING id, url, name, created_at
                        """,
                        (url, name),
                    )
                    row = await cur.fetchone()
        except PsycopgError as e:
            raise RegistryError(f"Failed to register feed {url}: {e}") from e

        return Feed(**row)
