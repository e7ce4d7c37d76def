"""Database connection management."""

from psycopg import Error as PsycopgError
from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool

from ..config import PostgresConfig
from ..exceptions import PersistenceError


async def create_connection_pool(config: PostgresConfig, timeout: float = 30.0) -> AsyncConnectionPool:
    """Create and open a connection pool.

    The pool is the single shared handle to the store. It is passed explicitly
    to every component that needs it and closed by whoever created it.
    """
    pool = AsyncConnectionPool(
        config.connection_string,
        min_size=config.pool_min_size,
        max_size=config.pool_max_size,
        kwargs={"row_factory": dict_row},
        open=False,
    )
    try:
        await pool.open(wait=True, timeout=timeout)
    except PsycopgError as e:
        await pool.close()
        raise PersistenceError(f"Could not connect to database: {e}") from e
    return pool


async def close_connection_pool(pool: AsyncConnectionPool) -> None:
    """Close a pool created by create_connection_pool."""
    await pool.close()
