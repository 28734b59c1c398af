"""Database connection services."""

import asyncio
import time

import asyncpg

from project_sync.models.database import ConnectionStatus
from project_sync.utils.exceptions import DatabaseConnectionError


async def create_pool(
    dsn: str,
    min_size: int = 1,
    max_size: int = 10,
    ssl: bool = False,
    timeout: int = 30
) -> asyncpg.Pool:
    """Create a PostgreSQL connection pool.

    Args:
        dsn: Database connection string.
        min_size: Minimum pool size.
        max_size: Maximum pool size.
        ssl: Whether to use SSL.
        timeout: Statement timeout in seconds.

    Returns:
        An asyncpg connection pool.

    Raises:
        DatabaseConnectionError: If the initial connections cannot be opened.
    """
    try:
        pool = await asyncpg.create_pool(
            dsn=dsn,
            min_size=min_size,
            max_size=max_size,
            ssl=ssl if ssl else None,
            command_timeout=timeout
        )
    except (OSError, asyncio.TimeoutError, asyncpg.PostgresError) as e:
        raise DatabaseConnectionError(f"Failed to create connection pool: {e}") from e
    return pool


async def test_connection(pool: asyncpg.Pool, database: str = "default") -> ConnectionStatus:
    """Test if a database connection is available.

    Args:
        pool: The connection pool to test.
        database: Label reported in the status.

    Returns:
        The connection status with latency or the error message.
    """
    try:
        start_time = time.perf_counter()
        async with pool.acquire() as conn:
            await conn.fetchval("SELECT 1")
        latency_ms = (time.perf_counter() - start_time) * 1000
        return ConnectionStatus(database=database, connected=True, latency_ms=latency_ms)
    except Exception as e:
        return ConnectionStatus(database=database, connected=False, error=str(e))


async def close_pool(pool: asyncpg.Pool) -> None:
    """Close a connection pool.

    Args:
        pool: The connection pool to close.
    """
    await pool.close()
