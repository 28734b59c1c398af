"""Live catalog checks for declared tables."""

import logging

import asyncpg

from project_sync.utils.exceptions import SchemaProbeError

logger = logging.getLogger("schema-prober")

TABLE_EXISTS_SQL = """
    SELECT EXISTS (
        SELECT 1 FROM information_schema.tables
        WHERE table_schema = $1
            AND table_name = $2
    )
"""


class SchemaProber:
    """Answers whether a table exists in the live database."""

    def __init__(
        self,
        pool: asyncpg.Pool,
        schema: str = "public",
        strict: bool = False
    ):
        """Initialize the prober.

        Args:
            pool: The database connection pool.
            schema: Schema searched for declared tables.
            strict: Raise SchemaProbeError instead of reporting a failed
                check as a missing table.
        """
        self.pool = pool
        self.schema = schema
        self.strict = strict

    async def table_exists(self, table_name: str) -> bool:
        """Check the catalog for a table.

        PostgreSQL folds unquoted identifiers, so the lookup is lowercased.

        Args:
            table_name: Declared table name.

        Returns:
            True if the table exists. A failed check returns False unless
            the prober is strict.

        Raises:
            SchemaProbeError: If the check fails and the prober is strict.
        """
        try:
            async with self.pool.acquire() as conn:
                exists = await conn.fetchval(
                    TABLE_EXISTS_SQL, self.schema, table_name.lower()
                )
        except Exception as e:
            if self.strict:
                raise SchemaProbeError(
                    table_name,
                    f"Error checking table existence for {table_name}: {e}"
                ) from e
            logger.warning(
                "Error checking table existence for %s, treating as missing: %s",
                table_name, e
            )
            return False

        return bool(exists)
