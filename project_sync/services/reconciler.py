"""Detection and creation of declared tables missing from the database."""

import logging
from typing import Iterable

import asyncpg

from project_sync.models.project import TableDefinition
from project_sync.models.sync import MissingTableResult, TableResultStatus
from project_sync.services.ddl import DDLGenerator
from project_sync.services.prober import SchemaProber

logger = logging.getLogger("table-reconciler")


class TableReconciler:
    """Compares declared tables with the live schema and creates the gaps."""

    def __init__(
        self,
        pool: asyncpg.Pool,
        prober: SchemaProber,
        generator: DDLGenerator
    ):
        """Initialize the reconciler.

        Args:
            pool: The database connection pool used for DDL execution.
            prober: Catalog existence checker.
            generator: DDL generator for declared tables.
        """
        self.pool = pool
        self.prober = prober
        self.generator = generator

    async def detect_missing_tables(
        self,
        tables: Iterable[TableDefinition]
    ) -> list[TableDefinition]:
        """Find declared tables absent from the database.

        Args:
            tables: Declared tables, in display order.

        Returns:
            The missing tables in input order. Unnamed tables are skipped.
        """
        missing = []
        for table in tables or []:
            if not table.table_name:
                continue
            if not await self.prober.table_exists(table.table_name):
                missing.append(table)
        return missing

    async def generate_missing_tables(
        self,
        tables: Iterable[TableDefinition],
        project_id: int
    ) -> list[MissingTableResult]:
        """Create every declared table that is still missing.

        Each table is generated and executed on its own; a failure is
        recorded and the next table is still attempted.

        Args:
            tables: Declared tables.
            project_id: Owning project id.

        Returns:
            One result per attempted table, in input order.
        """
        missing = await self.detect_missing_tables(tables)
        results = []

        for table in missing:
            try:
                sql = self.generator.generate_table_sql(table, project_id)
                if not sql:
                    continue
                await self._execute_ddl(sql)
                logger.info("Created table %s for project %s", table.table_name, project_id)
                results.append(MissingTableResult(
                    table_name=table.table_name,
                    status=TableResultStatus.CREATED,
                    sql=sql
                ))
            except Exception as e:
                logger.error("Failed to create table %s: %s", table.table_name, e)
                results.append(MissingTableResult(
                    table_name=table.table_name,
                    status=TableResultStatus.ERROR,
                    error=str(e)
                ))

        return results

    async def _execute_ddl(self, sql: str) -> None:
        """Run a multi-statement DDL script in one transaction."""
        async with self.pool.acquire() as conn:
            async with conn.transaction():
                await conn.execute(sql)
