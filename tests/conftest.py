"""Pytest configuration and fixtures for project-sync tests."""

import re
from contextlib import asynccontextmanager

import pytest

from project_sync.services.artifacts import ArtifactDetector
from project_sync.services.ddl import DDLGenerator
from project_sync.services.prober import SchemaProber
from project_sync.services.reconciler import TableReconciler


# Markers for test categorization
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (deselect with '-m \"not integration\"')"
    )


@pytest.fixture(scope="session")
def anyio_backend():
    """Set the async backend for anyio."""
    return "asyncio"


def pytest_collection_modifyitems(config, items):
    """Run integration tests last."""
    items.sort(key=lambda item: item.get_closest_marker("integration") is not None)


_FROM_TABLE = re.compile(r"FROM\s+(\w+)", re.IGNORECASE)


class FakeConnection:
    """Records queries and answers them from the owning FakePool."""

    def __init__(self, pool: "FakePool"):
        self.pool = pool

    async def fetchval(self, query, *args):
        self.pool.queries.append((query, args))
        if "information_schema.tables" in query:
            if self.pool.probe_error is not None:
                raise self.pool.probe_error
            _schema, table_name = args
            return table_name in self.pool.existing_tables
        return 1

    async def execute(self, sql, *args):
        self.pool.executed.append(sql)
        for marker, error in self.pool.execute_errors.items():
            if marker in sql:
                raise error
        return "CREATE TABLE"

    async def fetchrow(self, query, *args):
        rows = await self.fetch(query, *args)
        return rows[0] if rows else None

    async def fetch(self, query, *args):
        self.pool.queries.append((query, args))
        table = _FROM_TABLE.search(query).group(1)
        if table in self.pool.fetch_errors:
            raise self.pool.fetch_errors[table]
        rows = self.pool.rows.get(table, [])
        if table == "Project":
            return [row for row in rows if row["id"] == args[0]]
        return [row for row in rows if row.get("project_id") == args[0]]

    @asynccontextmanager
    async def transaction(self):
        yield


class FakePool:
    """In-memory stand-in for an asyncpg pool."""

    def __init__(self, existing_tables=(), rows=None):
        self.existing_tables = {name.lower() for name in existing_tables}
        self.rows = rows or {}
        self.probe_error = None
        self.execute_errors: dict[str, Exception] = {}
        self.fetch_errors: dict[str, Exception] = {}
        self.queries: list[tuple] = []
        self.executed: list[str] = []

    @asynccontextmanager
    async def acquire(self):
        yield FakeConnection(self)


@pytest.fixture
def fake_pool():
    """An empty database with no tables."""
    return FakePool()


@pytest.fixture
def reconciler(fake_pool):
    """Reconciler over the fake pool with strict DDL checks."""
    return TableReconciler(
        pool=fake_pool,
        prober=SchemaProber(fake_pool),
        generator=DDLGenerator()
    )


@pytest.fixture
def workspace(tmp_path):
    """Empty front-end workspace root."""
    (tmp_path / "src").mkdir()
    return tmp_path


@pytest.fixture
def detector(workspace):
    """Artifact detector rooted at the temporary workspace."""
    return ArtifactDetector(workspace)


@pytest.fixture
def make_pool():
    """Factory for fake pools with preset tables and rows."""
    return FakePool
