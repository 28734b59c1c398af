"""Tests for database pool helpers."""

from unittest.mock import AsyncMock

import asyncpg
import pytest

from project_sync.services import database
from project_sync.utils.constants import ErrorCode
from project_sync.utils.exceptions import DatabaseConnectionError


class TestCreatePool:
    """create_pool tests."""

    @pytest.mark.asyncio
    async def test_unreachable_server(self, monkeypatch):
        """Test connection failures are raised as DatabaseConnectionError."""
        monkeypatch.setattr(
            asyncpg, "create_pool",
            AsyncMock(side_effect=OSError("Connection refused"))
        )
        with pytest.raises(DatabaseConnectionError) as exc_info:
            await database.create_pool("postgresql://localhost:1/none")
        assert exc_info.value.code == ErrorCode.DB_CONNECTION_FAILED
        assert "Connection refused" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_pool_options(self, monkeypatch):
        """Test pool sizes and timeout are passed to asyncpg."""
        create = AsyncMock(return_value="pool")
        monkeypatch.setattr(asyncpg, "create_pool", create)
        pool = await database.create_pool("postgresql://db/app", min_size=2, max_size=5, timeout=9)
        assert pool == "pool"
        create.assert_awaited_once_with(
            dsn="postgresql://db/app",
            min_size=2,
            max_size=5,
            ssl=None,
            command_timeout=9
        )
