"""Project snapshot loading and summary metrics."""

import asyncio
import logging
from typing import Any

import asyncpg

from project_sync.models.project import (
    ProjectInfo,
    ProjectSnapshot,
    ProjectSummary,
    SummaryMetrics,
)
from project_sync.services.cache import CacheBackend, NullCache
from project_sync.utils.exceptions import ProjectNotFoundError

logger = logging.getLogger("snapshot-service")

PROJECT_SQL = "SELECT * FROM Project WHERE id = $1 LIMIT 1"

# snapshot key -> (query, optional); optional loads degrade to an empty list
RELATED_QUERIES: dict[str, tuple[str, bool]] = {
    "payments": ("SELECT * FROM Project_Payments WHERE project_id = $1 ORDER BY id", False),
    "bugs": ("SELECT * FROM Project_Bugs WHERE project_id = $1 ORDER BY id", False),
    "reports": ("SELECT * FROM Project_Reports WHERE project_id = $1 ORDER BY id", False),
    "tables": ("SELECT * FROM Project_Tables WHERE project_id = $1 ORDER BY id", False),
    "menus": (
        "SELECT * FROM Project_Menus WHERE project_id = $1 "
        "ORDER BY Sort_Order NULLS LAST, Menu_Name ASC",
        True,
    ),
    "role_menu_access": (
        "SELECT * FROM Project_Role_Menu_Access WHERE project_id = $1 ORDER BY id",
        True,
    ),
    "roles": ("SELECT * FROM Project_Roles WHERE project_id = $1 ORDER BY id", True),
}


class ProjectSnapshotService:
    """Loads a project with its related records, with caching."""

    def __init__(
        self,
        pool: asyncpg.Pool,
        cache: CacheBackend | None = None,
        cache_ttl: int = 300
    ):
        """Initialize the snapshot service.

        Args:
            pool: The database connection pool.
            cache: Cache backend for loaded snapshots.
            cache_ttl: Cache time-to-live in seconds.
        """
        self.pool = pool
        self.cache = cache or NullCache()
        self.cache_ttl = cache_ttl

    @staticmethod
    def cache_key(project_id: int) -> str:
        return f"project:{project_id}:snapshot"

    async def get_snapshot(
        self,
        project_id: int,
        force_refresh: bool = False
    ) -> ProjectSnapshot:
        """Get the snapshot of a project.

        Args:
            project_id: Project id.
            force_refresh: Bypass the cache.

        Returns:
            The project snapshot.

        Raises:
            ProjectNotFoundError: If no project has this id.
        """
        key = self.cache_key(project_id)
        if not force_refresh:
            cached = await self.cache.get(key)
            if cached is not None:
                return ProjectSnapshot.model_validate(cached)

        async with self.pool.acquire() as conn:
            project_row = await conn.fetchrow(PROJECT_SQL, project_id)
        if project_row is None:
            raise ProjectNotFoundError(project_id)

        names = list(RELATED_QUERIES)
        loaded = await asyncio.gather(
            *(self._fetch_related(name, project_id) for name in names)
        )

        snapshot = ProjectSnapshot(
            project=ProjectInfo.model_validate(dict(project_row)),
            **dict(zip(names, loaded))
        )
        logger.info(
            "Loaded snapshot for project %s: %d tables, %d reports, %d menus",
            project_id, len(snapshot.tables), len(snapshot.reports), len(snapshot.menus)
        )

        await self.cache.set(key, snapshot.model_dump(mode="json"), self.cache_ttl)
        return snapshot

    async def invalidate(self, project_id: int | None = None) -> int:
        """Drop cached data for one project, or for all projects.

        Args:
            project_id: Project id, or None for every project.

        Returns:
            The number of cache entries removed.
        """
        pattern = "project:*" if project_id is None else f"project:{project_id}:*"
        return await self.cache.delete(pattern)

    async def _fetch_related(self, name: str, project_id: int) -> list[dict[str, Any]]:
        """Fetch one related collection as plain dicts."""
        query, optional = RELATED_QUERIES[name]
        try:
            async with self.pool.acquire() as conn:
                rows = await conn.fetch(query, project_id)
        except Exception as e:
            if not optional:
                raise
            logger.warning("Could not load %s for project %s: %s", name, project_id, e)
            return []
        return [dict(row) for row in rows]

    @staticmethod
    def summarize(snapshot: ProjectSnapshot) -> ProjectSummary:
        """Compute the summary metrics of a snapshot.

        Args:
            snapshot: The project snapshot.

        Returns:
            The project with its summary metrics.
        """
        total_payments = 0.0
        for payment in snapshot.payments:
            try:
                total_payments += float(payment.get("payment_amount") or 0)
            except (TypeError, ValueError):
                logger.warning("Ignoring non-numeric payment amount: %r", payment.get("payment_amount"))

        open_bugs = sum(
            1 for bug in snapshot.bugs
            if (bug.get("status") or "").lower() != "closed"
        )

        metrics = SummaryMetrics(
            payment_count=len(snapshot.payments),
            total_payments=total_payments,
            open_bugs=open_bugs,
            report_count=len(snapshot.reports),
            table_count=len(snapshot.tables),
            menu_count=len(snapshot.menus),
            access_map_count=len(snapshot.role_menu_access),
            role_count=len(snapshot.roles),
        )
        return ProjectSummary(project=snapshot.project, metrics=metrics)
