"""MCP project summary and health tool implementation."""

import asyncpg
from mcp.server.fastmcp import FastMCP
from project_sync.services.database import test_connection
from project_sync.services.snapshot import ProjectSnapshotService
from project_sync.utils.exceptions import ProjectSyncError


def register_project_tools(
    mcp: FastMCP,
    pool: asyncpg.Pool,
    snapshot_service: ProjectSnapshotService
) -> None:
    """Register the summary and connection tools with the MCP server.

    Args:
        mcp: The FastMCP server instance.
        pool: The database connection pool.
        snapshot_service: Project snapshot provider.
    """

    @mcp.tool()
    async def get_project_summary(project_id: int, refresh: bool = False) -> dict:
        """
        Get a project with its payment, bug, report, table, menu and role counts.

        Args:
            project_id: Project id.
            refresh: Reload the project snapshot instead of using the cache.

        Returns:
            The project and its summary metrics.
        """
        try:
            snapshot = await snapshot_service.get_snapshot(
                project_id, force_refresh=refresh
            )
            summary = snapshot_service.summarize(snapshot)
            return {
                "status": "success",
                "data": summary.model_dump(mode="json")
            }
        except ProjectSyncError as e:
            return e.to_dict()
        except Exception as e:
            return {
                "status": "error",
                "error": f"Summary failed: {e}"
            }

    @mcp.tool()
    async def check_connection() -> dict:
        """
        Check that the configured database is reachable.

        Returns:
            Connection status with latency in milliseconds.
        """
        status = await test_connection(pool)
        return {
            "status": "success" if status.connected else "error",
            "data": status.model_dump()
        }
