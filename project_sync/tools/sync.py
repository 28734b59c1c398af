"""MCP analyze and sync tool implementation."""

import logging

from mcp.server.fastmcp import FastMCP
from project_sync.models.sync import SyncOptions
from project_sync.services.analyzer import ProjectAnalyzer, ProjectSyncer
from project_sync.services.snapshot import ProjectSnapshotService
from project_sync.utils.exceptions import ProjectSyncError

logger = logging.getLogger("sync-tools")


def register_sync_tools(
    mcp: FastMCP,
    snapshot_service: ProjectSnapshotService,
    analyzer: ProjectAnalyzer,
    syncer: ProjectSyncer
) -> None:
    """Register the analyze and sync tools with the MCP server.

    Args:
        mcp: The FastMCP server instance.
        snapshot_service: Project snapshot provider.
        analyzer: Project analyzer.
        syncer: Project syncer.
    """

    @mcp.tool()
    async def analyze_project(project_id: int, refresh: bool = False) -> dict:
        """
        Report declared tables, components and routes a project is missing.

        Args:
            project_id: Project id.
            refresh: Reload the project snapshot instead of using the cache.

        Returns:
            The analysis. Nothing is created.
        """
        try:
            snapshot = await snapshot_service.get_snapshot(
                project_id, force_refresh=refresh
            )
            analysis = await analyzer.analyze_project(snapshot)
            return {
                "status": "success",
                "data": analysis.model_dump(mode="json")
            }
        except ProjectSyncError as e:
            return e.to_dict()
        except Exception as e:
            logger.exception("analyze_project failed for project %s", project_id)
            return {
                "status": "error",
                "error": f"Analysis failed: {e}"
            }

    @mcp.tool()
    async def sync_project(
        project_id: int,
        generate_db_tables: bool = True,
        generate_components: bool = False,
        generate_routes: bool = False
    ) -> dict:
        """
        Analyze a project and create its missing database tables.

        Args:
            project_id: Project id.
            generate_db_tables: Create declared tables missing from the database.
            generate_components: Request component generation (not implemented).
            generate_routes: Request route generation (not implemented).

        Returns:
            The analysis and the sync results. Per-table failures are listed
            under results.errors.
        """
        try:
            snapshot = await snapshot_service.get_snapshot(
                project_id, force_refresh=True
            )
            result = await syncer.sync_project(
                snapshot,
                SyncOptions(
                    generate_db_tables=generate_db_tables,
                    generate_components=generate_components,
                    generate_routes=generate_routes
                )
            )
            if result.results.tables_created:
                await snapshot_service.invalidate(project_id)
            status = "warning" if result.results.errors else "success"
            return {
                "status": status,
                "data": result.model_dump(mode="json")
            }
        except ProjectSyncError as e:
            return e.to_dict()
        except Exception as e:
            logger.exception("sync_project failed for project %s", project_id)
            return {
                "status": "error",
                "error": f"Sync failed: {e}"
            }
