"""Main entry point for the project-sync server."""

import argparse
import asyncio
import logging
from pathlib import Path

import asyncpg
from mcp.server.fastmcp import FastMCP

from project_sync.config import Settings
from project_sync.services.analyzer import ProjectAnalyzer, ProjectSyncer
from project_sync.services.artifacts import ArtifactDetector
from project_sync.services.cache import create_cache
from project_sync.services.database import close_pool, create_pool
from project_sync.services.ddl import DDLGenerator
from project_sync.services.prober import SchemaProber
from project_sync.services.reconciler import TableReconciler
from project_sync.services.snapshot import ProjectSnapshotService


logger = logging.getLogger("project_sync")


def build_services(pool: asyncpg.Pool, settings: Settings) -> dict:
    """Wire the reconciliation services around a connection pool.

    Args:
        pool: Database connection pool.
        settings: Application settings.

    Returns:
        Dictionary containing the initialized services.
    """
    prober = SchemaProber(
        pool=pool,
        schema=settings.db_schema,
        strict=settings.strict_schema_probe
    )
    generator = DDLGenerator(strict_identifiers=settings.ddl_strict_identifiers)
    reconciler = TableReconciler(pool=pool, prober=prober, generator=generator)
    detector = ArtifactDetector(workspace_root=settings.get_workspace_root())
    analyzer = ProjectAnalyzer(reconciler=reconciler, detector=detector)
    syncer = ProjectSyncer(analyzer=analyzer, reconciler=reconciler)
    snapshot_service = ProjectSnapshotService(
        pool=pool,
        cache=create_cache(
            settings.cache_backend,
            max_entries=settings.cache_max_entries,
            redis_url=settings.redis_url
        ),
        cache_ttl=settings.cache_ttl
    )

    return {
        "pool": pool,
        "snapshot_service": snapshot_service,
        "analyzer": analyzer,
        "syncer": syncer,
        "settings": settings
    }


def main() -> None:
    """Main entry point for the server."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Project schema sync MCP server")
    parser.add_argument(
        "--dsn",
        type=str,
        help="Database DSN"
    )
    parser.add_argument(
        "--workspace-root",
        type=Path,
        help="Workspace root scanned for scaffolding artifacts"
    )
    parser.add_argument(
        "--port",
        type=int,
        help="MCP server port"
    )

    args = parser.parse_args()

    # Load settings
    settings = Settings()
    if args.dsn:
        settings.postgres_dsn = args.dsn
    if args.workspace_root:
        settings.workspace_root = args.workspace_root
    if args.port:
        settings.mcp_port = args.port

    logger.info("Starting project-sync server initialization")

    asyncio.run(run_server(settings))


async def run_server(settings: Settings) -> None:
    """Run the MCP server.

    Args:
        settings: Application settings.
    """
    mcp = FastMCP("project-sync", host=settings.mcp_host, port=settings.mcp_port)

    logger.info("settings: %s", settings.model_dump(exclude={"postgres_password", "postgres_dsn", "redis_url"}))

    pool = await create_pool(
        dsn=settings.get_dsn(),
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
        ssl=settings.postgres_ssl,
        timeout=settings.query_timeout
    )
    if settings.workspace_root is None:
        logger.warning(
            "workspace_root not set; scanning the working directory %s",
            settings.get_workspace_root()
        )

    services = build_services(pool, settings)
    try:
        _register_tools(mcp, services)

        logger.info(
            "project-sync ready; workspace root %s",
            settings.get_workspace_root()
        )
        await mcp.run_sse_async()
    finally:
        await services["snapshot_service"].cache.close()
        await close_pool(pool)


def _register_tools(mcp: FastMCP, services: dict) -> None:
    """Register all MCP tools.

    Args:
        mcp: The FastMCP instance.
        services: Services built by build_services.
    """
    from project_sync.tools.sync import register_sync_tools
    from project_sync.tools.project import register_project_tools

    register_sync_tools(
        mcp,
        services["snapshot_service"],
        services["analyzer"],
        services["syncer"]
    )
    register_project_tools(mcp, services["pool"], services["snapshot_service"])


if __name__ == "__main__":
    main()
