"""Service modules for project-sync."""

from project_sync.services.database import (
    create_pool,
    test_connection,
    close_pool,
)
from project_sync.services.ddl import DDLGenerator, map_data_type
from project_sync.services.prober import SchemaProber
from project_sync.services.reconciler import TableReconciler
from project_sync.services.artifacts import ArtifactDetector
from project_sync.services.analyzer import ProjectAnalyzer, ProjectSyncer
from project_sync.services.cache import (
    CacheBackend,
    MemoryCache,
    NullCache,
    RedisCache,
    create_cache,
)
from project_sync.services.snapshot import ProjectSnapshotService

__all__ = [
    # Database
    "create_pool",
    "test_connection",
    "close_pool",
    # Reconciliation
    "DDLGenerator",
    "map_data_type",
    "SchemaProber",
    "TableReconciler",
    "ArtifactDetector",
    "ProjectAnalyzer",
    "ProjectSyncer",
    # Snapshots
    "CacheBackend",
    "MemoryCache",
    "NullCache",
    "RedisCache",
    "create_cache",
    "ProjectSnapshotService",
]
