"""Data models for project-sync."""

from project_sync.models.project import (
    TableStatus,
    FieldDefinition,
    TableDefinition,
    ReportDefinition,
    MenuDefinition,
    RoleDefinition,
    RoleMenuAccess,
    ProjectInfo,
    ProjectSnapshot,
    SummaryMetrics,
    ProjectSummary,
)
from project_sync.models.sync import (
    TableResultStatus,
    MissingTableResult,
    MissingArtifact,
    MissingArtifactReport,
    ScaffoldTemplate,
    MissingRoute,
    AnalysisResult,
    SyncOptions,
    SyncError,
    NotPerformed,
    SyncResults,
    SyncResult,
)
from project_sync.models.database import ConnectionStatus

__all__ = [
    "TableStatus",
    "FieldDefinition",
    "TableDefinition",
    "ReportDefinition",
    "MenuDefinition",
    "RoleDefinition",
    "RoleMenuAccess",
    "ProjectInfo",
    "ProjectSnapshot",
    "SummaryMetrics",
    "ProjectSummary",
    "TableResultStatus",
    "MissingTableResult",
    "MissingArtifact",
    "MissingArtifactReport",
    "ScaffoldTemplate",
    "MissingRoute",
    "AnalysisResult",
    "SyncOptions",
    "SyncError",
    "NotPerformed",
    "SyncResults",
    "SyncResult",
    "ConnectionStatus",
]
