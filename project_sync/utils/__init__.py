"""Utility modules for project-sync."""

from project_sync.utils.constants import ErrorCode, ERROR_MESSAGES
from project_sync.utils.exceptions import (
    ProjectSyncError,
    DatabaseConnectionError,
    InvalidProjectError,
    ProjectNotFoundError,
    DDLValidationError,
    SchemaProbeError,
)

__all__ = [
    "ErrorCode",
    "ERROR_MESSAGES",
    "ProjectSyncError",
    "DatabaseConnectionError",
    "InvalidProjectError",
    "ProjectNotFoundError",
    "DDLValidationError",
    "SchemaProbeError",
]
