"""Constants for project-sync."""

from enum import Enum


class ErrorCode(str, Enum):
    """Error code enumeration."""

    DB_CONNECTION_FAILED = "ERR_001"
    INVALID_PROJECT = "ERR_002"
    PROJECT_NOT_FOUND = "ERR_003"
    DDL_VALIDATION_FAILED = "ERR_004"
    SCHEMA_PROBE_FAILED = "ERR_005"


ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.DB_CONNECTION_FAILED: "Unable to connect to the configured database",
    ErrorCode.INVALID_PROJECT: "Project ID is required",
    ErrorCode.PROJECT_NOT_FOUND: "Project not found",
    ErrorCode.DDL_VALIDATION_FAILED: "Table definition cannot be turned into safe DDL",
    ErrorCode.SCHEMA_PROBE_FAILED: "Unable to check the database catalog",
}

# Workspace layout used for scaffolding detection
PAGES_DIR = ("src", "pages")
SERVICES_DIR = ("src", "services")
ROUTES_FILE = ("src", "routes", "index.jsx")

DEFAULT_PROJECT_NAME = "Project"
