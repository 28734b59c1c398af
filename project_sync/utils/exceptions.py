"""Exception classes for project-sync."""

from project_sync.utils.constants import ErrorCode, ERROR_MESSAGES


class ProjectSyncError(Exception):
    """Base exception class for project-sync."""

    def __init__(
        self,
        code: ErrorCode,
        message: str | None = None,
        details: dict | None = None
    ):
        self.code = code
        self.message = message or ERROR_MESSAGES.get(code, "Unknown error")
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict:
        """Convert the exception to a dictionary format.

        Returns:
            A dictionary representation of the error.
        """
        return {
            "status": "error",
            "error": {
                "code": self.code.value,
                "message": self.message,
                "details": self.details
            }
        }


class DatabaseConnectionError(ProjectSyncError):
    """Database connection error."""

    def __init__(self, message: str):
        super().__init__(
            code=ErrorCode.DB_CONNECTION_FAILED,
            message=message
        )


class InvalidProjectError(ProjectSyncError):
    """Project snapshot has no usable identity."""

    def __init__(self, message: str | None = None):
        super().__init__(
            code=ErrorCode.INVALID_PROJECT,
            message=message
        )


class ProjectNotFoundError(ProjectSyncError):
    """No project row for the requested id."""

    def __init__(self, project_id: int):
        super().__init__(
            code=ErrorCode.PROJECT_NOT_FOUND,
            details={"project_id": project_id}
        )


class DDLValidationError(ProjectSyncError):
    """A declared name or default cannot be embedded in DDL."""

    def __init__(self, table_name: str | None, reason: str):
        super().__init__(
            code=ErrorCode.DDL_VALIDATION_FAILED,
            message=f"Invalid definition for table {table_name}: {reason}",
            details={"table_name": table_name}
        )


class SchemaProbeError(ProjectSyncError):
    """Catalog existence check failed."""

    def __init__(self, table_name: str, message: str):
        super().__init__(
            code=ErrorCode.SCHEMA_PROBE_FAILED,
            message=message,
            details={"table_name": table_name}
        )
