"""Reconciliation result models."""

from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from project_sync.models.project import TableDefinition


class TableResultStatus(str, Enum):
    """Outcome of one table creation attempt."""

    CREATED = "created"
    ERROR = "error"


class MissingTableResult(BaseModel):
    """Outcome of creating one declared-but-absent table."""

    table_name: str
    status: TableResultStatus
    sql: Optional[str] = None
    error: Optional[str] = None


class MissingArtifact(BaseModel):
    """A scaffolding artifact expected on disk but not found."""

    source_name: str
    artifact_name: str
    path: str


class MissingArtifactReport(BaseModel):
    """Missing scaffolding artifacts grouped by kind."""

    tables: list[MissingArtifact] = Field(default_factory=list)
    reports: list[MissingArtifact] = Field(default_factory=list)
    modals: list[MissingArtifact] = Field(default_factory=list)
    services: list[MissingArtifact] = Field(default_factory=list)


class ScaffoldTemplate(BaseModel):
    """Name, location and placeholder body of a scaffolding artifact."""

    name: str
    path: str
    template: str


class MissingRoute(BaseModel):
    """A route candidate for a declared menu."""

    menu_name: str
    route_path: str
    component_path: str


class AnalysisResult(BaseModel):
    """Read-only reconciliation report for a project snapshot."""

    project_id: int
    project_name: Optional[str] = None
    missing_tables: list[TableDefinition] = Field(default_factory=list)
    missing_components: MissingArtifactReport = Field(
        default_factory=MissingArtifactReport
    )
    missing_routes: list[MissingRoute] = Field(default_factory=list)
    missing_menus: list[dict] = Field(default_factory=list)
    missing_rbac: list[dict] = Field(default_factory=list)


class SyncOptions(BaseModel):
    """Which generation steps a sync performs."""

    model_config = ConfigDict(populate_by_name=True)

    generate_db_tables: bool = Field(default=True, alias="generateDBTables")
    generate_components: bool = Field(default=False, alias="generateComponents")
    generate_routes: bool = Field(default=False, alias="generateRoutes")


class SyncError(BaseModel):
    """A failure recorded during the creation phase."""

    type: Literal["table", "table_generation"]
    table_name: Optional[str] = None
    error: str


class NotPerformed(BaseModel):
    """A requested generation step that has no implementation."""

    type: Literal["components", "routes"]
    reason: Literal["not_implemented"] = "not_implemented"


class SyncResults(BaseModel):
    """Side effects of a sync run."""

    tables_created: list[MissingTableResult] = Field(default_factory=list)
    components_created: list[dict] = Field(default_factory=list)
    routes_created: list[dict] = Field(default_factory=list)
    errors: list[SyncError] = Field(default_factory=list)
    not_performed: list[NotPerformed] = Field(default_factory=list)


class SyncResult(BaseModel):
    """Analysis plus the results of acting on it."""

    analysis: AnalysisResult
    results: SyncResults
