"""Project metadata models as stored in the admin console tables."""

import json
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def _decode_json_column(value: Any) -> Any:
    """Decode a JSON text column; empty values become an empty list."""
    if value is None or value == "":
        return []
    if isinstance(value, str):
        return json.loads(value)
    return value


class TableStatus(str, Enum):
    """Workflow marker of a declared table."""

    IN_PROGRESS = "In progress"
    DONE = "Done"
    IN_REVIEW = "In Review"


class RowModel(BaseModel):
    """Base for models built from database rows with extra columns."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class FieldDefinition(RowModel):
    """One column descriptor inside a declared table."""

    field_name: Optional[str] = None
    data_type: Optional[str] = None
    constraints: Optional[str] = None
    default_value: Optional[str] = None

    @field_validator("default_value", mode="before")
    @classmethod
    def _stringify_default(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return value
        return str(value)


def _decode_field_list(value: Any) -> list[FieldDefinition]:
    """Decode field definitions, raising ValueError when they are malformed."""
    items = _decode_json_column(value)
    if not isinstance(items, list):
        raise ValueError(
            f"field definitions must be a JSON array, got {type(items).__name__}"
        )
    return [
        item if isinstance(item, FieldDefinition) else FieldDefinition.model_validate(item)
        for item in items
    ]


class TableDefinition(RowModel):
    """A user-declared description of a table that should exist."""

    id: Optional[int] = None
    table_name: Optional[str] = None
    parent_table: Optional[str] = None
    field_definitions: list[FieldDefinition] = Field(default_factory=list)
    field_definitions_error: Optional[str] = None
    status: TableStatus = TableStatus.IN_PROGRESS

    @model_validator(mode="before")
    @classmethod
    def _decode_fields(cls, data: Any) -> Any:
        # An undecodable column is kept as an error so only this table fails
        if not isinstance(data, dict) or "field_definitions" not in data:
            return data
        data = dict(data)
        try:
            data["field_definitions"] = _decode_field_list(data["field_definitions"])
        except ValueError as e:
            data["field_definitions"] = []
            data["field_definitions_error"] = str(e)
        return data

    @field_validator("status", mode="before")
    @classmethod
    def _default_status(cls, value: Any) -> Any:
        return value or TableStatus.IN_PROGRESS


class ReportDefinition(RowModel):
    """A declared report."""

    id: Optional[int] = None
    report_name: Optional[str] = None


class MenuDefinition(RowModel):
    """A declared navigation menu entry."""

    id: Optional[int] = None
    menu_name: Optional[str] = None
    menu_path: Optional[str] = None
    sort_order: Optional[int] = None


class RoleDefinition(RowModel):
    """A project role."""

    id: Optional[int] = None
    role_name: Optional[str] = None


class RoleMenuAccess(RowModel):
    """Role to menu access mapping with its JSON access matrix."""

    id: Optional[int] = None
    role_id: Optional[int] = None
    menu_id: Optional[int] = None
    access: Any = Field(default_factory=list)

    @field_validator("access", mode="before")
    @classmethod
    def _decode_access(cls, value: Any) -> Any:
        try:
            return _decode_json_column(value)
        except ValueError:
            return value


class ProjectInfo(RowModel):
    """Project identity."""

    id: Optional[int] = None
    project_name: Optional[str] = None
    status: Optional[str] = None


class ProjectSnapshot(RowModel):
    """Aggregate read of a project's related records."""

    project: Optional[ProjectInfo] = None
    tables: list[TableDefinition] = Field(default_factory=list)
    reports: list[ReportDefinition] = Field(default_factory=list)
    menus: list[MenuDefinition] = Field(default_factory=list)
    roles: list[RoleDefinition] = Field(default_factory=list)
    role_menu_access: list[RoleMenuAccess] = Field(
        default_factory=list,
        alias="roleMenuAccess"
    )
    payments: list[dict[str, Any]] = Field(default_factory=list)
    bugs: list[dict[str, Any]] = Field(default_factory=list)


class SummaryMetrics(BaseModel):
    """Counters shown on the project summary page."""

    payment_count: int = 0
    total_payments: float = 0.0
    open_bugs: int = 0
    report_count: int = 0
    attachment_count: int = 0
    table_count: int = 0
    menu_count: int = 0
    access_map_count: int = 0
    role_count: int = 0


class ProjectSummary(BaseModel):
    """Project identity plus summary metrics."""

    project: ProjectInfo
    metrics: SummaryMetrics
