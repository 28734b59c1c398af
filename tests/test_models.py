"""Tests for data models."""

import json

import pytest
from pydantic import ValidationError

from project_sync.models.project import (
    TableDefinition,
    TableStatus,
    RoleMenuAccess,
    ProjectSnapshot,
)
from project_sync.models.sync import (
    MissingTableResult,
    SyncOptions,
    SyncResults,
    TableResultStatus,
)
from project_sync.utils.constants import ErrorCode
from project_sync.utils.exceptions import (
    DDLValidationError,
    InvalidProjectError,
    ProjectNotFoundError,
)


class TestProjectModels:
    """Project metadata model tests."""

    def test_field_definitions_from_json_text(self):
        """Test field definitions stored as JSON text are decoded."""
        table = TableDefinition(
            table_name="Invoice",
            field_definitions=json.dumps([
                {"field_name": "amount", "data_type": "decimal", "constraints": "required"}
            ])
        )
        assert len(table.field_definitions) == 1
        assert table.field_definitions[0].field_name == "amount"
        assert table.field_definitions[0].data_type == "decimal"

    def test_empty_field_definitions(self):
        """Test missing field definitions decode to an empty list."""
        assert TableDefinition(table_name="A", field_definitions=None).field_definitions == []
        assert TableDefinition(table_name="A", field_definitions="").field_definitions == []

    @pytest.mark.parametrize("raw,message", [
        ("{not json", "Expecting property name"),
        ('{"field_name": "a"}', "JSON array"),
        ('["amount"]', "FieldDefinition"),
    ])
    def test_malformed_field_definitions_kept_as_error(self, raw, message):
        """Test undecodable field definitions do not fail validation."""
        table = TableDefinition(table_name="A", field_definitions=raw)
        assert table.field_definitions == []
        assert message in table.field_definitions_error

    def test_decode_error_survives_json_round_trip(self):
        """Test a cached table keeps its decode error."""
        table = TableDefinition(table_name="A", field_definitions="{not json")
        restored = TableDefinition.model_validate(table.model_dump(mode="json"))
        assert restored.field_definitions_error == table.field_definitions_error

    def test_status_defaults_to_in_progress(self):
        """Test null status from the database becomes In progress."""
        table = TableDefinition(table_name="A", status=None)
        assert table.status == TableStatus.IN_PROGRESS

    def test_unknown_status_rejected(self):
        """Test status outside the workflow vocabulary is rejected."""
        with pytest.raises(ValidationError):
            TableDefinition(table_name="A", status="Archived")

    def test_extra_row_columns_ignored(self):
        """Test database rows with extra columns validate."""
        table = TableDefinition.model_validate({
            "id": 4,
            "table_name": "A",
            "project_id": 1,
            "created_by": "admin",
        })
        assert table.id == 4
        assert not hasattr(table, "project_id")

    def test_numeric_default_value_stringified(self):
        """Test a numeric default from JSON is kept as SQL text."""
        table = TableDefinition(
            table_name="A",
            field_definitions=[{"field_name": "qty", "default_value": 0}]
        )
        assert table.field_definitions[0].default_value == "0"

    def test_access_matrix_decoded(self):
        """Test role-menu access matrix stored as JSON text."""
        access = RoleMenuAccess(role_id=1, menu_id=2, access='{"view": true}')
        assert access.access == {"view": True}

    def test_malformed_access_matrix_kept_raw(self):
        """Test an undecodable access matrix is kept as stored."""
        access = RoleMenuAccess(role_id=1, menu_id=2, access="{view")
        assert access.access == "{view"

    def test_snapshot_accepts_camel_case_access(self):
        """Test the roleMenuAccess key used by the API payload."""
        snapshot = ProjectSnapshot.model_validate({
            "project": {"id": 1, "project_name": "Billing"},
            "roleMenuAccess": [{"role_id": 1, "menu_id": 1}],
        })
        assert len(snapshot.role_menu_access) == 1
        assert snapshot.tables == []


class TestSyncModels:
    """Sync result model tests."""

    def test_sync_options_defaults(self):
        """Test default options create tables only."""
        options = SyncOptions()
        assert options.generate_db_tables is True
        assert options.generate_components is False
        assert options.generate_routes is False

    def test_sync_options_camel_case(self):
        """Test the option names used by the admin console."""
        options = SyncOptions.model_validate({
            "generateDBTables": False,
            "generateComponents": True,
        })
        assert options.generate_db_tables is False
        assert options.generate_components is True
        assert options.generate_routes is False

    def test_table_result_json_dump(self):
        """Test result status serializes to its string value."""
        result = MissingTableResult(
            table_name="A",
            status=TableResultStatus.CREATED,
            sql="CREATE TABLE ..."
        )
        assert result.model_dump(mode="json")["status"] == "created"

    def test_empty_results(self):
        """Test a fresh result has empty lists."""
        results = SyncResults()
        assert results.tables_created == []
        assert results.components_created == []
        assert results.routes_created == []
        assert results.errors == []
        assert results.not_performed == []


class TestExceptions:
    """Exception payload tests."""

    def test_invalid_project_to_dict(self):
        """Test error payload shape."""
        payload = InvalidProjectError().to_dict()
        assert payload["status"] == "error"
        assert payload["error"]["code"] == ErrorCode.INVALID_PROJECT.value
        assert payload["error"]["message"] == "Project ID is required"

    def test_project_not_found_details(self):
        """Test the missing id is carried in details."""
        error = ProjectNotFoundError(42)
        assert error.details == {"project_id": 42}

    def test_ddl_validation_message(self):
        """Test the table name appears in the message."""
        error = DDLValidationError("Invoice", "invalid identifier: 'a b'")
        assert "Invoice" in str(error)
        assert error.code == ErrorCode.DDL_VALIDATION_FAILED
