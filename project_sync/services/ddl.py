"""DDL generation for declared project tables."""

import logging
import re
from typing import Optional

import sqlglot
from sqlglot import exp
from sqlglot.errors import SqlglotError

from project_sync.models.project import FieldDefinition, TableDefinition
from project_sync.utils.exceptions import DDLValidationError

logger = logging.getLogger("ddl-generator")

# Logical field types accepted in Project_Tables.field_definitions
TYPE_MAPPING: dict[str, str] = {
    "text": "VARCHAR(255)",
    "varchar": "VARCHAR(255)",
    "string": "VARCHAR(255)",
    "number": "INTEGER",
    "integer": "INTEGER",
    "int": "INTEGER",
    "decimal": "NUMERIC(14,2)",
    "numeric": "NUMERIC(14,2)",
    "boolean": "BOOLEAN",
    "bool": "BOOLEAN",
    "date": "DATE",
    "datetime": "TIMESTAMPTZ",
    "timestamp": "TIMESTAMPTZ",
    "json": "JSONB",
    "jsonb": "JSONB",
    "lookup": "BIGINT",
    "reference": "BIGINT",
}

DEFAULT_COLUMN_TYPE = "VARCHAR(255)"

AUDIT_COLUMNS: list[tuple[str, str]] = [
    ("Created_By", "VARCHAR(255)"),
    ("Created_At", "TIMESTAMPTZ NOT NULL DEFAULT now()"),
    ("Updated_By", "VARCHAR(255)"),
    ("Updated_At", "TIMESTAMPTZ NOT NULL DEFAULT now()"),
]

NOT_NULL_MARKERS = ("not null", "required")


def map_data_type(data_type: Optional[str]) -> str:
    """Map a logical field type to a PostgreSQL column type.

    Args:
        data_type: Type name as entered by the user, any case.

    Returns:
        The column type; unknown or empty input maps to VARCHAR(255).
    """
    normalized = (data_type or "text").strip().lower()
    return TYPE_MAPPING.get(normalized, DEFAULT_COLUMN_TYPE)


class DDLGenerator:
    """Builds CREATE TABLE statements from Project_Tables metadata.

    DDL cannot carry bind parameters for identifiers, so names and defaults
    are interpolated. With ``strict_identifiers`` enabled every interpolated
    name must be a plain identifier and every default a single scalar
    expression; anything else raises DDLValidationError.
    """

    IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
    MAX_IDENTIFIER_LENGTH = 63

    def __init__(
        self,
        strict_identifiers: bool = True,
        project_table: str = "Project"
    ):
        """Initialize the generator.

        Args:
            strict_identifiers: Validate names and defaults before use.
            project_table: Table referenced by the Project_ID foreign key.
        """
        self.strict_identifiers = strict_identifiers
        self.project_table = project_table

    def generate_table_sql(
        self,
        table_def: TableDefinition,
        project_id: int
    ) -> Optional[str]:
        """Generate the DDL script creating a declared table.

        Args:
            table_def: The declared table.
            project_id: Owning project, referenced in the table comment.

        Returns:
            The DDL script, or None when the table has no name.

        Raises:
            DDLValidationError: If the field definitions could not be decoded,
                or strict checks reject a name or default.
        """
        table_name = table_def.table_name
        if not table_name:
            return None

        parent = table_def.parent_table or None
        self._check_identifier(table_name, table_name)
        if table_def.field_definitions_error:
            raise DDLValidationError(
                table_name,
                f"field definitions could not be decoded: {table_def.field_definitions_error}"
            )
        if parent:
            self._check_identifier(table_name, parent)

        columns = ["ID BIGSERIAL PRIMARY KEY"]
        for field in table_def.field_definitions:
            if not field.field_name:
                continue
            columns.append(self._column_sql(table_name, field))

        if parent:
            columns.append(
                f"{parent}_ID BIGINT REFERENCES {parent}(ID) ON DELETE CASCADE"
            )
        columns.append(
            f"Project_ID BIGINT REFERENCES {self.project_table}(ID) ON DELETE CASCADE"
        )
        columns.extend(f"{name} {definition}" for name, definition in AUDIT_COLUMNS)

        lines = [f"CREATE TABLE IF NOT EXISTS {table_name} ("]
        lines.append(",\n".join(f"    {column}" for column in columns))
        lines.append(");")
        lines.append(
            f"COMMENT ON TABLE {table_name} IS 'Auto-generated table for project "
            f"{project_id} based on Project_Tables metadata.';"
        )

        index_prefix = f"idx_{table_name.lower()}"
        lines.append(
            f"CREATE INDEX IF NOT EXISTS {index_prefix}_project "
            f"ON {table_name}(Project_ID);"
        )
        if parent:
            lines.append(
                f"CREATE INDEX IF NOT EXISTS {index_prefix}_parent "
                f"ON {table_name}({parent}_ID);"
            )

        return "\n".join(lines) + "\n"

    def _column_sql(self, table_name: str, field: FieldDefinition) -> str:
        """Render one declared field as a column definition."""
        self._check_identifier(table_name, field.field_name)

        column = f"{field.field_name} {map_data_type(field.data_type)}"

        constraints = (field.constraints or "").lower()
        if any(marker in constraints for marker in NOT_NULL_MARKERS):
            column += " NOT NULL"

        default_value = (field.default_value or "").strip()
        if default_value:
            self._check_default(table_name, default_value)
            column += f" DEFAULT {default_value}"

        return column

    def _check_identifier(self, table_name: str, name: str) -> None:
        """Reject names that are not plain SQL identifiers."""
        if not self.strict_identifiers:
            return
        if len(name) > self.MAX_IDENTIFIER_LENGTH:
            raise DDLValidationError(
                table_name,
                f"identifier longer than {self.MAX_IDENTIFIER_LENGTH} characters: {name}"
            )
        if not self.IDENTIFIER_PATTERN.match(name):
            raise DDLValidationError(table_name, f"invalid identifier: {name!r}")

    def _check_default(self, table_name: str, default_value: str) -> None:
        """Reject defaults that are not a single scalar expression."""
        if not self.strict_identifiers:
            return
        if ";" in default_value:
            raise DDLValidationError(
                table_name,
                f"default contains a statement separator: {default_value!r}"
            )
        if "--" in default_value or "/*" in default_value:
            raise DDLValidationError(
                table_name,
                f"default contains a comment: {default_value!r}"
            )

        try:
            statements = sqlglot.parse(f"SELECT {default_value}", read="postgres")
        except SqlglotError as e:
            raise DDLValidationError(
                table_name,
                f"default is not a valid expression: {default_value!r}"
            ) from e

        if len(statements) != 1 or not isinstance(statements[0], exp.Select):
            raise DDLValidationError(
                table_name,
                f"default is not a single expression: {default_value!r}"
            )

        select = statements[0]
        extra_clauses = [
            key for key, value in select.args.items()
            if key != "expressions" and value
        ]
        if len(select.expressions) != 1 or extra_clauses:
            raise DDLValidationError(
                table_name,
                f"default is not a single expression: {default_value!r}"
            )
        if select.expressions[0].find(exp.Select, exp.Subquery) is not None:
            raise DDLValidationError(
                table_name,
                f"default must not contain a subquery: {default_value!r}"
            )
        logger.debug("Accepted default for %s: %s", table_name, default_value)
