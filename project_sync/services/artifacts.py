"""Scaffolding artifact planning and detection."""

import logging
from pathlib import Path, PurePosixPath
from typing import Iterable

from project_sync.models.project import (
    MenuDefinition,
    ReportDefinition,
    TableDefinition,
)
from project_sync.models.sync import (
    MissingArtifact,
    MissingArtifactReport,
    MissingRoute,
    ScaffoldTemplate,
)
from project_sync.utils.constants import PAGES_DIR, ROUTES_FILE, SERVICES_DIR
from project_sync.utils.naming import to_camel_case, to_kebab_case, to_pascal_case

logger = logging.getLogger("artifact-detector")


def _components_dir(project_name: str) -> PurePosixPath:
    return PurePosixPath(*PAGES_DIR, project_name, "components")


def table_component_template(table_def: TableDefinition, project_name: str) -> ScaffoldTemplate:
    """Plan the table-view component for a declared table."""
    name = f"{to_pascal_case(table_def.table_name)}Table"
    return ScaffoldTemplate(
        name=name,
        path=str(_components_dir(project_name) / f"{name}.jsx"),
        template=(
            f"// Auto-generated table component for {table_def.table_name}\n"
            f"// Lists {to_camel_case(table_def.table_name)}Service records "
            f"with create, edit and delete actions\n"
        )
    )


def modal_component_template(table_def: TableDefinition, project_name: str) -> ScaffoldTemplate:
    """Plan the create/edit modal for a declared table."""
    name = f"{to_pascal_case(table_def.table_name)}Modal"
    fields = ", ".join(
        field.field_name for field in table_def.field_definitions if field.field_name
    )
    return ScaffoldTemplate(
        name=name,
        path=str(_components_dir(project_name) / f"{name}.jsx"),
        template=(
            f"// Auto-generated modal component for {table_def.table_name}\n"
            f"// Form fields: {fields or 'none declared'}\n"
        )
    )


def service_file_template(table_def: TableDefinition) -> ScaffoldTemplate:
    """Plan the API service module for a declared table."""
    name = f"{to_camel_case(table_def.table_name)}Service"
    return ScaffoldTemplate(
        name=name,
        path=str(PurePosixPath(*SERVICES_DIR) / f"{name}.js"),
        template=(
            f"// Auto-generated service for {table_def.table_name}\n"
            f"// getAll, getById, create, update and delete API calls\n"
        )
    )


def report_component_template(report: ReportDefinition, project_name: str) -> ScaffoldTemplate:
    """Plan the report-view component for a declared report."""
    name = f"{to_pascal_case(report.report_name)}Report"
    return ScaffoldTemplate(
        name=name,
        path=str(_components_dir(project_name) / f"{name}.jsx"),
        template=f"// Auto-generated report component for {report.report_name}\n"
    )


class ArtifactDetector:
    """Checks the workspace for the scaffolding each declaration implies.

    Detection only: nothing is ever written below ``workspace_root``.
    """

    def __init__(self, workspace_root: Path):
        """Initialize the detector.

        Args:
            workspace_root: Directory holding the front-end ``src`` tree.
        """
        self.workspace_root = Path(workspace_root)

    def exists(self, relative_path: str) -> bool:
        """Check whether a workspace-relative path exists."""
        return (self.workspace_root / relative_path).exists()

    def detect_missing_components(
        self,
        tables: Iterable[TableDefinition],
        reports: Iterable[ReportDefinition],
        project_name: str
    ) -> MissingArtifactReport:
        """Find table, modal, service and report artifacts not on disk.

        Args:
            tables: Declared tables.
            reports: Declared reports.
            project_name: PascalCased project directory name.

        Returns:
            The missing artifacts grouped by kind.
        """
        missing = MissingArtifactReport()

        for table in tables or []:
            if not table.table_name:
                continue
            planned = [
                (missing.tables, table_component_template(table, project_name)),
                (missing.modals, modal_component_template(table, project_name)),
                (missing.services, service_file_template(table)),
            ]
            for bucket, template in planned:
                if not self.exists(template.path):
                    bucket.append(MissingArtifact(
                        source_name=table.table_name,
                        artifact_name=template.name,
                        path=template.path
                    ))

        for report in reports or []:
            if not report.report_name:
                continue
            template = report_component_template(report, project_name)
            if not self.exists(template.path):
                missing.reports.append(MissingArtifact(
                    source_name=report.report_name,
                    artifact_name=template.name,
                    path=template.path
                ))

        return missing

    def detect_missing_routes(
        self,
        menus: Iterable[MenuDefinition],
        project_name: str
    ) -> list[MissingRoute]:
        """List a route candidate for every declared menu.

        The router file is not parsed, so when it exists every named menu is
        reported; when it does not exist nothing is reported.

        Args:
            menus: Declared menus.
            project_name: PascalCased project directory name.

        Returns:
            Route candidates in menu order.
        """
        routes_file = str(PurePosixPath(*ROUTES_FILE))
        if not self.exists(routes_file):
            logger.info("No routes file at %s, skipping route detection", routes_file)
            return []

        # TODO: parse src/routes/index.jsx and drop menus whose path is already registered
        missing = []
        for menu in menus or []:
            if not menu.menu_name:
                continue
            component_path = PurePosixPath(
                *PAGES_DIR, project_name, f"{to_pascal_case(menu.menu_name)}.jsx"
            )
            missing.append(MissingRoute(
                menu_name=menu.menu_name,
                route_path=f"/{to_kebab_case(menu.menu_name)}",
                component_path=str(component_path)
            ))
        return missing
