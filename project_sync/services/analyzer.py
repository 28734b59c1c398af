"""Project analysis and sync orchestration."""

import logging
from typing import Any, Optional, Union

from project_sync.models.project import ProjectSnapshot
from project_sync.models.sync import (
    AnalysisResult,
    NotPerformed,
    SyncError,
    SyncOptions,
    SyncResult,
    SyncResults,
    TableResultStatus,
)
from project_sync.services.artifacts import ArtifactDetector
from project_sync.services.reconciler import TableReconciler
from project_sync.utils.constants import DEFAULT_PROJECT_NAME
from project_sync.utils.exceptions import InvalidProjectError
from project_sync.utils.naming import to_pascal_case

logger = logging.getLogger("project-analyzer")

SnapshotInput = Union[ProjectSnapshot, dict[str, Any]]


def _as_snapshot(project_data: SnapshotInput) -> ProjectSnapshot:
    if isinstance(project_data, ProjectSnapshot):
        return project_data
    return ProjectSnapshot.model_validate(project_data)


class ProjectAnalyzer:
    """Builds the read-only reconciliation report for a project."""

    def __init__(self, reconciler: TableReconciler, detector: ArtifactDetector):
        """Initialize the analyzer.

        Args:
            reconciler: Missing-table detector.
            detector: Scaffolding artifact detector.
        """
        self.reconciler = reconciler
        self.detector = detector

    async def analyze_project(self, project_data: SnapshotInput) -> AnalysisResult:
        """Report the tables, components and routes a project is missing.

        Args:
            project_data: Project snapshot, as a model or a plain dict.

        Returns:
            The analysis. No database or filesystem writes are made.

        Raises:
            InvalidProjectError: If the snapshot has no project id.
        """
        snapshot = _as_snapshot(project_data)
        project = snapshot.project
        if project is None or not project.id:
            raise InvalidProjectError()

        project_dir = to_pascal_case(project.project_name or DEFAULT_PROJECT_NAME)

        analysis = AnalysisResult(
            project_id=project.id,
            project_name=project.project_name,
            missing_tables=await self.reconciler.detect_missing_tables(snapshot.tables),
            missing_components=self.detector.detect_missing_components(
                snapshot.tables, snapshot.reports, project_dir
            ),
            missing_routes=self.detector.detect_missing_routes(snapshot.menus, project_dir),
        )
        logger.info(
            "Analyzed project %s: %d missing tables, %d route candidates",
            project.id, len(analysis.missing_tables), len(analysis.missing_routes)
        )
        return analysis


class ProjectSyncer:
    """Analyzes a project and creates its missing tables."""

    def __init__(self, analyzer: ProjectAnalyzer, reconciler: TableReconciler):
        """Initialize the syncer.

        Args:
            analyzer: Project analyzer.
            reconciler: Missing-table applier.
        """
        self.analyzer = analyzer
        self.reconciler = reconciler

    async def sync_project(
        self,
        project_data: SnapshotInput,
        options: Optional[Union[SyncOptions, dict[str, Any]]] = None
    ) -> SyncResult:
        """Analyze a project and act on the requested generation steps.

        Failures while creating tables are returned in ``results.errors``
        rather than raised.

        Args:
            project_data: Project snapshot, as a model or a plain dict.
            options: Generation switches; defaults create tables only.

        Returns:
            The analysis and the results of the sync.

        Raises:
            InvalidProjectError: If the snapshot has no project id.
        """
        if options is None:
            options = SyncOptions()
        elif isinstance(options, dict):
            options = SyncOptions.model_validate(options)

        analysis = await self.analyzer.analyze_project(project_data)
        results = SyncResults()

        if options.generate_db_tables and analysis.missing_tables:
            try:
                table_results = await self.reconciler.generate_missing_tables(
                    analysis.missing_tables, analysis.project_id
                )
                results.tables_created = [
                    r for r in table_results if r.status == TableResultStatus.CREATED
                ]
                results.errors.extend(
                    SyncError(type="table", table_name=r.table_name, error=r.error or "")
                    for r in table_results if r.status == TableResultStatus.ERROR
                )
            except Exception as e:
                logger.error("Table generation failed for project %s: %s", analysis.project_id, e)
                results.errors.append(SyncError(type="table_generation", error=str(e)))

        if options.generate_components:
            results.not_performed.append(NotPerformed(type="components"))
        if options.generate_routes:
            results.not_performed.append(NotPerformed(type="routes"))

        return SyncResult(analysis=analysis, results=results)
