"""Tests for scaffolding artifact planning and detection."""

from project_sync.models.project import MenuDefinition, ReportDefinition, TableDefinition
from project_sync.services.artifacts import (
    modal_component_template,
    report_component_template,
    service_file_template,
    table_component_template,
)


def _touch(root, relative_path):
    path = root / relative_path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("// existing\n")


class TestTemplates:
    """Scaffold template planning tests."""

    def test_table_component(self):
        """Test table-view component name and path."""
        template = table_component_template(TableDefinition(table_name="invoice_lines"), "Billing")
        assert template.name == "InvoiceLinesTable"
        assert template.path == "src/pages/Billing/components/InvoiceLinesTable.jsx"
        assert "invoice_lines" in template.template

    def test_modal_component_lists_fields(self):
        """Test the modal placeholder names the declared fields."""
        table = TableDefinition(
            table_name="invoice_lines",
            field_definitions=[{"field_name": "amount"}, {"field_name": ""}, {"field_name": "sku"}]
        )
        template = modal_component_template(table, "Billing")
        assert template.name == "InvoiceLinesModal"
        assert template.path == "src/pages/Billing/components/InvoiceLinesModal.jsx"
        assert "amount, sku" in template.template

    def test_service_file(self):
        """Test service name and path are camelCased."""
        template = service_file_template(TableDefinition(table_name="invoice_lines"))
        assert template.name == "invoiceLinesService"
        assert template.path == "src/services/invoiceLinesService.js"

    def test_report_component(self):
        """Test report component name and path."""
        template = report_component_template(ReportDefinition(report_name="monthly revenue"), "Billing")
        assert template.name == "MonthlyRevenueReport"
        assert template.path == "src/pages/Billing/components/MonthlyRevenueReport.jsx"


class TestDetectMissingComponents:
    """ArtifactDetector.detect_missing_components tests."""

    def test_everything_missing(self, detector):
        """Test an empty workspace reports every artifact."""
        missing = detector.detect_missing_components(
            [TableDefinition(table_name="invoice")],
            [ReportDefinition(report_name="aging")],
            "Billing"
        )
        assert [a.artifact_name for a in missing.tables] == ["InvoiceTable"]
        assert [a.artifact_name for a in missing.modals] == ["InvoiceModal"]
        assert [a.artifact_name for a in missing.services] == ["invoiceService"]
        assert [a.artifact_name for a in missing.reports] == ["AgingReport"]
        assert missing.tables[0].source_name == "invoice"
        assert missing.tables[0].path == "src/pages/Billing/components/InvoiceTable.jsx"

    def test_existing_files_not_reported(self, detector, workspace):
        """Test artifacts already on disk are omitted."""
        _touch(workspace, "src/pages/Billing/components/InvoiceTable.jsx")
        _touch(workspace, "src/services/invoiceService.js")
        missing = detector.detect_missing_components(
            [TableDefinition(table_name="invoice")], [], "Billing"
        )
        assert missing.tables == []
        assert missing.services == []
        assert [a.artifact_name for a in missing.modals] == ["InvoiceModal"]

    def test_unnamed_declarations_skipped(self, detector):
        """Test tables and reports without names are ignored."""
        missing = detector.detect_missing_components(
            [TableDefinition(table_name=None)],
            [ReportDefinition(report_name="")],
            "Billing"
        )
        assert missing.model_dump() == {"tables": [], "reports": [], "modals": [], "services": []}

    def test_detection_writes_nothing(self, detector, workspace):
        """Test detection leaves the workspace untouched."""
        before = sorted(p for p in workspace.rglob("*"))
        detector.detect_missing_components(
            [TableDefinition(table_name="invoice")],
            [ReportDefinition(report_name="aging")],
            "Billing"
        )
        assert sorted(p for p in workspace.rglob("*")) == before


class TestDetectMissingRoutes:
    """ArtifactDetector.detect_missing_routes tests."""

    def test_no_routes_file(self, detector):
        """Test nothing is reported without a routes file."""
        assert detector.detect_missing_routes([MenuDefinition(menu_name="Invoices")], "Billing") == []

    def test_every_menu_reported(self, detector, workspace):
        """Test each named menu becomes a route candidate."""
        _touch(workspace, "src/routes/index.jsx")
        routes = detector.detect_missing_routes(
            [
                MenuDefinition(menu_name="invoice_list"),
                MenuDefinition(menu_name=None),
                MenuDefinition(menu_name="Payments"),
            ],
            "Billing"
        )
        assert [(r.menu_name, r.route_path, r.component_path) for r in routes] == [
            ("invoice_list", "/invoice-list", "src/pages/Billing/InvoiceList.jsx"),
            ("Payments", "/-payments", "src/pages/Billing/Payments.jsx"),
        ]
