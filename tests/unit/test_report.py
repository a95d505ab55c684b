"""Tests for report export and Rich rendering."""

from __future__ import annotations

import json

from rich.console import Console

from envsync.core.drift_engine import build_report
from envsync.models.drift import DriftCategory, Severity
from envsync.models.sync import SyncAction, SyncResult
from envsync.report.exporter import export_report_json, save_report
from envsync.report.renderer import ReportRenderer


def _recording_console():
    return Console(record=True, width=200, force_terminal=False)


class TestExporter:
    def test_export_document_shape(self, make_drift, make_report):
        report = make_report(
            [make_drift(), make_drift(DriftCategory.RUNTIME, Severity.CRITICAL, "platform")]
        )
        doc = json.loads(export_report_json(report))
        assert set(doc) == {"hasDrift", "severity", "drifts", "summary"}
        assert doc["hasDrift"] is True
        assert doc["severity"] == "critical"
        assert doc["drifts"][0]["category"] == "dependency"
        assert doc["summary"]["byCategory"]["runtime"] == 1
        assert doc["summary"]["total"] == 2

    def test_export_clean_report(self, snapshot):
        doc = json.loads(export_report_json(build_report(snapshot, snapshot)))
        assert doc == {
            "hasDrift": False,
            "severity": "none",
            "drifts": [],
            "summary": {
                "total": 0,
                "critical": 0,
                "high": 0,
                "medium": 0,
                "low": 0,
                "byCategory": {c.value: 0 for c in DriftCategory},
            },
        }

    def test_absent_sides_exported_as_null(self, make_drift, make_report):
        report = make_report([make_drift(remote=None)])
        doc = json.loads(export_report_json(report))
        assert doc["drifts"][0]["remote"] is None

    def test_save_report(self, make_drift, make_report, tmp_path):
        path = save_report(make_report([make_drift()]), tmp_path / "out" / "report.json")
        assert json.loads(path.read_text(encoding="utf-8"))["severity"] == "low"


class TestRenderer:
    def test_snapshot_panel(self, rich_snapshot):
        console = _recording_console()
        console.print(ReportRenderer(console).snapshot_panel(rich_snapshot))
        text = console.export_text()
        assert "v18.0.0" in text
        assert rich_snapshot.hash in text
        assert "1 redacted" in text

    def test_report_detailed(self, make_drift, make_report):
        console = _recording_console()
        report = make_report([make_drift(remote=None)])
        ReportRenderer(console).print_report(report, detailed=True)
        text = console.export_text()
        assert "Drift Summary" in text
        assert "dependency.lodash" in text
        assert "(absent)" in text

    def test_report_summary_only(self, make_drift, make_report):
        console = _recording_console()
        ReportRenderer(console).print_report(make_report([make_drift()]))
        assert "dependency.lodash" not in console.export_text()

    def test_sync_result(self, make_drift):
        drift = make_drift()
        result = SyncResult.from_actions(
            [SyncAction(drift=drift, success=False, error="npm exploded")],
            rollback_point=".envsync/rollback-1.json",
        )
        console = _recording_console()
        ReportRenderer(console).print_sync_result(result)
        text = console.export_text()
        assert "FAILED" in text
        assert "npm exploded" in text
        assert "0 succeeded, 1 failed of 1" in text
        assert "rollback-1.json" in text

    def test_field_column_never_wraps(self, make_drift):
        table = ReportRenderer(_recording_console()).drift_table([make_drift()])
        [field] = [c for c in table.columns if c.header == "Field"]
        assert field.no_wrap
