"""End-to-end integration tests: capture -> persist -> compare -> sync.

These tests exercise the SnapshotAssembler, the persisted snapshot document,
the drift engine, report export and the SyncOrchestrator working together.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from envsync.capture import CollectorSet, StaticCollector
from envsync.capture.dependencies import DependencyCollector
from envsync.capture.envvars import EnvVarCollector
from envsync.core.assembler import SnapshotAssembler, load_snapshot, save_snapshot
from envsync.core.drift_engine import build_report
from envsync.models.drift import DriftCategory, Severity
from envsync.models.snapshot import ContainerState, EnvironmentTag, SystemInfo
from envsync.models.sync import SyncOptions
from envsync.report.exporter import export_report_json
from envsync.sync.orchestrator import SyncOrchestrator
from envsync.sync.rollback import list_rollback_points


class TestDependencyScenario:
    """Local pins lodash 4.17.20; remote runs lodash 4.17.21 plus express 5.0.0."""

    @pytest.fixture
    def report(self, make_snapshot):
        local = make_snapshot(production={"lodash": "4.17.20"})
        remote = make_snapshot(
            production={"lodash": "4.17.21", "express": "5.0.0"},
            environment=EnvironmentTag.PRODUCTION,
        )
        return build_report(local, remote)

    def test_two_drifts_overall_high(self, report):
        assert report.summary.total == 2
        assert report.severity is Severity.HIGH
        by_field = {d.field: d for d in report.drifts}
        assert by_field["dependency.lodash"].severity is Severity.LOW
        assert by_field["dependency.express"].severity is Severity.HIGH
        assert by_field["dependency.express"].local is None

    def test_sync_installs_both(self, report, tools, tmp_path):
        result = SyncOrchestrator(tools, rollback_dir=tmp_path).sync(
            report, SyncOptions(auto_fix=True)
        )
        assert sorted(tools.calls) == [
            ("install", "express", "5.0.0"),
            ("install", "lodash", "4.17.21"),
        ]
        assert result.success
        [point] = list_rollback_points(tmp_path)
        assert load_snapshot(point) == report.local_snapshot

    def test_export_matches_report(self, report):
        doc = json.loads(export_report_json(report))
        assert doc["severity"] == "high"
        assert doc["summary"]["high"] == 1
        assert doc["summary"]["low"] == 1


class TestCaptureToSync:
    """A project on disk captured, saved, reloaded, compared and synced."""

    @pytest.fixture
    def project(self, tmp_path: Path) -> Path:
        root = tmp_path / "app"
        root.mkdir()
        (root / "package.json").write_text(
            json.dumps({"dependencies": {"express": "4.18.2"}}), encoding="utf-8"
        )
        (root / "package-lock.json").write_text('{"lockfileVersion": 3}', encoding="utf-8")
        return root

    def _collectors(self, project, make_runtime, environ):
        return CollectorSet(
            runtime=StaticCollector("runtime", make_runtime()),
            dependencies=DependencyCollector(project, include_native_modules=False),
            env_vars=EnvVarCollector(environ),
            container=StaticCollector("container", ContainerState()),
            system=StaticCollector("system", SystemInfo(platform="linux", arch="x64")),
        )

    def test_round_trip_through_disk(self, project, make_runtime, tmp_path):
        assembler = SnapshotAssembler(
            self._collectors(project, make_runtime, {"NODE_ENV": "production", "API_KEY": "k"}),
            environ={"NODE_ENV": "production"},
        )
        snapshot = assembler.assemble()
        assert snapshot.environment is EnvironmentTag.PRODUCTION
        assert snapshot.env_vars.redacted == ["API_KEY"]

        path = save_snapshot(snapshot, tmp_path / "production.snapshot.json")
        restored = load_snapshot(path)
        assert restored == snapshot
        assert build_report(restored, snapshot).has_drift is False

    def test_drift_and_dry_run(self, project, make_runtime, tools, tmp_path):
        remote = SnapshotAssembler(
            self._collectors(project, make_runtime, {"API_KEY": "remote", "PORT": "8080"})
        ).assemble(EnvironmentTag.PRODUCTION)

        (project / "package.json").write_text(
            json.dumps({"dependencies": {"express": "4.17.1"}}), encoding="utf-8"
        )
        local = SnapshotAssembler(
            self._collectors(project, make_runtime, {"API_KEY": "local"})
        ).assemble(EnvironmentTag.LOCAL)

        report = build_report(local, remote)
        fields = {d.field: d for d in report.drifts}
        assert fields["dependency.express"].severity is Severity.MEDIUM
        assert fields["env.PORT"].severity is Severity.HIGH
        assert "env.API_KEY" not in fields

        result = SyncOrchestrator(tools, rollback_dir=tmp_path / "rb").sync(
            report, SyncOptions(dry_run=True)
        )
        assert tools.calls == []
        assert [a.drift.category for a in result.actions] == [
            DriftCategory.DEPENDENCY,
            DriftCategory.ENVVAR,
        ]
        assert list_rollback_points(tmp_path / "rb") == []
