"""Shared test fixtures for envsync."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

import pytest

from envsync.core.aggregator import overall_severity, summarize
from envsync.core.assembler import build_snapshot
from envsync.models.drift import Drift, DriftCategory, DriftReport, Severity
from envsync.models.snapshot import (
    ContainerImage,
    ContainerState,
    DependencySet,
    EnvironmentTag,
    EnvVarSet,
    NativeBinaryArtifact,
    RuntimeInfo,
    Snapshot,
    SystemInfo,
)

FIXED_TIME = datetime(2026, 3, 14, 9, 26, 53, 589793, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Fragment builders
# ---------------------------------------------------------------------------


def runtime_info(**overrides: Any) -> RuntimeInfo:
    defaults: dict[str, Any] = {
        "version": "v18.0.0",
        "npm_version": "9.0.0",
        "platform": "darwin",
        "arch": "x64",
        "v8_version": "10.2.154.26",
        "modules": "108",
        "openssl": "3.0.0",
    }
    defaults.update(overrides)
    return RuntimeInfo(**defaults)


def native_artifact(name: str = "bcrypt", **overrides: Any) -> NativeBinaryArtifact:
    defaults: dict[str, Any] = {
        "name": name,
        "path": f"/app/node_modules/{name}/build/Release/addon.node",
        "platform": "darwin",
        "arch": "x64",
        "abi": "108",
        "size": 104_448,
        "modified": FIXED_TIME,
    }
    defaults.update(overrides)
    return NativeBinaryArtifact(**defaults)


# ---------------------------------------------------------------------------
# Snapshot factories
# ---------------------------------------------------------------------------


@pytest.fixture
def make_snapshot() -> Callable[..., Snapshot]:
    """Factory fixture: an assembled Snapshot with sensible defaults.

    ``production``, ``development``, ``lockfile_hash``, ``native``,
    ``variables`` and ``redacted`` are shortcuts into the dependency and
    env-var fragments; any other keyword replaces a whole fragment.
    """

    def _factory(
        *,
        production: dict[str, str] | None = None,
        development: dict[str, str] | None = None,
        lockfile_hash: str = "abc123def4567890",
        native: list[NativeBinaryArtifact] | None = None,
        variables: dict[str, str] | None = None,
        redacted: list[str] | None = None,
        **fragments: Any,
    ) -> Snapshot:
        defaults: dict[str, Any] = {
            "runtime": runtime_info(),
            "dependencies": DependencySet(
                production=production or {},
                development=development or {},
                lockfile_hash=lockfile_hash,
                native_artifacts=native or [],
            ),
            "env_vars": EnvVarSet(variables=variables or {}, redacted=redacted or []),
            "container": ContainerState(),
            "system": SystemInfo(
                platform="darwin",
                arch="x64",
                cpus=8,
                total_memory=16_000_000_000,
                free_memory=8_000_000_000,
                hostname="localhost",
            ),
            "environment": EnvironmentTag.LOCAL,
            "timestamp": FIXED_TIME,
        }
        defaults.update(fragments)
        return build_snapshot(**defaults)

    return _factory


@pytest.fixture
def snapshot(make_snapshot: Callable[..., Snapshot]) -> Snapshot:
    """Convenience: a ready-made snapshot with test defaults."""
    return make_snapshot()


@pytest.fixture
def rich_snapshot(make_snapshot: Callable[..., Snapshot]) -> Snapshot:
    """A snapshot exercising every fragment, including date-typed fields."""
    return make_snapshot(
        production={"express": "4.18.2", "lodash": "^4.17.21"},
        development={"vitest": "1.2.0"},
        native=[native_artifact("bcrypt"), native_artifact("@node-rs/argon2")],
        variables={"NODE_ENV": "development", "API_TOKEN": "[REDACTED]"},
        redacted=["API_TOKEN"],
        container=ContainerState(
            version="24.0.7",
            platform="linux",
            arch="amd64",
            images=[
                ContainerImage(
                    id="0123456789ab",
                    tags=["node:18-alpine"],
                    size=181_000_000,
                    created=FIXED_TIME,
                ),
                ContainerImage(id="ba9876543210", tags=["redis:7"], size=130_000_000),
            ],
        ),
    )


# ---------------------------------------------------------------------------
# Drift and report factories
# ---------------------------------------------------------------------------


@pytest.fixture
def make_drift() -> Callable[..., Drift]:
    """Factory fixture: build a Drift with sensible defaults."""

    def _factory(
        category: DriftCategory = DriftCategory.DEPENDENCY,
        severity: Severity = Severity.LOW,
        field: str = "dependency.lodash",
        **overrides: Any,
    ) -> Drift:
        defaults: dict[str, Any] = {
            "category": category,
            "severity": severity,
            "field": field,
            "local": "4.17.20",
            "remote": "4.17.21",
            "impact": "test impact",
            "recommendation": "test recommendation",
        }
        defaults.update(overrides)
        return Drift(**defaults)

    return _factory


@pytest.fixture
def make_report(snapshot: Snapshot) -> Callable[[list[Drift]], DriftReport]:
    """Factory fixture: a DriftReport wrapping an explicit drift list."""

    def _factory(drifts: list[Drift]) -> DriftReport:
        return DriftReport(
            has_drift=bool(drifts),
            severity=overall_severity(drifts),
            drifts=drifts,
            summary=summarize(drifts),
            local_snapshot=snapshot,
            remote_snapshot=snapshot,
        )

    return _factory


# ---------------------------------------------------------------------------
# Tool backend double
# ---------------------------------------------------------------------------


class RecordingTools:
    """RemediationTools double that records calls and fails on request.

    A call fails when its verb (``install``, ``pull``...) or its last
    argument is listed in *fail_on*.
    """

    def __init__(self, fail_on: set[str] | None = None) -> None:
        self.calls: list[tuple[str, ...]] = []
        self._fail_on = fail_on or set()

    def _record(self, *call: str) -> None:
        self.calls.append(call)
        if call[0] in self._fail_on or call[-1] in self._fail_on:
            raise RuntimeError(f"simulated failure: {' '.join(call)}")

    def install_package(self, name: str, version: str) -> None:
        self._record("install", name, version)

    def remove_package(self, name: str) -> None:
        self._record("remove", name)

    def pull_image(self, reference: str) -> None:
        self._record("pull", reference)

    def rebuild_artifact(self, name: str) -> None:
        self._record("rebuild", name)


@pytest.fixture
def tools() -> RecordingTools:
    return RecordingTools()


@pytest.fixture
def make_runtime() -> Callable[..., RuntimeInfo]:
    return runtime_info


@pytest.fixture
def make_artifact() -> Callable[..., NativeBinaryArtifact]:
    return native_artifact


@pytest.fixture
def make_tools() -> Callable[..., RecordingTools]:
    """Factory fixture: a RecordingTools that fails on the given verbs or targets."""

    def _factory(*fail_on: str) -> RecordingTools:
        return RecordingTools(set(fail_on))

    return _factory
