"""Runtime comparison: version, package-manager version, platform, arch."""

from __future__ import annotations

from envsync.core.severity import classify_version_delta
from envsync.models.drift import Drift, DriftCategory, Severity
from envsync.models.snapshot import Snapshot


def compare_runtime(local: Snapshot, remote: Snapshot) -> list[Drift]:
    """Platform and architecture mismatches are always critical.

    Native binaries built for one platform never load on another, so no
    version-distance reasoning applies to them.
    """
    lrt, rrt = local.runtime, remote.runtime
    drifts: list[Drift] = []

    if lrt.version != rrt.version:
        drifts.append(
            Drift(
                category=DriftCategory.RUNTIME,
                severity=classify_version_delta(lrt.version, rrt.version),
                field="nodeVersion",
                local=lrt.version,
                remote=rrt.version,
                impact="Runtime behavior differences, potential API incompatibilities",
                recommendation=f"Update local Node.js to {rrt.version}",
            )
        )

    if lrt.npm_version != rrt.npm_version:
        drifts.append(
            Drift(
                category=DriftCategory.RUNTIME,
                severity=Severity.LOW,
                field="npmVersion",
                local=lrt.npm_version,
                remote=rrt.npm_version,
                impact="Package installation behavior may differ",
                recommendation=f"Update npm to {rrt.npm_version}",
            )
        )

    if lrt.platform != rrt.platform:
        drifts.append(
            Drift(
                category=DriftCategory.RUNTIME,
                severity=Severity.CRITICAL,
                field="platform",
                local=lrt.platform,
                remote=rrt.platform,
                impact="Platform mismatch - native modules will fail",
                recommendation="Ensure platform compatibility or use Docker for consistency",
            )
        )

    if lrt.arch != rrt.arch:
        drifts.append(
            Drift(
                category=DriftCategory.RUNTIME,
                severity=Severity.CRITICAL,
                field="arch",
                local=lrt.arch,
                remote=rrt.arch,
                impact="Architecture mismatch - binaries incompatible",
                recommendation="Ensure architecture compatibility",
            )
        )

    return drifts
