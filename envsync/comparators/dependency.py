"""Dependency comparison: declared packages plus the lockfile fingerprint.

The lockfile is compared as one opaque hash.  Individual transitive
entries are never enumerated; a mismatch yields a single ``lockfile`` drift.
"""

from __future__ import annotations

from envsync.core.severity import classify_version_delta, describe_version_delta
from envsync.models.drift import Drift, DriftCategory, Severity
from envsync.models.snapshot import Snapshot

LOCKFILE_FIELD = "lockfile"
FIELD_PREFIX = "dependency."


def package_field(name: str) -> str:
    return f"{FIELD_PREFIX}{name}"


def package_from_field(field: str) -> str:
    return field.removeprefix(FIELD_PREFIX)


def compare_dependencies(local: Snapshot, remote: Snapshot) -> list[Drift]:
    local_pkgs = local.dependencies.merged()
    remote_pkgs = remote.dependencies.merged()
    drifts: list[Drift] = []

    # local names first, then remote-only names, each in declaration order
    for name in dict.fromkeys([*local_pkgs, *remote_pkgs]):
        local_ver = local_pkgs.get(name)
        remote_ver = remote_pkgs.get(name)

        if local_ver is None and remote_ver is not None:
            drifts.append(
                Drift(
                    category=DriftCategory.DEPENDENCY,
                    severity=Severity.HIGH,
                    field=package_field(name),
                    local=None,
                    remote=remote_ver,
                    impact="Missing dependency - may cause runtime errors",
                    recommendation=f"Install {name}@{remote_ver}",
                )
            )
        elif local_ver is not None and remote_ver is None:
            drifts.append(
                Drift(
                    category=DriftCategory.DEPENDENCY,
                    severity=Severity.MEDIUM,
                    field=package_field(name),
                    local=local_ver,
                    remote=None,
                    impact="Extra dependency not in remote",
                    recommendation=f"Remove {name} or add to remote environment",
                )
            )
        elif local_ver != remote_ver:
            drifts.append(
                Drift(
                    category=DriftCategory.DEPENDENCY,
                    severity=classify_version_delta(local_ver, remote_ver),
                    field=package_field(name),
                    local=local_ver,
                    remote=remote_ver,
                    impact=describe_version_delta(local_ver, remote_ver),
                    recommendation=f"Update {name} to {remote_ver}",
                )
            )

    local_lock = local.dependencies.lockfile_hash
    remote_lock = remote.dependencies.lockfile_hash
    if local_lock != remote_lock:
        drifts.append(
            Drift(
                category=DriftCategory.DEPENDENCY,
                severity=Severity.HIGH,
                field=LOCKFILE_FIELD,
                local=local_lock[:8] or None,
                remote=remote_lock[:8] or None,
                impact="Lockfile mismatch - exact dependency versions differ",
                recommendation="Sync lockfile to ensure identical dependency tree",
            )
        )

    return drifts
