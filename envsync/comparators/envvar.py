"""Environment variable comparison: three-way key classification.

A key whose value is redacted on either side is never value-compared:
a value that was never captured in the clear cannot be meaningfully diffed.
"""

from __future__ import annotations

from envsync.models.drift import Drift, DriftCategory, Severity
from envsync.models.snapshot import REDACTED, EnvVarSet, Snapshot

FIELD_PREFIX = "env."
PRESENT = "[SET]"


def classify_keys(
    local: EnvVarSet, remote: EnvVarSet
) -> tuple[list[str], list[str], list[str]]:
    """Return (missing locally, extra locally, differing value) key lists."""
    local_vars, remote_vars = local.variables, remote.variables
    missing = [key for key in remote_vars if key not in local_vars]
    extra = [key for key in local_vars if key not in remote_vars]
    different = [
        key
        for key, value in local_vars.items()
        if key in remote_vars
        and value != remote_vars[key]
        and REDACTED not in (value, remote_vars[key])
    ]
    return missing, extra, different


def compare_env_vars(local: Snapshot, remote: Snapshot) -> list[Drift]:
    missing, extra, different = classify_keys(local.env_vars, remote.env_vars)
    drifts: list[Drift] = []

    for key in missing:
        drifts.append(
            Drift(
                category=DriftCategory.ENVVAR,
                severity=Severity.HIGH,
                field=f"{FIELD_PREFIX}{key}",
                local=None,
                remote=PRESENT,
                impact="Missing environment variable - may cause runtime errors",
                recommendation=f"Set {key} in local environment",
            )
        )

    for key in extra:
        drifts.append(
            Drift(
                category=DriftCategory.ENVVAR,
                severity=Severity.LOW,
                field=f"{FIELD_PREFIX}{key}",
                local=PRESENT,
                remote=None,
                impact="Extra environment variable not in remote",
                recommendation=f"Remove {key} or add to remote environment",
            )
        )

    for key in different:
        drifts.append(
            Drift(
                category=DriftCategory.ENVVAR,
                severity=Severity.MEDIUM,
                field=f"{FIELD_PREFIX}{key}",
                local=local.env_vars.variables[key],
                remote=remote.env_vars.variables[key],
                impact="Environment variable value differs",
                recommendation=f"Update {key} to match remote value",
            )
        )

    return drifts
