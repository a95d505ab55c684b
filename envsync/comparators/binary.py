"""Native binary comparison, keyed by artifact name.

Platform, architecture and ABI are independent checks: one artifact can
produce up to three drifts.
"""

from __future__ import annotations

from envsync.models.drift import Drift, DriftCategory, Severity
from envsync.models.snapshot import NativeBinaryArtifact, Snapshot

FIELD_PREFIX = "native."
ATTRIBUTES = ("platform", "arch", "abi")


def artifact_from_field(field: str) -> str:
    """Artifact name from ``native.<name>`` or ``native.<name>.<attr>``.

    Only a trailing ``.platform``, ``.arch`` or ``.abi`` is stripped; npm names
    may themselves contain dots (``zeromq.js``).
    """
    rest = field.removeprefix(FIELD_PREFIX)
    name, _, attr = rest.rpartition(".")
    if name and attr in ATTRIBUTES:
        return name
    return rest


def is_artifact_compatible(
    local: NativeBinaryArtifact, remote: NativeBinaryArtifact
) -> bool:
    return (
        local.platform == remote.platform
        and local.arch == remote.arch
        and local.abi == remote.abi
    )


def _index(artifacts: list[NativeBinaryArtifact]) -> dict[str, NativeBinaryArtifact]:
    # first artifact of a given name wins
    index: dict[str, NativeBinaryArtifact] = {}
    for artifact in artifacts:
        index.setdefault(artifact.name, artifact)
    return index


def compare_binaries(local: Snapshot, remote: Snapshot) -> list[Drift]:
    local_arts = _index(local.dependencies.native_artifacts)
    remote_arts = _index(remote.dependencies.native_artifacts)
    drifts: list[Drift] = []

    for name, lart in local_arts.items():
        rart = remote_arts.get(name)
        if rart is None:
            drifts.append(
                Drift(
                    category=DriftCategory.BINARY,
                    severity=Severity.MEDIUM,
                    field=f"{FIELD_PREFIX}{name}",
                    local=lart.platform,
                    remote=None,
                    impact="Native module exists locally but not in remote environment",
                    recommendation=f"Ensure {name} is installed in remote or remove from local",
                )
            )
            continue

        if lart.platform != rart.platform:
            drifts.append(
                Drift(
                    category=DriftCategory.BINARY,
                    severity=Severity.CRITICAL,
                    field=f"{FIELD_PREFIX}{name}.platform",
                    local=lart.platform,
                    remote=rart.platform,
                    impact=(
                        f"Native module compiled for {lart.platform} but remote "
                        f"uses {rart.platform} - will crash"
                    ),
                    recommendation=f"Rebuild {name} for {rart.platform} platform",
                )
            )

        if lart.arch != rart.arch:
            drifts.append(
                Drift(
                    category=DriftCategory.BINARY,
                    severity=Severity.CRITICAL,
                    field=f"{FIELD_PREFIX}{name}.arch",
                    local=lart.arch,
                    remote=rart.arch,
                    impact=(
                        f"Architecture mismatch: {lart.arch} vs {rart.arch} - "
                        "module will fail to load"
                    ),
                    recommendation=f"Rebuild {name} for {rart.arch} architecture",
                )
            )

        if lart.abi != rart.abi:
            drifts.append(
                Drift(
                    category=DriftCategory.BINARY,
                    severity=Severity.CRITICAL,
                    field=f"{FIELD_PREFIX}{name}.abi",
                    local=lart.abi,
                    remote=rart.abi,
                    impact=(
                        f"Incompatible Node.js ABI version ({lart.abi} vs {rart.abi}) - "
                        "module will fail to load"
                    ),
                    recommendation=f"Rebuild {name} with Node.js version matching ABI {rart.abi}",
                )
            )

    for name, rart in remote_arts.items():
        if name not in local_arts:
            drifts.append(
                Drift(
                    category=DriftCategory.BINARY,
                    severity=Severity.HIGH,
                    field=f"{FIELD_PREFIX}{name}",
                    local=None,
                    remote=rart.platform,
                    impact=(
                        "Native module required by remote but missing locally - "
                        "may cause runtime errors"
                    ),
                    recommendation=f"Install {name} locally",
                )
            )

    return drifts
