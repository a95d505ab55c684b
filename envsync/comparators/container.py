"""Container comparison: engine version, image tags, compose file count.

Compose topology is compared only as a file count; services, networks
and volumes are never diffed one by one.
"""

from __future__ import annotations

from envsync.models.drift import Drift, DriftCategory, Severity
from envsync.models.snapshot import Snapshot

VERSION_FIELD = "docker.version"
COMPOSE_FIELD = "docker.compose"
IMAGE_PREFIX = "docker.image."


def compare_containers(local: Snapshot, remote: Snapshot) -> list[Drift]:
    lcs, rcs = local.container, remote.container
    drifts: list[Drift] = []

    if lcs.version != rcs.version:
        drifts.append(
            Drift(
                category=DriftCategory.CONTAINER,
                severity=Severity.MEDIUM,
                field=VERSION_FIELD,
                local=lcs.version,
                remote=rcs.version,
                impact="Docker version mismatch - behavior may differ",
                recommendation=f"Update Docker to {rcs.version}",
            )
        )

    local_tags = lcs.image_tags()
    remote_tags = rcs.image_tags()

    for tag in remote_tags:
        if tag not in local_tags:
            drifts.append(
                Drift(
                    category=DriftCategory.CONTAINER,
                    severity=Severity.HIGH,
                    field=f"{IMAGE_PREFIX}{tag}",
                    local=None,
                    remote=tag,
                    impact="Missing Docker image",
                    recommendation=f"Pull Docker image: docker pull {tag}",
                )
            )

    for tag in local_tags:
        if tag not in remote_tags:
            drifts.append(
                Drift(
                    category=DriftCategory.CONTAINER,
                    severity=Severity.LOW,
                    field=f"{IMAGE_PREFIX}{tag}",
                    local=tag,
                    remote=None,
                    impact="Extra Docker image not in remote",
                    recommendation=f"Remove image or add to remote: {tag}",
                )
            )

    local_count = len(lcs.compose_configs)
    remote_count = len(rcs.compose_configs)
    if local_count != remote_count:
        drifts.append(
            Drift(
                category=DriftCategory.CONTAINER,
                severity=Severity.LOW,
                field=COMPOSE_FIELD,
                local=local_count,
                remote=remote_count,
                impact=f"Compose file count mismatch: {local_count} vs {remote_count}",
                recommendation="Review docker-compose files against the remote environment",
            )
        )

    return drifts
