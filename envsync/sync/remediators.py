"""Per-category remediation, selected through a closed table.

Only dependency, container-image and binary drifts ever reach a mutating
tool call.  Environment variables and runtime versions are never changed
here; they always yield a manual instruction.  In a dry run nothing is
mutated and every action text carries the ``[DRY RUN]`` marker.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from envsync.comparators.binary import artifact_from_field
from envsync.comparators.container import IMAGE_PREFIX
from envsync.comparators.dependency import LOCKFILE_FIELD, package_from_field
from envsync.comparators.envvar import FIELD_PREFIX as ENV_PREFIX
from envsync.comparators.envvar import PRESENT
from envsync.models.drift import Drift, DriftCategory
from envsync.models.sync import SyncAction
from envsync.sync.tools import RemediationTools

logger = logging.getLogger(__name__)

DRY_RUN_MARKER = "[DRY RUN]"
MANUAL_MARKER = "[MANUAL]"

Remediator = Callable[[Drift, RemediationTools, bool], SyncAction]


def _manual(drift: Drift, instruction: str, dry_run: bool) -> SyncAction:
    text = f"{MANUAL_MARKER} {instruction}"
    if dry_run:
        text = f"{DRY_RUN_MARKER} {text}"
    return SyncAction(drift=drift, success=True, action=text)


def _simulated(drift: Drift, description: str) -> SyncAction:
    return SyncAction(drift=drift, success=True, action=f"{DRY_RUN_MARKER} Would {description}")


def _attempt(drift: Drift, mutate: Callable[[], None], done: str) -> SyncAction:
    """Run one mutating call; a failure becomes a failed action, never an exception."""
    try:
        mutate()
    except Exception as exc:
        logger.error("Remediation of %s failed: %s", drift.field, exc)
        return SyncAction(drift=drift, success=False, error=str(exc))
    logger.info("Remediated %s: %s", drift.field, done)
    return SyncAction(drift=drift, success=True, action=done)


def mutates(drift: Drift) -> bool:
    """Whether remediating *drift* would issue a mutating tool call."""
    if drift.category is DriftCategory.DEPENDENCY:
        return drift.field != LOCKFILE_FIELD
    if drift.category is DriftCategory.CONTAINER:
        return drift.field.startswith(IMAGE_PREFIX) and drift.remote is not None
    return drift.category is DriftCategory.BINARY


def remediate_dependency(drift: Drift, tools: RemediationTools, dry_run: bool) -> SyncAction:
    if drift.field == LOCKFILE_FIELD:
        # a hash mismatch alone says nothing about which entries to repair
        return _manual(
            drift, "Lockfile sync requires manual `npm install` or `npm ci`", dry_run
        )

    name = package_from_field(drift.field)
    target = drift.remote
    if target is None:
        if dry_run:
            return _simulated(drift, f"remove {name}")
        return _attempt(drift, lambda: tools.remove_package(name), f"Removed {name}")

    if dry_run:
        return _simulated(drift, f"install {name}@{target}")
    return _attempt(
        drift,
        lambda: tools.install_package(name, str(target)),
        f"Updated {name} to {target}",
    )


def remediate_envvar(drift: Drift, tools: RemediationTools, dry_run: bool) -> SyncAction:
    key = drift.field.removeprefix(ENV_PREFIX)
    if drift.remote is None:
        instruction = f"Unset environment variable: {key}"
    elif drift.remote == PRESENT:
        instruction = f"Set environment variable: {key} (value defined in remote environment)"
    else:
        instruction = f"Set environment variable: {key}={drift.remote}"
    return _manual(drift, instruction, dry_run)


def remediate_container(drift: Drift, tools: RemediationTools, dry_run: bool) -> SyncAction:
    if drift.field.startswith(IMAGE_PREFIX) and drift.remote is not None:
        image = str(drift.remote)
        if dry_run:
            return _simulated(drift, f"pull Docker image: {image}")
        return _attempt(drift, lambda: tools.pull_image(image), f"Pulled Docker image: {image}")
    return _manual(drift, f"Docker {drift.field} requires manual update", dry_run)


def remediate_binary(drift: Drift, tools: RemediationTools, dry_run: bool) -> SyncAction:
    name = artifact_from_field(drift.field)
    if dry_run:
        return _simulated(drift, f"rebuild {name}")
    return _attempt(
        drift, lambda: tools.rebuild_artifact(name), f"Rebuilt native module: {name}"
    )


def remediate_runtime(drift: Drift, tools: RemediationTools, dry_run: bool) -> SyncAction:
    if drift.field == "nodeVersion":
        instruction = (
            f"Update Node.js to {drift.remote} (use nvm, volta, or system package manager)"
        )
    else:
        instruction = f"Align runtime {drift.field} with remote value {drift.remote}"
    return _manual(drift, instruction, dry_run)


REMEDIATORS: dict[DriftCategory, Remediator] = {
    DriftCategory.RUNTIME: remediate_runtime,
    DriftCategory.DEPENDENCY: remediate_dependency,
    DriftCategory.ENVVAR: remediate_envvar,
    DriftCategory.CONTAINER: remediate_container,
    DriftCategory.BINARY: remediate_binary,
}
