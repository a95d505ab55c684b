"""Per-category comparisons, selected through a closed table.

Each comparison is a pure ``(local, remote) -> list[Drift]`` function.
``COMPARATORS`` is ordered by ``DriftCategory`` declaration order, which is
the order their results are concatenated in a report.
"""

from __future__ import annotations

from collections.abc import Callable

from envsync.comparators.binary import compare_binaries, is_artifact_compatible
from envsync.comparators.container import compare_containers
from envsync.comparators.dependency import compare_dependencies
from envsync.comparators.envvar import compare_env_vars
from envsync.comparators.runtime import compare_runtime
from envsync.models.drift import Drift, DriftCategory
from envsync.models.snapshot import Snapshot

Comparator = Callable[[Snapshot, Snapshot], list[Drift]]

COMPARATORS: dict[DriftCategory, Comparator] = {
    DriftCategory.RUNTIME: compare_runtime,
    DriftCategory.DEPENDENCY: compare_dependencies,
    DriftCategory.ENVVAR: compare_env_vars,
    DriftCategory.CONTAINER: compare_containers,
    DriftCategory.BINARY: compare_binaries,
}

__all__ = [
    "COMPARATORS",
    "Comparator",
    "compare_runtime",
    "compare_dependencies",
    "compare_env_vars",
    "compare_containers",
    "compare_binaries",
    "is_artifact_compatible",
]
