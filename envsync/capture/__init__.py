"""Capture collaborators: one per snapshot fragment.

Each collaborator may fail on its own; ``capture_fragment`` substitutes
its default fragment, so a snapshot is always produced.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any, NamedTuple

from envsync.capture.base import (
    CaptureError,
    CaptureResult,
    FragmentCollector,
    StaticCollector,
    capture_fragment,
)
from envsync.capture.dependencies import DependencyCollector
from envsync.capture.docker import ContainerCollector
from envsync.capture.envvars import EnvVarCollector
from envsync.capture.runtime import RuntimeCollector
from envsync.capture.system import SystemCollector, detect_environment
from envsync.models.snapshot import ContainerState


class CollectorSet(NamedTuple):
    """The five fragment collaborators a snapshot is assembled from."""

    runtime: FragmentCollector[Any]
    dependencies: FragmentCollector[Any]
    env_vars: FragmentCollector[Any]
    container: FragmentCollector[Any]
    system: FragmentCollector[Any]


def default_collectors(
    project_dir: Path = Path("."),
    *,
    redact_sensitive: bool = True,
    include_docker: bool = True,
    include_native_modules: bool = True,
    environ: Mapping[str, str] | None = None,
    timeout: float = 30,
) -> CollectorSet:
    """Collaborators reading the local machine and *project_dir*."""
    container: FragmentCollector[Any]
    if include_docker:
        container = ContainerCollector(project_dir, timeout=timeout)
    else:
        container = StaticCollector("container", ContainerState())

    return CollectorSet(
        runtime=RuntimeCollector(timeout=timeout),
        dependencies=DependencyCollector(
            project_dir, include_native_modules=include_native_modules
        ),
        env_vars=EnvVarCollector(environ, redact_sensitive=redact_sensitive),
        container=container,
        system=SystemCollector(),
    )


__all__ = [
    "CaptureError",
    "CaptureResult",
    "CollectorSet",
    "ContainerCollector",
    "DependencyCollector",
    "EnvVarCollector",
    "FragmentCollector",
    "RuntimeCollector",
    "StaticCollector",
    "SystemCollector",
    "capture_fragment",
    "default_collectors",
    "detect_environment",
]
