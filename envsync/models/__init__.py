"""envsync data models: all Pydantic v2, all frozen (immutable)."""

from envsync.models.drift import (
    SEVERITY_ORDER,
    Drift,
    DriftCategory,
    DriftReport,
    DriftSummary,
    Severity,
)
from envsync.models.snapshot import (
    REDACTED,
    ComposeDescriptor,
    Container,
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
from envsync.models.sync import SyncAction, SyncOptions, SyncResult, SyncSummary

__all__ = [
    # snapshot
    "REDACTED",
    "EnvironmentTag",
    "RuntimeInfo",
    "NativeBinaryArtifact",
    "DependencySet",
    "EnvVarSet",
    "ContainerImage",
    "Container",
    "ComposeDescriptor",
    "ContainerState",
    "SystemInfo",
    "Snapshot",
    # drift
    "DriftCategory",
    "Severity",
    "SEVERITY_ORDER",
    "Drift",
    "DriftSummary",
    "DriftReport",
    # sync
    "SyncOptions",
    "SyncAction",
    "SyncSummary",
    "SyncResult",
]
