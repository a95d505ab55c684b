"""envsync: environment drift detection and synchronization.

Captures point-in-time snapshots of an environment (runtime, dependencies,
environment variables, container state, native binaries), compares two of
them into a severity-ranked drift report, and drives best-effort
remediation of the local side toward the remote one.
"""

__version__ = "0.1.0"
__description__ = "Environment drift detection, severity classification and sync"

from envsync.core.assembler import (
    SnapshotAssembler,
    SnapshotSerializationError,
    build_snapshot,
    deserialize_snapshot,
    serialize_snapshot,
)
from envsync.core.drift_engine import build_report, compare
from envsync.sync.orchestrator import SyncOrchestrator

__all__ = [
    "SnapshotAssembler",
    "SnapshotSerializationError",
    "SyncOrchestrator",
    "build_report",
    "build_snapshot",
    "compare",
    "deserialize_snapshot",
    "serialize_snapshot",
    "__version__",
]
