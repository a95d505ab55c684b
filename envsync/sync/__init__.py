"""Synchronization: remediation orchestrator, tool backends, rollback points."""

from envsync.sync.orchestrator import (
    SYNC_ORDER,
    SyncOrchestrator,
    filter_drifts,
    group_by_category,
)
from envsync.sync.rollback import (
    RollbackError,
    RollbackPoint,
    create_rollback_point,
    list_rollback_points,
)
from envsync.sync.tools import RemediationTools, SubprocessTools, ToolInvocationError

__all__ = [
    "SYNC_ORDER",
    "SyncOrchestrator",
    "filter_drifts",
    "group_by_category",
    "RemediationTools",
    "SubprocessTools",
    "ToolInvocationError",
    "RollbackError",
    "RollbackPoint",
    "create_rollback_point",
    "list_rollback_points",
]
