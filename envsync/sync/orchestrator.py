"""Synchronization orchestrator: reconciles the local side of a drift report.

Processing:
1. Filter: keep only requested categories, drop drifts above the severity ceiling.
2. Group by category and walk the groups in ``SYNC_ORDER``: dependencies first
   (everything else may assume them), runtime last (informational only).
3. Remediate each drift through the category's remediator, one call at a
   time.  Package managers and container engines hold their own locks, so
   mutating calls are never issued concurrently.

A failed remediation is recorded and the run continues with the next drift.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from envsync.models.drift import SEVERITY_ORDER, Drift, DriftCategory, DriftReport
from envsync.models.sync import SyncAction, SyncOptions, SyncResult
from envsync.sync.remediators import REMEDIATORS, mutates
from envsync.sync.rollback import RollbackError, create_rollback_point
from envsync.sync.tools import RemediationTools, SubprocessTools

logger = logging.getLogger(__name__)

SYNC_ORDER: tuple[DriftCategory, ...] = (
    DriftCategory.DEPENDENCY,
    DriftCategory.ENVVAR,
    DriftCategory.CONTAINER,
    DriftCategory.BINARY,
    DriftCategory.RUNTIME,
)


def filter_drifts(drifts: Iterable[Drift], options: SyncOptions) -> list[Drift]:
    """Apply the category filter and the severity ceiling."""
    selected = list(drifts)
    if options.categories:
        allowed = set(options.categories)
        selected = [d for d in selected if d.category in allowed]
    if options.max_severity is not None:
        ceiling = SEVERITY_ORDER.index(options.max_severity)
        selected = [d for d in selected if SEVERITY_ORDER.index(d.severity) <= ceiling]
    return selected


def group_by_category(drifts: Iterable[Drift]) -> dict[DriftCategory, list[Drift]]:
    """Drifts per category, keeping report order inside each group."""
    grouped: dict[DriftCategory, list[Drift]] = {}
    for drift in drifts:
        grouped.setdefault(drift.category, []).append(drift)
    return grouped


class SyncOrchestrator:
    """Drives remediation for a ``DriftReport``.

    Parameters
    ----------
    tools:
        Mutating tool backend.  Defaults to ``SubprocessTools`` in the
        current directory.
    rollback_dir:
        When set, the report's local snapshot is saved there before any
        run that issues a mutating tool call.  Saving is best effort; a
        failure is logged only.
    """

    def __init__(
        self,
        tools: RemediationTools | None = None,
        *,
        rollback_dir: Path | None = None,
    ) -> None:
        self.tools = tools if tools is not None else SubprocessTools()
        self.rollback_dir = rollback_dir

    def sync(self, report: DriftReport, options: SyncOptions | None = None) -> SyncResult:
        options = options or SyncOptions()
        drifts = filter_drifts(report.drifts, options)
        grouped = group_by_category(drifts)
        logger.info(
            "Syncing %d of %d drift(s) (dry_run=%s, auto_fix=%s)",
            len(drifts),
            len(report.drifts),
            options.dry_run,
            options.auto_fix,
        )

        rollback_point = None
        if not options.dry_run and any(mutates(d) for d in drifts):
            rollback_point = self._save_rollback_point(report)

        actions: list[SyncAction] = []
        for category in SYNC_ORDER:
            remediate = REMEDIATORS[category]
            for drift in grouped.get(category, []):
                actions.append(remediate(drift, self.tools, options.dry_run))

        result = SyncResult.from_actions(actions, rollback_point=rollback_point)
        logger.info(
            "Sync finished: %d succeeded, %d failed",
            result.summary.succeeded,
            result.summary.failed,
        )
        return result

    def _save_rollback_point(self, report: DriftReport) -> str | None:
        if self.rollback_dir is None:
            return None
        try:
            point = create_rollback_point(report.local_snapshot, self.rollback_dir)
        except RollbackError as exc:
            logger.warning("Continuing without rollback point: %s", exc)
            return None
        return str(point.path)
