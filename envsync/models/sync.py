"""Synchronization models: options in, per-drift actions out."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from envsync.models.drift import Drift, DriftCategory, Severity


class SyncOptions(BaseModel):
    """Policy for one synchronization run.

    ``dry_run`` suppresses every mutating call regardless of ``auto_fix``;
    ``auto_fix`` only records that the caller skipped confirmation.
    """

    model_config = ConfigDict(frozen=True)

    auto_fix: bool = False
    dry_run: bool = False
    categories: list[DriftCategory] | None = None
    max_severity: Severity | None = None


class SyncAction(BaseModel):
    """A recorded attempt, successful or not, to reconcile one drift."""

    model_config = ConfigDict(frozen=True)

    drift: Drift
    success: bool
    action: str | None = None
    error: str | None = None


class SyncSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    total: int = 0
    succeeded: int = 0
    failed: int = 0


class SyncResult(BaseModel):
    """All actions of a run.  ``success`` is true iff no action failed."""

    model_config = ConfigDict(frozen=True)

    success: bool
    actions: list[SyncAction] = []
    summary: SyncSummary = SyncSummary()
    rollback_point: str | None = None  # path of the snapshot saved before mutating

    @classmethod
    def from_actions(
        cls, actions: list[SyncAction], *, rollback_point: str | None = None
    ) -> SyncResult:
        failed = sum(1 for a in actions if not a.success)
        return cls(
            success=failed == 0,
            actions=actions,
            summary=SyncSummary(
                total=len(actions),
                succeeded=len(actions) - failed,
                failed=failed,
            ),
            rollback_point=rollback_point,
        )
