"""Rollback points: persist the prior snapshot for manual recovery.

This is not a transactional undo.  ``restore()`` only reports where the
prior state was saved; reverting is left to the operator.  Rollback files
are never deleted by this module.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path

from envsync.core.assembler import load_snapshot, save_snapshot
from envsync.models.snapshot import Snapshot

logger = logging.getLogger(__name__)

DEFAULT_ROLLBACK_DIR = Path(".envsync")


class RollbackError(RuntimeError):
    """Raised when a rollback point cannot be written or read."""


class RollbackPoint:
    """A snapshot saved as ``<directory>/rollback-<epoch-ms>.json``."""

    def __init__(
        self,
        snapshot: Snapshot,
        directory: Path = DEFAULT_ROLLBACK_DIR,
        *,
        created_ms: int | None = None,
    ) -> None:
        self.snapshot = snapshot
        self.created_ms = created_ms if created_ms is not None else int(time.time() * 1000)
        self.path = Path(directory) / f"rollback-{self.created_ms}.json"

    def save(self) -> Path:
        try:
            save_snapshot(self.snapshot, self.path)
        except OSError as exc:
            raise RollbackError(f"Could not write rollback point {self.path}: {exc}") from exc
        logger.info("Rollback point saved at %s", self.path)
        return self.path

    def restore(self) -> Path:
        """Informational only: point the operator at the saved snapshot."""
        logger.info("Rollback snapshot saved at: %s", self.path)
        logger.info("To restore, review the snapshot and manually revert changes.")
        return self.path

    def load(self) -> Snapshot:
        try:
            return load_snapshot(self.path)
        except OSError as exc:
            raise RollbackError(f"Could not read rollback point {self.path}: {exc}") from exc


def create_rollback_point(
    snapshot: Snapshot, directory: Path = DEFAULT_ROLLBACK_DIR
) -> RollbackPoint:
    point = RollbackPoint(snapshot, directory)
    point.save()
    return point


def list_rollback_points(directory: Path = DEFAULT_ROLLBACK_DIR) -> list[Path]:
    """Saved rollback files, oldest first."""
    directory = Path(directory)
    if not directory.is_dir():
        return []
    return sorted(directory.glob("rollback-*.json"))
