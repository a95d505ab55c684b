"""Snapshot assembly, fingerprinting and persistence.

The assembler joins independently captured fragments into one immutable
``Snapshot``.  Fragments share no state and are gathered concurrently; the
only wait point is joining on all of them.  Failure handling happens at the
capture boundary, so every fragment arrives here already resolved.

Persisted form is the camelCase snapshot document.  Deserializing restores
every date-time field to ``datetime``, and re-serializing a deserialized
snapshot reproduces the original document byte for byte.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from envsync.capture import CaptureResult, CollectorSet, capture_fragment, detect_environment
from envsync.core.hasher import compute_fingerprint
from envsync.models.snapshot import (
    ContainerState,
    DependencySet,
    EnvironmentTag,
    EnvVarSet,
    RuntimeInfo,
    Snapshot,
    SystemInfo,
)

logger = logging.getLogger(__name__)


class SnapshotSerializationError(ValueError):
    """Raised when a persisted snapshot document is malformed."""


def build_snapshot(
    *,
    runtime: RuntimeInfo,
    dependencies: DependencySet,
    env_vars: EnvVarSet,
    container: ContainerState,
    system: SystemInfo,
    environment: EnvironmentTag = EnvironmentTag.LOCAL,
    timestamp: datetime | None = None,
) -> Snapshot:
    """Assemble resolved fragments and stamp the fingerprint."""
    draft = Snapshot(
        timestamp=timestamp or datetime.now(timezone.utc),
        environment=environment,
        runtime=runtime,
        dependencies=dependencies,
        env_vars=env_vars,
        container=container,
        system=system,
    )
    fingerprint = compute_fingerprint(draft)
    logger.debug("Assembled %s snapshot, fingerprint=%s", environment.value, fingerprint)
    return draft.model_copy(update={"hash": fingerprint})


class SnapshotAssembler:
    """Gathers fragments from a ``CollectorSet`` and builds snapshots.

    Parameters
    ----------
    collectors:
        One collaborator per fragment.
    max_workers:
        Upper bound on fragments captured at the same time.
    environ:
        Mapping used for environment-tag detection (``os.environ`` if None).
    """

    def __init__(
        self,
        collectors: CollectorSet,
        *,
        max_workers: int = 5,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self.collectors = collectors
        self.max_workers = max(1, max_workers)
        self._environ = environ

    def capture(self) -> dict[str, CaptureResult[Any]]:
        """Capture every fragment concurrently and wait for all of them."""
        fields = self.collectors._fields
        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            futures = {
                field: pool.submit(capture_fragment, getattr(self.collectors, field))
                for field in fields
            }
            return {field: futures[field].result() for field in fields}

    def assemble(
        self,
        environment: EnvironmentTag | None = None,
        *,
        timestamp: datetime | None = None,
    ) -> Snapshot:
        """Capture all fragments and return the assembled snapshot."""
        results = self.capture()
        failed = [name for name, result in results.items() if not result.ok]
        if failed:
            logger.info("Snapshot assembled with default fragments for: %s", ", ".join(failed))

        return build_snapshot(
            runtime=results["runtime"].value,
            dependencies=results["dependencies"].value,
            env_vars=results["env_vars"].value,
            container=results["container"].value,
            system=results["system"].value,
            environment=environment or detect_environment(self._environ),
            timestamp=timestamp,
        )


# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------


def serialize_snapshot(snapshot: Snapshot) -> str:
    """Render the persisted snapshot document (indented JSON)."""
    return snapshot.model_dump_json(by_alias=True, indent=2)


def deserialize_snapshot(data: str | bytes) -> Snapshot:
    """Parse a persisted snapshot document, restoring date-time fields.

    Raises ``SnapshotSerializationError`` for malformed input.
    """
    try:
        return Snapshot.model_validate_json(data)
    except ValidationError as exc:
        raise SnapshotSerializationError(f"Malformed snapshot document: {exc}") from exc


def save_snapshot(snapshot: Snapshot, path: Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialize_snapshot(snapshot), encoding="utf-8")
    return path


def load_snapshot(path: Path) -> Snapshot:
    """Read and deserialize a snapshot file."""
    return deserialize_snapshot(Path(path).read_bytes())
