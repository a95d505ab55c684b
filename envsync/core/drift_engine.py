"""Drift engine: compares two snapshots category by category.

Comparison is total over well-formed snapshots: it never raises, and an
unparsable version only degrades that drift's severity to the default.
"""

from __future__ import annotations

import logging

from envsync.comparators import COMPARATORS
from envsync.core.aggregator import overall_severity, summarize
from envsync.models.drift import Drift, DriftReport
from envsync.models.snapshot import Snapshot

logger = logging.getLogger(__name__)


def compare(local: Snapshot, remote: Snapshot) -> list[Drift]:
    """All drifts between *local* and *remote*, in category block order."""
    drifts: list[Drift] = []
    for category, comparator in COMPARATORS.items():
        found = comparator(local, remote)
        logger.debug("%s comparison: %d drift(s)", category.value, len(found))
        drifts.extend(found)
    return drifts


def build_report(local: Snapshot, remote: Snapshot) -> DriftReport:
    """Compare and aggregate into a ``DriftReport``."""
    drifts = compare(local, remote)
    severity = overall_severity(drifts)
    logger.info(
        "Compared %s (%s) against %s (%s): %d drift(s), severity=%s",
        local.environment.value,
        local.hash,
        remote.environment.value,
        remote.hash,
        len(drifts),
        severity.value,
    )
    return DriftReport(
        has_drift=bool(drifts),
        severity=severity,
        drifts=drifts,
        summary=summarize(drifts),
        local_snapshot=local,
        remote_snapshot=remote,
    )
