"""Aggregation of a drift list into a summary and an overall severity."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from envsync.core.severity import max_severity
from envsync.models.drift import Drift, DriftCategory, DriftSummary, Severity


def summarize(drifts: Iterable[Drift]) -> DriftSummary:
    """Count drifts per severity and per category (order independent)."""
    drifts = list(drifts)
    by_severity = Counter(d.severity for d in drifts)
    by_category = Counter(d.category for d in drifts)
    return DriftSummary(
        total=len(drifts),
        critical=by_severity[Severity.CRITICAL],
        high=by_severity[Severity.HIGH],
        medium=by_severity[Severity.MEDIUM],
        low=by_severity[Severity.LOW],
        by_category={category: by_category[category] for category in DriftCategory},
    )


def overall_severity(drifts: Iterable[Drift]) -> Severity:
    """``NONE`` for no drifts, else the highest severity present."""
    return max_severity(d.severity for d in drifts)
