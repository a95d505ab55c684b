"""Tests for drift aggregation: summary counts and overall severity."""

from __future__ import annotations

from envsync.core.aggregator import overall_severity, summarize
from envsync.models.drift import DriftCategory, Severity


class TestSummarize:
    def test_empty(self):
        summary = summarize([])
        assert summary.total == 0
        assert summary.by_category[DriftCategory.BINARY] == 0

    def test_counts_per_severity_and_category(self, make_drift):
        drifts = [
            make_drift(DriftCategory.RUNTIME, Severity.CRITICAL, "platform"),
            make_drift(DriftCategory.DEPENDENCY, Severity.HIGH, "dependency.a"),
            make_drift(DriftCategory.DEPENDENCY, Severity.LOW, "dependency.b"),
            make_drift(DriftCategory.ENVVAR, Severity.MEDIUM, "env.X"),
        ]
        summary = summarize(drifts)
        assert summary.total == 4
        assert (summary.critical, summary.high, summary.medium, summary.low) == (1, 1, 1, 1)
        assert summary.by_category[DriftCategory.DEPENDENCY] == 2
        assert summary.by_category[DriftCategory.CONTAINER] == 0

    def test_totals_are_consistent(self, make_drift):
        drifts = [make_drift(severity=s) for s in (Severity.LOW, Severity.LOW, Severity.HIGH)]
        summary = summarize(drifts)
        assert summary.total == summary.critical + summary.high + summary.medium + summary.low
        assert summary.total == sum(summary.by_category.values())

    def test_order_independent(self, make_drift):
        drifts = [
            make_drift(DriftCategory.RUNTIME, Severity.HIGH, "nodeVersion"),
            make_drift(DriftCategory.BINARY, Severity.LOW, "native.x"),
        ]
        assert summarize(drifts) == summarize(list(reversed(drifts)))


class TestOverallSeverity:
    def test_no_drifts_is_none(self):
        assert overall_severity([]) is Severity.NONE

    def test_low_high_medium_is_high(self, make_drift):
        drifts = [make_drift(severity=s) for s in (Severity.LOW, Severity.HIGH, Severity.MEDIUM)]
        assert overall_severity(drifts) is Severity.HIGH
