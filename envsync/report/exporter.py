"""Drift report export document (JSON)."""

from __future__ import annotations

import json
from pathlib import Path

from envsync.models.drift import DriftReport


def export_report_json(report: DriftReport) -> str:
    """``hasDrift``, ``severity``, ``drifts`` and ``summary`` as indented JSON."""
    return json.dumps(report.to_export(), indent=2, ensure_ascii=False)


def save_report(report: DriftReport, path: Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(export_report_json(report), encoding="utf-8")
    return path
