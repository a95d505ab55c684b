"""``envsync compare``: compare two saved snapshots."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from envsync.cli.support import console, print_error
from envsync.core.assembler import SnapshotSerializationError, load_snapshot
from envsync.core.drift_engine import build_report
from envsync.core.severity import exceeds_threshold
from envsync.models.drift import Severity
from envsync.report.exporter import save_report
from envsync.report.renderer import ReportRenderer


def compare_cmd(
    local_path: Path = typer.Argument(..., help="Local snapshot file."),
    remote_path: Path = typer.Argument(..., help="Remote snapshot file."),
    detailed: bool = typer.Option(False, "--detailed", "-d", help="Show every drift."),
    json_out: Optional[Path] = typer.Option(
        None, "--json", help="Also write the drift report export to this file."
    ),
) -> None:
    """Compare two snapshots.  Exits 1 on high or critical drift."""
    try:
        local = load_snapshot(local_path)
        remote = load_snapshot(remote_path)
    except (OSError, SnapshotSerializationError) as exc:
        print_error("Failed to compare snapshots", exc)
        raise typer.Exit(code=1)

    report = build_report(local, remote)
    ReportRenderer(console).print_report(report, detailed=detailed)

    if json_out is not None:
        save_report(report, json_out)
        console.print(f"[dim]Report written to {json_out}[/dim]")

    if not report.has_drift:
        console.print("[green]Environments are in perfect sync![/green]")

    if exceeds_threshold(report.severity, Severity.HIGH):
        raise typer.Exit(code=1)
