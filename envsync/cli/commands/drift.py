"""``envsync drift``: compare the local environment with a saved remote."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from envsync.cli.support import console, print_error, resolve_local, resolve_remote
from envsync.config import EnvSyncConfig
from envsync.core.assembler import SnapshotSerializationError
from envsync.core.drift_engine import build_report
from envsync.core.severity import exceeds_threshold
from envsync.models.drift import Severity
from envsync.report.renderer import ReportRenderer


def drift_cmd(
    environment: Optional[str] = typer.Option(
        None, "--environment", "-e", help="Remote environment (reads <env>.snapshot.json)."
    ),
    local_path: Optional[Path] = typer.Option(
        None, "--local", help="Use a saved local snapshot instead of capturing."
    ),
    detailed: bool = typer.Option(False, "--detailed", "-d", help="Show every drift."),
    fail_on: Optional[Severity] = typer.Option(
        None, "--fail-on", help="Exit 1 when overall severity reaches this level."
    ),
) -> None:
    """Detect drift against a remote environment snapshot."""
    cfg = EnvSyncConfig()
    try:
        local = resolve_local(cfg, local_path)
        remote = resolve_remote(cfg, environment)
    except (OSError, SnapshotSerializationError) as exc:
        print_error("Could not detect drift", exc)
        raise typer.Exit(code=1)

    report = build_report(local, remote)
    ReportRenderer(console).print_report(report, detailed=detailed)

    if not report.has_drift:
        console.print("[green]No drift detected![/green]")
        return

    if fail_on is not None and exceeds_threshold(report.severity, fail_on):
        raise typer.Exit(code=1)
