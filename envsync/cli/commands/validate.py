"""``envsync validate``: CI gate on drift severity."""

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


def validate_cmd(
    environment: Optional[str] = typer.Option(
        None, "--environment", "-e", help="Remote environment (reads <env>.snapshot.json)."
    ),
    local_path: Optional[Path] = typer.Option(
        None, "--local", help="Use a saved local snapshot instead of capturing."
    ),
    fail_on: Optional[Severity] = typer.Option(
        None, "--fail-on", help="Threshold (default from ENVSYNC_FAIL_ON, else high)."
    ),
) -> None:
    """Fail when drift reaches the severity threshold."""
    cfg = EnvSyncConfig()
    threshold = fail_on or cfg.fail_on
    try:
        local = resolve_local(cfg, local_path)
        remote = resolve_remote(cfg, environment)
    except (OSError, SnapshotSerializationError) as exc:
        print_error("Could not validate environment", exc)
        raise typer.Exit(code=1)

    report = build_report(local, remote)
    ReportRenderer(console).print_report(report)

    if not report.has_drift:
        console.print("[green]Environment validation passed[/green]")
        return

    if exceeds_threshold(report.severity, threshold):
        console.print(
            f"[red]Environment validation failed (severity: {report.severity.value})[/red]"
        )
        raise typer.Exit(code=1)

    console.print(
        f"[green]Environment validation passed "
        f"(severity below {threshold.value} threshold)[/green]"
    )
