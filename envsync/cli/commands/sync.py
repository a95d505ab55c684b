"""``envsync sync``: reconcile the local environment toward a remote one."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer

from envsync.cli.support import console, print_error, resolve_local, resolve_remote
from envsync.config import EnvSyncConfig
from envsync.core.assembler import SnapshotSerializationError
from envsync.core.drift_engine import build_report
from envsync.models.drift import DriftCategory, Severity
from envsync.models.sync import SyncOptions
from envsync.report.renderer import ReportRenderer
from envsync.sync.orchestrator import SyncOrchestrator, filter_drifts
from envsync.sync.tools import SubprocessTools


def sync_cmd(
    environment: Optional[str] = typer.Option(
        None, "--environment", "-e", help="Remote environment (reads <env>.snapshot.json)."
    ),
    local_path: Optional[Path] = typer.Option(
        None, "--local", help="Use a saved local snapshot instead of capturing."
    ),
    auto_fix: bool = typer.Option(
        False, "--auto-fix", help="Apply changes without a confirmation step."
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show what would change."),
    categories: Optional[List[DriftCategory]] = typer.Option(
        None, "--category", "-c", help="Only sync these categories (repeatable)."
    ),
    max_severity: Optional[Severity] = typer.Option(
        None, "--max-severity", help="Only sync drifts up to this severity."
    ),
) -> None:
    """Synchronize the local environment with a remote snapshot."""
    cfg = EnvSyncConfig()
    try:
        local = resolve_local(cfg, local_path)
        remote = resolve_remote(cfg, environment)
    except (OSError, SnapshotSerializationError) as exc:
        print_error("Could not synchronize environments", exc)
        raise typer.Exit(code=1)

    report = build_report(local, remote)
    if not report.has_drift:
        console.print("[green]No drift detected - environments are in sync![/green]")
        return

    options = SyncOptions(
        auto_fix=auto_fix,
        dry_run=dry_run,
        categories=categories or None,
        max_severity=max_severity,
    )
    renderer = ReportRenderer(console)
    console.print(renderer.drift_table(filter_drifts(report.drifts, options), title="Sync Plan"))

    if dry_run:
        console.print("[yellow]Dry run mode - no changes will be made[/yellow]")
    elif not auto_fix:
        console.print(
            "[yellow]Re-run with --auto-fix to apply these changes, "
            "or --dry-run to simulate them.[/yellow]"
        )
        raise typer.Exit(code=1)

    orchestrator = SyncOrchestrator(
        SubprocessTools(cfg.project_dir, timeout=cfg.command_timeout_seconds),
        rollback_dir=cfg.rollback_dir,
    )
    result = orchestrator.sync(report, options)
    renderer.print_sync_result(result)

    if not result.success:
        console.print(
            f"[yellow]Some changes failed ({result.summary.failed} of "
            f"{result.summary.total})[/yellow]"
        )
        raise typer.Exit(code=1)
