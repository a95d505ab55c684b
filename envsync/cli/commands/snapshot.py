"""``envsync snapshot``: capture the local environment."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from envsync.cli.support import console, local_assembler
from envsync.config import EnvSyncConfig
from envsync.core.assembler import save_snapshot, serialize_snapshot
from envsync.models.snapshot import EnvironmentTag
from envsync.report.renderer import ReportRenderer


def snapshot_cmd(
    save: Optional[Path] = typer.Option(
        None, "--save", "-s", help="Write the snapshot to this file."
    ),
    environment: Optional[EnvironmentTag] = typer.Option(
        None, "--environment", "-e", help="Environment tag (detected when omitted)."
    ),
    no_docker: bool = typer.Option(False, "--no-docker", help="Skip container capture."),
    no_native: bool = typer.Option(
        False, "--no-native", help="Skip native binary discovery."
    ),
    no_redact: bool = typer.Option(
        False, "--no-redact", help="Keep sensitive environment values in the clear."
    ),
) -> None:
    """Capture an environment snapshot and print or save it."""
    cfg = EnvSyncConfig()
    assembler = local_assembler(
        cfg,
        include_docker=not no_docker,
        include_native_modules=not no_native,
        redact_sensitive=not no_redact,
    )
    with console.status("Capturing environment snapshot..."):
        snapshot = assembler.assemble(environment)

    console.print(ReportRenderer(console).snapshot_panel(snapshot))

    if save is not None:
        save_snapshot(snapshot, save)
        console.print(f"[green]Snapshot saved to:[/green] {save}")
    else:
        console.print_json(serialize_snapshot(snapshot))
