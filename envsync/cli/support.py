"""Helpers shared by the CLI commands."""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from envsync.capture import default_collectors
from envsync.config import EnvSyncConfig
from envsync.core.assembler import SnapshotAssembler, load_snapshot
from envsync.models.snapshot import Snapshot

console = Console()
err_console = Console(stderr=True)


def configure_logging(level: str) -> None:
    """Route all ``envsync`` loggers through Rich on stderr."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def local_assembler(
    cfg: EnvSyncConfig,
    *,
    include_docker: bool | None = None,
    include_native_modules: bool | None = None,
    redact_sensitive: bool | None = None,
) -> SnapshotAssembler:
    """Assembler over the local machine, options defaulting to *cfg*."""
    collectors = default_collectors(
        cfg.project_dir,
        redact_sensitive=cfg.redact_sensitive if redact_sensitive is None else redact_sensitive,
        include_docker=cfg.include_docker if include_docker is None else include_docker,
        include_native_modules=(
            cfg.include_native_modules
            if include_native_modules is None
            else include_native_modules
        ),
    )
    return SnapshotAssembler(collectors, max_workers=cfg.capture_workers)


def resolve_local(cfg: EnvSyncConfig, local_path: Path | None) -> Snapshot:
    """A saved local snapshot when *local_path* is given, else a live capture."""
    if local_path is not None:
        return load_snapshot(local_path)
    with console.status("Capturing local environment..."):
        return local_assembler(cfg).assemble()


def resolve_remote(cfg: EnvSyncConfig, environment: str | None) -> Snapshot:
    """Load ``<environment>.snapshot.json`` from the snapshot directory."""
    return load_snapshot(cfg.snapshot_path(environment or cfg.default_remote))


def print_error(message: str, exc: BaseException | None = None) -> None:
    console.print(f"[bold red]Error:[/bold red] {message}")
    if exc is not None:
        console.print(f"[red]{exc}[/red]")
