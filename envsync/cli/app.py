"""Main Typer application: registers all CLI commands.

Entry point: ``envsync`` (configured via pyproject.toml scripts).
"""

from __future__ import annotations

from typing import Optional

import typer

from envsync.cli.commands.compare import compare_cmd
from envsync.cli.commands.drift import drift_cmd
from envsync.cli.commands.snapshot import snapshot_cmd
from envsync.cli.commands.sync import sync_cmd
from envsync.cli.commands.validate import validate_cmd
from envsync.cli.support import configure_logging
from envsync.config import EnvSyncConfig

app = typer.Typer(
    name="envsync",
    help="envsync: detect and reconcile environment drift.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


@app.callback()
def main_callback(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Logging level (default from ENVSYNC_LOG_LEVEL)."
    ),
) -> None:
    """envsync: detect and reconcile environment drift."""
    configure_logging(log_level or EnvSyncConfig().log_level)


# Register subcommands
app.command(name="snapshot", help="Capture an environment snapshot.")(snapshot_cmd)
app.command(name="compare", help="Compare two snapshot files.")(compare_cmd)
app.command(name="drift", help="Detect drift against a remote snapshot.")(drift_cmd)
app.command(name="validate", help="Fail when drift reaches a severity threshold.")(validate_cmd)
app.command(name="sync", help="Synchronize the local environment.")(sync_cmd)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
