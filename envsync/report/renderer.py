"""Rich terminal rendering for snapshots, drift reports and sync results.

Color scheme
------------
- bold red : CRITICAL
- red      : HIGH
- yellow   : MEDIUM
- blue     : LOW
- green    : NONE / success
"""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from envsync.models.drift import Drift, DriftCategory, DriftReport, Severity
from envsync.models.snapshot import Snapshot
from envsync.models.sync import SyncResult

_SEVERITY_STYLES: dict[Severity, str] = {
    Severity.CRITICAL: "bold red",
    Severity.HIGH: "red",
    Severity.MEDIUM: "yellow",
    Severity.LOW: "blue",
    Severity.NONE: "green",
}


def _value(value: Any) -> str:
    return "(absent)" if value is None else str(value)


def _severity(severity: Severity) -> str:
    style = _SEVERITY_STYLES[severity]
    return f"[{style}]{severity.value.upper()}[/{style}]"


class ReportRenderer:
    """Renders envsync models to a Rich console.

    Parameters
    ----------
    console:
        Rich Console instance.  A new one is created if not provided.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def snapshot_panel(self, snapshot: Snapshot) -> Panel:
        deps = snapshot.dependencies
        env = snapshot.env_vars
        lines = [
            f"Environment: [bold]{snapshot.environment.value}[/bold]",
            f"Node.js: {snapshot.runtime.version or 'unknown'}",
            f"Platform: {snapshot.runtime.platform or '?'} ({snapshot.runtime.arch or '?'})",
            f"Dependencies: {len(deps.production)} production, {len(deps.development)} dev",
            f"Environment Variables: {len(env.variables)} ({len(env.redacted)} redacted)",
            f"Docker: {snapshot.container.version or 'Not available'}",
            f"Snapshot Hash: [cyan]{snapshot.hash}[/cyan]",
        ]
        return Panel("\n".join(lines), title="Environment Snapshot", border_style="blue")

    def summary_table(self, report: DriftReport) -> Table:
        summary = report.summary
        table = Table(title=f"Drift Summary: overall {_severity(report.severity)}")
        table.add_column("Category", style="cyan")
        table.add_column("Drifts", justify="right")
        for category in DriftCategory:
            table.add_row(category.value, str(summary.by_category.get(category, 0)))
        table.add_section()
        for severity in (Severity.CRITICAL, Severity.HIGH, Severity.MEDIUM, Severity.LOW):
            table.add_row(_severity(severity), str(getattr(summary, severity.value)))
        table.add_section()
        table.add_row("[bold]Total[/bold]", f"[bold]{summary.total}[/bold]")
        return table

    def drift_table(self, drifts: list[Drift], *, title: str = "Drift Details") -> Table:
        table = Table(title=title, show_lines=True)
        table.add_column("Severity")
        table.add_column("Category", style="cyan")
        table.add_column("Field", style="bold", no_wrap=True)
        table.add_column("Local")
        table.add_column("Remote")
        table.add_column("Impact")
        table.add_column("Recommendation", style="green")
        for drift in drifts:
            table.add_row(
                _severity(drift.severity),
                drift.category.value,
                drift.field,
                _value(drift.local),
                _value(drift.remote),
                drift.impact,
                drift.recommendation,
            )
        return table

    def sync_table(self, result: SyncResult) -> Table:
        table = Table(title="Sync Results")
        table.add_column("Status", justify="center")
        table.add_column("Field", style="bold", no_wrap=True)
        table.add_column("Action / Error")
        for action in result.actions:
            if action.success:
                table.add_row("[green]OK[/green]", action.drift.field, action.action or "")
            else:
                table.add_row("[red]FAILED[/red]", action.drift.field, f"[red]{action.error}[/red]")
        return table

    # ------------------------------------------------------------------
    # Print helpers
    # ------------------------------------------------------------------

    def print_report(self, report: DriftReport, *, detailed: bool = False) -> None:
        self.console.print(self.summary_table(report))
        if detailed and report.has_drift:
            self.console.print(self.drift_table(report.drifts))

    def print_sync_result(self, result: SyncResult) -> None:
        self.console.print(self.sync_table(result))
        s = result.summary
        style = "green" if result.success else "red"
        self.console.print(
            f"[{style}]{s.succeeded} succeeded, {s.failed} failed of {s.total}[/{style}]"
        )
        if result.rollback_point:
            self.console.print(f"[dim]Rollback point: {result.rollback_point}[/dim]")
