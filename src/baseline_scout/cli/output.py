"""Rich output formatting helpers for the Baseline Scout CLI.

Provides the status-colored scan dashboard, the catalog summary and the
``--verbose`` logging setup.

Status Color Mapping:
    LIMITED = bold red, NEWLY = yellow, WIDELY = green, UNKNOWN = dim
"""

from __future__ import annotations

import logging
from collections import Counter

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from baseline_scout.catalog.accessor import CatalogSnapshot
from baseline_scout.core.models import ScanResult
from baseline_scout.core.status import PriorityLevel, StatusLevel, classify

_STATUS_STYLES: dict[StatusLevel, str] = {
    StatusLevel.LIMITED: "bold red",
    StatusLevel.NEWLY: "yellow",
    StatusLevel.WIDELY: "green",
    StatusLevel.UNKNOWN: "dim",
}

_PRIORITY_STYLES: dict[PriorityLevel, str] = {
    PriorityLevel.HIGH: "bold red",
    PriorityLevel.MEDIUM: "yellow",
    PriorityLevel.LOW: "cyan",
}

console = Console()
err_console = Console(stderr=True)


def status_style(status: StatusLevel) -> str:
    """Return the Rich style string for a given status level."""
    return _STATUS_STYLES.get(status, "white")


def score_style(score: int) -> str:
    """Return the Rich style for a compatibility score."""
    if score >= 90:
        return "bold green"
    if score >= 60:
        return "yellow"
    return "bold red"


def configure_logging(verbose: bool) -> None:
    """Route log records through a RichHandler on stderr.

    Args:
        verbose: DEBUG when True, WARNING otherwise.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def print_scan_result(result: ScanResult, target: str) -> None:
    """Print the scan dashboard: score, status distribution and issues.

    Args:
        result: Aggregate scan result.
        target: Scanned path, shown in the header.
    """
    header = Text.assemble(
        ("Target: ", "bold"), (target, ""),
        ("  Score: ", "bold"), (str(result.score), score_style(result.score)),
        ("  Files: ", "bold"), (str(result.files_scanned), ""),
    )
    console.print(Panel(header, title="Baseline Scout"))

    if result.offline:
        console.print("[yellow]Feature catalog unavailable; results use cached data.[/yellow]")
    if result.cancelled:
        console.print("[yellow]Scan cancelled; results are partial.[/yellow]")

    stats_table = Table(title="Status Distribution", show_header=True)
    stats_table.add_column("Status", style="bold")
    stats_table.add_column("Count", justify="right")
    for level in StatusLevel:
        stats_table.add_row(
            Text(level.value, style=status_style(level)), str(result.stats.get(level, 0)),
        )
    console.print(stats_table)

    if not result.issues:
        console.print("[green]No tracked web features detected.[/green]")
        return

    issues_table = Table(title="Detected Features", show_header=True, header_style="bold")
    issues_table.add_column("File", style="bold")
    issues_table.add_column("Line", justify="right")
    issues_table.add_column("Feature")
    issues_table.add_column("Status", justify="center")
    issues_table.add_column("Priority", justify="center")
    for issue in result.issues:
        issues_table.add_row(
            issue.file,
            f"{issue.line}:{issue.column}",
            issue.name,
            Text(issue.status.value, style=status_style(issue.status)),
            Text(issue.priority.label, style=_PRIORITY_STYLES.get(issue.priority, "white")),
        )
    console.print(issues_table)
    console.print(f"[bold]{result.total}[/bold] feature usage(s) detected")


def print_catalog_summary(snapshot: CatalogSnapshot) -> None:
    """Print catalog size, freshness and status distribution."""
    counts = Counter(classify(record) for record in snapshot)
    state = "[yellow]offline[/yellow]" if snapshot.offline else "[green]online[/green]"
    console.print(
        Panel(
            f"[bold]{len(snapshot)}[/bold] tracked feature(s) | source: {snapshot.source} | {state}",
            title="Feature Catalog",
        )
    )
    table = Table(show_header=True)
    table.add_column("Status", style="bold")
    table.add_column("Features", justify="right")
    for level in StatusLevel:
        table.add_row(Text(level.value, style=status_style(level)), str(counts.get(level, 0)))
    console.print(table)

