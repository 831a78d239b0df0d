"""``baseline-scout scan PATH``: Detect web-platform feature usage.

Enumerates the JavaScript/TypeScript, CSS and HTML files under PATH,
fetches the feature catalog (or reads only the cache with ``--offline``),
and reports every detected feature with its Baseline status.

Exit Codes:
    0: Scan completed (and no feature at or above ``--fail-on``).
    1: A detected feature meets the ``--fail-on`` threshold.
    2: No scannable files under PATH, or invalid configuration.
"""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path

import click
from rich.progress import BarColumn, Progress, TaskProgressColumn, TextColumn

from baseline_scout.adapters.diagnostics import group_by_file
from baseline_scout.adapters.files import collect_files
from baseline_scout.catalog.accessor import CatalogAccessor, CatalogSnapshot
from baseline_scout.config import load_config
from baseline_scout.core.aggregator import run_scan
from baseline_scout.core.models import ScanResult
from baseline_scout.core.status import StatusLevel
from baseline_scout.exceptions import ConfigError
from baseline_scout.scanners.registry import default_registry

# --fail-on threshold -> statuses that trip it
_FAIL_ON: dict[str, frozenset[StatusLevel]] = {
    "limited": frozenset({StatusLevel.LIMITED}),
    "newly": frozenset({StatusLevel.LIMITED, StatusLevel.NEWLY}),
    "none": frozenset(),
}


def _load_catalog(accessor: CatalogAccessor, offline: bool) -> CatalogSnapshot:
    """Fetch the catalog, or read the cache alone when offline."""
    if offline:
        return accessor.cached()
    return asyncio.run(accessor.fetch())


def _diagnostics_json(result: ScanResult) -> dict[str, list[dict]]:
    """Convert scan issues to per-file LSP-style diagnostics."""
    return {
        file: [d.to_dict() for d in diagnostics]
        for file, diagnostics in group_by_file(result.issues).items()
    }


def _exit_code(result: ScanResult, fail_on: str) -> int:
    tripping = _FAIL_ON[fail_on]
    return 1 if any(issue.status in tripping for issue in result.issues) else 0


@click.command("scan")
@click.argument("path", type=click.Path(exists=True))
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json", "diagnostics"]),
    default="text",
    help="Output format: text (default), json, or diagnostics.",
)
@click.option(
    "--offline",
    is_flag=True,
    default=False,
    help="Use the cached feature catalog only; never touch the network.",
)
@click.option(
    "--fail-on",
    type=click.Choice(["limited", "newly", "none"]),
    default="none",
    help="Exit 1 when a feature at or below this availability is used.",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
def scan_command(
    path: str,
    output_format: str,
    offline: bool,
    fail_on: str,
    verbose: bool,
) -> None:
    """Scan PATH for web features and their Baseline availability.

    Exit code 1 when --fail-on is hit, 2 when nothing scannable was found.
    """
    from baseline_scout.cli.output import configure_logging, print_scan_result

    if verbose:
        configure_logging(verbose)

    target = Path(path)
    try:
        config = load_config(target if target.is_dir() else target.parent)
    except ConfigError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(2)

    files = collect_files(target, config)
    if not files:
        if output_format == "text":
            click.echo("No scannable files found in the target path.")
        else:
            empty = ScanResult.empty()
            payload = empty.to_dict() if output_format == "json" else _diagnostics_json(empty)
            click.echo(json.dumps(payload, indent=2))
        sys.exit(2)

    snapshot = _load_catalog(CatalogAccessor.from_config(config), offline)
    registry = default_registry(config.priority_policy, config.property_levels)

    if output_format == "text":
        with Progress(
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            transient=True,
        ) as progress:
            task = progress.add_task(f"Scanning {len(files)} file(s)", total=100)
            result = run_scan(
                files, snapshot.features,
                on_progress=lambda pct: progress.update(task, completed=pct),
                registry=registry, offline=snapshot.offline,
            )
        print_scan_result(result, str(target))
    else:
        result = run_scan(files, snapshot.features, registry=registry, offline=snapshot.offline)
        payload = result.to_dict() if output_format == "json" else _diagnostics_json(result)
        click.echo(json.dumps(payload, indent=2))

    sys.exit(_exit_code(result, fail_on))
