"""Baseline Scout CLI: Web-platform feature compatibility scanning.

Entry point for the ``baseline-scout`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    scan     Detect web features in a project and report their availability.
    catalog  Inspect, refresh or clear the cached feature catalog.

Usage::

    baseline-scout scan ./my-site
    baseline-scout scan ./my-site --format json --fail-on limited
    baseline-scout scan ./my-site --format diagnostics --offline
    baseline-scout catalog --refresh
"""

from __future__ import annotations

import click

from baseline_scout import __version__
from baseline_scout.cli.catalog_cmd import catalog_command
from baseline_scout.cli.scan import scan_command


@click.group()
@click.version_option(version=__version__)
def cli() -> None:
    """Baseline Scout: Baseline availability of the web features you use.

    Scan JavaScript/TypeScript, CSS and HTML sources for tracked web-platform
    features and rank each usage by how widely browsers support it.
    """


# Register all subcommands
cli.add_command(scan_command)
cli.add_command(catalog_command)
