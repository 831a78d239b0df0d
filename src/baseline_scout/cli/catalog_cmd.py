"""``baseline-scout catalog``: Inspect or reset the cached feature catalog.

Usage::

    baseline-scout catalog              # Fetch (cache first) and summarize
    baseline-scout catalog --refresh    # Drop the cache, then fetch
    baseline-scout catalog --clear      # Drop the cache only
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import click

from baseline_scout.catalog.accessor import CatalogAccessor
from baseline_scout.config import load_config
from baseline_scout.exceptions import ConfigError


@click.command("catalog")
@click.option("--refresh", is_flag=True, default=False, help="Invalidate the cache before fetching.")
@click.option("--clear", is_flag=True, default=False, help="Invalidate the cache and exit.")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
def catalog_command(refresh: bool, clear: bool, verbose: bool) -> None:
    """Show the feature catalog's size, freshness and status distribution."""
    from baseline_scout.cli.output import configure_logging, print_catalog_summary

    if verbose:
        configure_logging(verbose)

    try:
        config = load_config(Path.cwd())
    except ConfigError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(2)

    accessor = CatalogAccessor.from_config(config)
    if clear:
        accessor.invalidate()
        click.echo("Feature catalog cache cleared.")
        return

    snapshot = asyncio.run(accessor.refresh() if refresh else accessor.fetch())
    print_catalog_summary(snapshot)
