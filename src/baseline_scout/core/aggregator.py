"""Scan aggregator: runs the language scanners over a set of files.

Files are processed strictly in order, one at a time:

1. Check the cancellation signal (between files, never mid-file).
2. Pick the scanner for the file's extension; unsupported files produce no
   issues but still count toward progress.
3. Scan, collect the issues, report progress as
   ``100 * (i + 1) / n`` rounded half up.

One ``FeatureIndex`` per scanner is built up front from the catalog
snapshot, so the catalog is filtered once per scan rather than once per
file. A scanner that raises unexpectedly costs that file's issues only;
the scan always completes with a valid ``ScanResult``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from typing import TYPE_CHECKING, Protocol

from baseline_scout.core.index import FeatureIndex
from baseline_scout.core.models import FeatureRecord, Issue, ScanResult
from baseline_scout.scanners.base import SourceScanner
from baseline_scout.scanners.registry import ScannerRegistry, default_registry

if TYPE_CHECKING:
    from baseline_scout.catalog.accessor import CatalogAccessor

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int], None]


class CancelSignal(Protocol):
    """Anything with an ``is_set()`` method, e.g. ``threading.Event``."""

    def is_set(self) -> bool: ...


def run_scan(
    files: Sequence[tuple[str, str]],
    catalog: Iterable[FeatureRecord],
    on_progress: ProgressCallback | None = None,
    cancel: CancelSignal | None = None,
    *,
    registry: ScannerRegistry | None = None,
    offline: bool = False,
) -> ScanResult:
    """Scan in-memory files and aggregate the issues.

    Args:
        files: Ordered ``(path, content)`` pairs.
        catalog: Catalog snapshot; treated as immutable for the whole scan.
        on_progress: Called with the completion percentage after each file.
        cancel: Checked before each file; when set, the scan stops and the
            result covers the files processed so far.
        registry: Scanner registry; defaults to ``default_registry()``.
        offline: Recorded on the result (catalog freshness metadata).

    Returns:
        The aggregate ``ScanResult``.
    """
    registry = registry or default_registry()
    snapshot = tuple(catalog)
    indexes: dict[int, FeatureIndex] = {
        id(scanner): scanner.build_index(snapshot) for scanner in registry.scanners
    }

    issues: list[Issue] = []
    total = len(files)
    processed = 0
    cancelled = False

    for i, (path, content) in enumerate(files):
        if cancel is not None and cancel.is_set():
            logger.info("Scan cancelled after %d of %d file(s)", processed, total)
            cancelled = True
            break

        scanner = registry.scanner_for(path)
        if scanner is None:
            logger.debug("Skipping %s: no scanner for this extension", path)
        else:
            issues.extend(_scan_file(scanner, path, content, indexes[id(scanner)]))

        processed += 1
        if on_progress is not None:
            on_progress((200 * (i + 1) + total) // (2 * total))

    return ScanResult.from_issues(
        issues, offline=offline, cancelled=cancelled, files_scanned=processed,
    )


def _scan_file(
    scanner: SourceScanner, path: str, content: str, index: FeatureIndex,
) -> list[Issue]:
    logger.debug("Scanning %s with the %s scanner", path, scanner.language)
    try:
        return scanner.scan(content, path, index)
    except Exception:
        logger.warning("Scanner failed on %s", path, exc_info=True)
        return []


async def scan_files(
    files: Sequence[tuple[str, str]],
    accessor: CatalogAccessor | None = None,
    on_progress: ProgressCallback | None = None,
    cancel: CancelSignal | None = None,
    *,
    registry: ScannerRegistry | None = None,
) -> ScanResult:
    """Fetch the catalog, then scan the files against it.

    Catalog failures never surface here: an unavailable catalog yields an
    empty snapshot, hence zero issues and a score of 100.

    Args:
        files: Ordered ``(path, content)`` pairs.
        accessor: Catalog accessor; defaults to one built from the
            environment configuration.
        on_progress: Progress callback, see ``run_scan``.
        cancel: Cancellation signal, see ``run_scan``.
        registry: Scanner registry, see ``run_scan``.

    Returns:
        The aggregate ``ScanResult`` with the snapshot's ``offline`` flag.
    """
    if accessor is None:
        from baseline_scout.catalog.accessor import CatalogAccessor

        accessor = CatalogAccessor.from_config()
    snapshot = await accessor.fetch()
    return run_scan(
        files, snapshot.features, on_progress, cancel,
        registry=registry, offline=snapshot.offline,
    )
