"""Base interface shared by the language scanners.

Every scanner implements the ``SourceScanner`` abstract base class and
exposes the same contract::

    scanner.scan(source, file_path, catalog) -> list[Issue]

- ``source`` is the raw text of one file; scanners never touch the
  filesystem.
- ``catalog`` is either the catalog snapshot (any iterable of
  ``FeatureRecord``) or a ``FeatureIndex`` prebuilt with
  ``build_index()``. The aggregator builds one index per scanner per scan;
  direct callers can simply pass the record list.
- Positions are 1-indexed for both line and column.

``scan`` must not raise on malformed source. Subclasses report parser
failures as ``ScanParseError``; the base class logs them and returns the
issues collected up to that point.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping

from baseline_scout.core.index import FeatureIndex
from baseline_scout.core.models import FeatureRecord, Issue
from baseline_scout.core.status import PriorityLevel, StatusLevel, classify, priority_of
from baseline_scout.exceptions import ScanParseError

logger = logging.getLogger(__name__)


class SourceScanner(ABC):
    """Abstract base class for language scanners.

    Attributes:
        language: Short language name used in logs and dispatch tables.
        extensions: Lowercase file extensions this scanner handles.
        prefixes: Catalog identifier prefixes relevant to this language.
        policy: Priority policy applied to every issue.
    """

    language: str = ""
    extensions: tuple[str, ...] = ()
    prefixes: tuple[str, ...] = ()

    def __init__(self, policy: Mapping[StatusLevel, PriorityLevel] | None = None) -> None:
        self.policy = policy

    def build_index(self, catalog: Iterable[FeatureRecord]) -> FeatureIndex:
        """Build the feature index for this scanner's identifier prefixes."""
        return FeatureIndex(catalog, self.prefixes)

    def scan(
        self,
        source: str,
        file_path: str,
        catalog: Iterable[FeatureRecord] | FeatureIndex,
    ) -> list[Issue]:
        """Scan one source file and return the detected feature usages.

        Args:
            source: Raw file contents.
            file_path: Path or identifier recorded on each issue.
            catalog: Catalog records or a prebuilt ``FeatureIndex``.

        Returns:
            Issues in detection order. Partial on parser failure; empty if
            nothing in the catalog is relevant to this language.
        """
        index = catalog if isinstance(catalog, FeatureIndex) else self.build_index(catalog)
        issues: list[Issue] = []
        if not index:
            return issues
        try:
            self._collect(source, file_path, index, issues)
        except ScanParseError as exc:
            logger.warning(
                "Failed to parse %s in %s: %s (kept %d issue(s))",
                self.language, file_path, exc, len(issues),
            )
        return issues

    @abstractmethod
    def _collect(
        self,
        source: str,
        file_path: str,
        index: FeatureIndex,
        issues: list[Issue],
    ) -> None:
        """Parse ``source`` and append issues to ``issues`` as they are found.

        Appending in place (rather than returning a list) is what lets
        ``scan`` keep partial results when the parser fails midway.

        Raises:
            ScanParseError: If the parser cannot continue.
        """

    def _make_issue(
        self,
        file_path: str,
        record: FeatureRecord,
        line: int,
        column: int,
        name: str | None = None,
    ) -> Issue:
        """Classify a matched record and build the issue for it."""
        status = classify(record)
        return Issue(
            file=file_path,
            feature_id=record.identifier,
            name=name if name is not None else record.name,
            status=status,
            priority=priority_of(status, self.policy),
            line=max(line, 1),
            column=max(column, 1),
        )
