"""Scanner registry for dispatching files to language scanners by extension.

The ``ScannerRegistry`` maps lowercase file extensions to the registered
``SourceScanner`` instances. The aggregator asks it for exactly one scanner
per file; files with an extension nobody registered are skipped.

``default_registry()`` pre-registers the three built-in scanners::

    .js .jsx .mjs .cjs .ts .tsx .mts .cts  -> ScriptScanner
    .css                                   -> StyleScanner
    .html .htm                             -> MarkupScanner

Custom scanners can be added via ``register()``; a later registration
takes over the extensions it declares.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import PurePath

from baseline_scout.core.status import PriorityLevel, StatusLevel
from baseline_scout.scanners.base import SourceScanner
from baseline_scout.scanners.markup import MarkupScanner
from baseline_scout.scanners.script import ScriptScanner
from baseline_scout.scanners.style import StyleScanner


class ScannerRegistry:
    """Registry of language scanners keyed by file extension.

    Attributes:
        scanners: Registered scanner instances, in registration order.
    """

    def __init__(self) -> None:
        self.scanners: list[SourceScanner] = []
        self._by_extension: dict[str, SourceScanner] = {}

    def register(self, scanner: SourceScanner) -> None:
        """Add a scanner and claim its extensions."""
        self.scanners.append(scanner)
        for ext in scanner.extensions:
            self._by_extension[ext.lower()] = scanner

    def scanner_for(self, path: str) -> SourceScanner | None:
        """Return the scanner for a file path, or None if unsupported."""
        return self._by_extension.get(PurePath(path).suffix.lower())

    @property
    def extensions(self) -> frozenset[str]:
        """All extensions some scanner handles."""
        return frozenset(self._by_extension)


def default_registry(
    policy: Mapping[StatusLevel, PriorityLevel] | None = None,
    property_levels: Iterable[StatusLevel] | None = None,
) -> ScannerRegistry:
    """Create a ScannerRegistry pre-loaded with the built-in scanners.

    Args:
        policy: Priority policy shared by all scanners.
        property_levels: Status levels the style scanner reports for
            property-name matches.

    Returns:
        A registry with the script, style and markup scanners.
    """
    registry = ScannerRegistry()
    registry.register(ScriptScanner(policy))
    registry.register(StyleScanner(policy, property_levels=property_levels))
    registry.register(MarkupScanner(policy))
    return registry
