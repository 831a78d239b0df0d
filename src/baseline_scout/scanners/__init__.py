"""Language scanners for JavaScript/TypeScript, CSS and HTML sources."""

from baseline_scout.scanners.base import SourceScanner
from baseline_scout.scanners.markup import MarkupScanner
from baseline_scout.scanners.registry import ScannerRegistry, default_registry
from baseline_scout.scanners.script import ScriptScanner
from baseline_scout.scanners.style import StyleScanner

__all__ = [
    "MarkupScanner",
    "ScannerRegistry",
    "ScriptScanner",
    "SourceScanner",
    "StyleScanner",
    "default_registry",
]
