"""Adapters between the scan core and its surroundings.

- ``files``: enumerate and read a project tree into ``(path, content)`` pairs.
- ``diagnostics``: convert issues to editor diagnostics (0-indexed ranges).
"""

from __future__ import annotations

from baseline_scout.adapters.diagnostics import Diagnostic, group_by_file, to_diagnostic
from baseline_scout.adapters.files import collect_files

__all__ = [
    "Diagnostic",
    "collect_files",
    "group_by_file",
    "to_diagnostic",
]
