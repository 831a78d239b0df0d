"""Editor diagnostics for detected issues.

Issues carry 1-indexed line and column numbers. Editors (LSP, VS Code)
expect 0-indexed positions, so the conversion happens here and nowhere else.

Severity mapping::

    limited availability -> warning
    newly available      -> information
    anything else        -> hint
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from baseline_scout.core.models import Issue
from baseline_scout.core.status import StatusLevel

DIAGNOSTIC_SOURCE = "Baseline Scout"

_SEVERITY: dict[StatusLevel, str] = {
    StatusLevel.LIMITED: "warning",
    StatusLevel.NEWLY: "information",
}


@dataclass(frozen=True)
class Diagnostic:
    """A single-line editor diagnostic with a 0-indexed range."""

    file: str
    line: int
    start_column: int
    end_column: int
    severity: str
    message: str
    code: str
    source: str = DIAGNOSTIC_SOURCE

    def to_dict(self) -> dict[str, Any]:
        """LSP-style dictionary representation."""
        return {
            "range": {
                "start": {"line": self.line, "character": self.start_column},
                "end": {"line": self.line, "character": self.end_column},
            },
            "severity": self.severity,
            "message": self.message,
            "code": self.code,
            "source": self.source,
        }


def to_diagnostic(issue: Issue) -> Diagnostic:
    """Convert an issue into a diagnostic spanning the feature name."""
    line = max(issue.line - 1, 0)
    column = max(issue.column - 1, 0)
    return Diagnostic(
        file=issue.file,
        line=line,
        start_column=column,
        end_column=column + len(issue.name),
        severity=_SEVERITY.get(issue.status, "hint"),
        message=(
            f"The '{issue.name}' feature has {issue.status.value} "
            "support according to Baseline."
        ),
        code=issue.feature_id,
    )


def group_by_file(issues: Iterable[Issue]) -> dict[str, list[Diagnostic]]:
    """Group diagnostics per file, keeping issue order within each file."""
    grouped: dict[str, list[Diagnostic]] = {}
    for issue in issues:
        grouped.setdefault(issue.file, []).append(to_diagnostic(issue))
    return grouped
