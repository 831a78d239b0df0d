"""Tests for the editor diagnostics adapter."""

from __future__ import annotations

import pytest

from baseline_scout.adapters.diagnostics import DIAGNOSTIC_SOURCE, group_by_file, to_diagnostic
from baseline_scout.core.models import Issue
from baseline_scout.core.status import PriorityLevel, StatusLevel


def _issue(status: StatusLevel, file: str = "app.js", line: int = 3, column: int = 7) -> Issue:
    return Issue(
        file=file,
        feature_id="api-structuredClone",
        name="structuredClone",
        status=status,
        priority=PriorityLevel.HIGH,
        line=line,
        column=column,
    )


class TestToDiagnostic:
    """Tests for to_diagnostic()."""

    def test_zero_indexed_range(self) -> None:
        diag = to_diagnostic(_issue(StatusLevel.LIMITED))
        assert (diag.line, diag.start_column, diag.end_column) == (2, 6, 6 + len("structuredClone"))

    @pytest.mark.parametrize(
        ("status", "severity"),
        [
            (StatusLevel.LIMITED, "warning"),
            (StatusLevel.NEWLY, "information"),
            (StatusLevel.WIDELY, "hint"),
            (StatusLevel.UNKNOWN, "hint"),
        ],
    )
    def test_severity(self, status: StatusLevel, severity: str) -> None:
        assert to_diagnostic(_issue(status)).severity == severity

    def test_message_code_and_source(self) -> None:
        diag = to_diagnostic(_issue(StatusLevel.NEWLY))
        assert diag.message == (
            "The 'structuredClone' feature has newly available support according to Baseline."
        )
        assert diag.code == "api-structuredClone"
        assert diag.source == DIAGNOSTIC_SOURCE == "Baseline Scout"

    def test_first_position_maps_to_origin(self) -> None:
        diag = to_diagnostic(_issue(StatusLevel.LIMITED, line=1, column=1))
        assert (diag.line, diag.start_column) == (0, 0)

    def test_to_dict(self) -> None:
        data = to_diagnostic(_issue(StatusLevel.LIMITED, line=1, column=11)).to_dict()
        assert data["range"] == {
            "start": {"line": 0, "character": 10},
            "end": {"line": 0, "character": 25},
        }
        assert data["severity"] == "warning"


class TestGroupByFile:
    """Tests for group_by_file()."""

    def test_groups_and_keeps_order(self) -> None:
        issues = [
            _issue(StatusLevel.LIMITED, file="a.js", line=5),
            _issue(StatusLevel.NEWLY, file="b.css", line=1),
            _issue(StatusLevel.WIDELY, file="a.js", line=2),
        ]
        grouped = group_by_file(issues)
        assert list(grouped) == ["a.js", "b.css"]
        assert [d.line for d in grouped["a.js"]] == [4, 1]

    def test_empty(self) -> None:
        assert group_by_file([]) == {}
