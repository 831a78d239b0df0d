"""Style scanner for CSS sources.

Parses stylesheets with tinycss2, which follows the CSS Syntax error
recovery rules: a bad rule or declaration becomes a ``ParseError`` node and
parsing continues, and an unterminated block is closed at end of input.

For every declaration, two checks run:

1. **Property**: ``css-properties-<property>``. Reported when the
   feature's status is one of ``property_levels`` (limited and newly
   available by default).
2. **Value keywords**: each bare keyword in the value, including inside
   function arguments, as ``css-properties-<property>-<keyword>``. Reported
   when the status is limited or newly available, named
   ``"<property>: <keyword>"`` and positioned at the keyword.

A ``(feature_id, line)`` pair is reported once per file. Rules nested in
conditional group at-rules (``@media``, ``@supports``, ``@container``...)
and CSS nesting inside style rules are descended into.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

import tinycss2

from baseline_scout.core.index import FeatureIndex
from baseline_scout.core.models import Issue
from baseline_scout.core.status import PriorityLevel, StatusLevel, classify
from baseline_scout.exceptions import ScanParseError
from baseline_scout.scanners.base import SourceScanner

logger = logging.getLogger(__name__)

DEFAULT_PROPERTY_LEVELS: frozenset[StatusLevel] = frozenset({
    StatusLevel.LIMITED,
    StatusLevel.NEWLY,
})

VALUE_LEVELS: frozenset[StatusLevel] = frozenset({
    StatusLevel.LIMITED,
    StatusLevel.NEWLY,
})

# At-rules whose block holds declarations rather than rules.
_DECLARATION_AT_RULES = frozenset({
    "font-face", "page", "property", "counter-style",
    "font-palette-values", "position-try", "view-transition",
})

_PARSE_OPTS = {"skip_comments": True, "skip_whitespace": True}


def _position(node: object) -> tuple[int, int]:
    """1-indexed (line, column) of a tinycss2 node, defaulting to (1, 1)."""
    line = getattr(node, "source_line", None) or 1
    column = getattr(node, "source_column", None) or 1
    return line, column


def iter_keywords(tokens: Iterable[object]) -> Iterable[object]:
    """Yield ident tokens of a declaration value, descending into blocks."""
    for token in tokens:
        kind = getattr(token, "type", None)
        if kind == "ident":
            yield token
        elif kind == "function":
            yield from iter_keywords(token.arguments)
        elif kind in ("() block", "[] block", "{} block"):
            yield from iter_keywords(token.content)


class StyleScanner(SourceScanner):
    """Scanner for CSS files.

    Args:
        policy: Optional priority policy.
        property_levels: Status levels reported for property-name matches.
    """

    language = "style"
    extensions = (".css",)
    prefixes = ("css-",)

    def __init__(
        self,
        policy: Mapping[StatusLevel, PriorityLevel] | None = None,
        property_levels: Iterable[StatusLevel] | None = None,
    ) -> None:
        super().__init__(policy)
        self.property_levels = (
            frozenset(property_levels) if property_levels is not None
            else DEFAULT_PROPERTY_LEVELS
        )

    def _collect(
        self,
        source: str,
        file_path: str,
        index: FeatureIndex,
        issues: list[Issue],
    ) -> None:
        seen: set[tuple[str, int]] = set()

        def emit(issue: Issue) -> None:
            key = (issue.feature_id, issue.line)
            if key not in seen:
                seen.add(key)
                issues.append(issue)

        try:
            rules = tinycss2.parse_stylesheet(source, **_PARSE_OPTS)
            self._walk_rules(rules, file_path, index, emit, nested=False)
        except (TypeError, ValueError, AttributeError, RecursionError) as exc:
            raise ScanParseError(str(exc)) from exc

    def _walk_rules(self, nodes, file_path, index, emit, *, nested: bool) -> None:
        for node in nodes:
            if node.type == "qualified-rule":
                self._walk_block(node.content, file_path, index, emit)
            elif node.type == "at-rule":
                if node.content is None:
                    continue
                if node.lower_at_keyword in _DECLARATION_AT_RULES or nested:
                    self._walk_block(node.content, file_path, index, emit)
                else:
                    children = tinycss2.parse_rule_list(node.content, **_PARSE_OPTS)
                    self._walk_rules(children, file_path, index, emit, nested=False)
            elif node.type == "error":
                line, _ = _position(node)
                logger.debug("%s:%d: skipped malformed CSS (%s)", file_path, line, node.message)

    def _walk_block(self, content, file_path, index, emit) -> None:
        """Walk a style block: declarations plus nested rules."""
        for item in tinycss2.parse_blocks_contents(content, **_PARSE_OPTS):
            if item.type == "declaration":
                self._check_declaration(item, file_path, index, emit)
            elif item.type in ("qualified-rule", "at-rule"):
                self._walk_rules([item], file_path, index, emit, nested=True)

    def _check_declaration(self, decl, file_path, index, emit) -> None:
        prop = decl.lower_name
        if prop.startswith("--"):
            return
        line, column = _position(decl)

        record = index.exact(f"css-properties-{prop}")
        if record is not None and classify(record) in self.property_levels:
            emit(self._make_issue(file_path, record, line, column))

        for keyword in iter_keywords(decl.value):
            value = keyword.lower_value
            record = index.exact(f"css-properties-{prop}-{value}")
            if record is None or classify(record) not in VALUE_LEVELS:
                continue
            kw_line = getattr(keyword, "source_line", None) or line
            kw_column = getattr(keyword, "source_column", None) or column
            emit(self._make_issue(
                file_path, record, kw_line, kw_column, name=f"{prop}: {value}",
            ))
