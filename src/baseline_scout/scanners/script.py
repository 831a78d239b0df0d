"""Script scanner for JavaScript, TypeScript, JSX and TSX sources.

Parses the source with tree-sitter (TSX grammar for ``.js``/``.jsx``/
``.tsx`` and friends, the plain TypeScript grammar for ``.ts`` files so that
``<T>value`` type assertions parse). tree-sitter is error-tolerant:
malformed code produces ``ERROR`` nodes and the rest of the tree is still
walked, so a syntax error costs the issues inside the broken region only.

Every identifier-like token is checked against ``SCRIPT_FEATURES``. On a
hit, the fragment is resolved through the feature index and an issue is
emitted at the token. Scope is not resolved: a local variable named
``fetch`` is reported like the global.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from pathlib import PurePath

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser

from baseline_scout.core.index import FeatureIndex
from baseline_scout.core.models import FeatureRecord, Issue
from baseline_scout.core.status import PriorityLevel, StatusLevel
from baseline_scout.exceptions import ScanParseError
from baseline_scout.scanners.base import SourceScanner
from baseline_scout.scanners.script_features import SCRIPT_FEATURES

logger = logging.getLogger(__name__)

_TSX = Language(tree_sitter_typescript.language_tsx())
_TYPESCRIPT = Language(tree_sitter_typescript.language_typescript())

# Extensions parsed with the plain TypeScript grammar.
_TS_ONLY_EXTENSIONS = frozenset({".ts", ".mts", ".cts"})

_IDENTIFIER_TYPES = frozenset({
    "identifier",
    "property_identifier",
    "shorthand_property_identifier",
    "shorthand_property_identifier_pattern",
    "private_property_identifier",
    "type_identifier",
})


def iter_identifiers(root: Node) -> Iterator[Node]:
    """Yield identifier-like nodes in source order (iterative pre-order walk)."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type in _IDENTIFIER_TYPES:
            yield node
        stack.extend(reversed(node.children))


def char_column(source: bytes, node: Node) -> int:
    """1-indexed character column of a node.

    tree-sitter reports byte columns; non-ASCII text earlier on the line
    would otherwise shift every position after it.
    """
    byte_col = node.start_point[1]
    line_prefix = source[node.start_byte - byte_col:node.start_byte]
    return len(line_prefix.decode("utf-8", errors="replace")) + 1


class ScriptScanner(SourceScanner):
    """Scanner for JS/TS/JSX/TSX files.

    Args:
        policy: Optional priority policy.
        features: Identifier-to-fragment table; defaults to
            ``SCRIPT_FEATURES``.
    """

    language = "script"
    extensions = (".js", ".jsx", ".mjs", ".cjs", ".ts", ".tsx", ".mts", ".cts")
    prefixes = ("api-", "js-")

    def __init__(
        self,
        policy: Mapping[StatusLevel, PriorityLevel] | None = None,
        features: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(policy)
        self.features = dict(features if features is not None else SCRIPT_FEATURES)

    def _grammar(self, file_path: str) -> Language:
        suffix = PurePath(file_path).suffix.lower()
        return _TYPESCRIPT if suffix in _TS_ONLY_EXTENSIONS else _TSX

    def _resolve_table(self, index: FeatureIndex) -> dict[str, FeatureRecord]:
        """Resolve every table entry against the index once per file."""
        resolved: dict[str, FeatureRecord] = {}
        for ident, fragment in self.features.items():
            record = index.find(fragment)
            if record is not None:
                resolved[ident] = record
        return resolved

    def _collect(
        self,
        source: str,
        file_path: str,
        index: FeatureIndex,
        issues: list[Issue],
    ) -> None:
        table = self._resolve_table(index)
        if not table:
            return

        data = source.encode("utf-8", errors="replace")
        try:
            tree = Parser(self._grammar(file_path)).parse(data)
        except (ValueError, TypeError, RuntimeError) as exc:
            raise ScanParseError(str(exc)) from exc

        if tree.root_node.has_error:
            logger.debug("Recovered from syntax errors in %s", file_path)

        for node in iter_identifiers(tree.root_node):
            name = data[node.start_byte:node.end_byte].decode("utf-8", errors="replace")
            record = table.get(name.lstrip("#"))
            if record is None:
                continue
            issues.append(self._make_issue(
                file_path, record,
                line=node.start_point[0] + 1,
                column=char_column(data, node),
            ))
