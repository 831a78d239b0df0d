"""Markup scanner for HTML sources.

Streams the document through the standard library's ``HTMLParser``. On
every start tag (self-closing included) the tag name, its attributes and
the position where the tag opened are checked:

- ``html-element-<tag>`` for the element,
- ``html-attribute-<name>`` for each distinct attribute name.

Attribute values and text content are not analysed.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from html.parser import HTMLParser

from baseline_scout.core.index import FeatureIndex
from baseline_scout.core.models import Issue
from baseline_scout.exceptions import ScanParseError
from baseline_scout.scanners.base import SourceScanner

logger = logging.getLogger(__name__)

TagHandler = Callable[[str, list[str], int, int], None]


class _TagStream(HTMLParser):
    """HTMLParser that reports (tag, attribute names, line, column) per open tag."""

    def __init__(self, on_tag: TagHandler) -> None:
        super().__init__(convert_charrefs=True)
        self._on_tag = on_tag

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        line, offset = self.getpos()
        names = list(dict.fromkeys(name for name, _ in attrs))
        self._on_tag(tag, names, line, offset + 1)


class MarkupScanner(SourceScanner):
    """Scanner for HTML files."""

    language = "markup"
    extensions = (".html", ".htm")
    prefixes = ("html-",)

    def _collect(
        self,
        source: str,
        file_path: str,
        index: FeatureIndex,
        issues: list[Issue],
    ) -> None:
        def on_tag(tag: str, attributes: list[str], line: int, column: int) -> None:
            record = index.exact(f"html-element-{tag}")
            if record is not None:
                issues.append(self._make_issue(file_path, record, line, column))
            for attr in attributes:
                record = index.exact(f"html-attribute-{attr}")
                if record is not None:
                    issues.append(self._make_issue(file_path, record, line, column))

        stream = _TagStream(on_tag)
        try:
            stream.feed(source)
            stream.close()
        except (AssertionError, ValueError) as exc:
            raise ScanParseError(str(exc)) from exc
