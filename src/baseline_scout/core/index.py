"""Indexed feature lookup shared by the language scanners.

A ``FeatureIndex`` is built once per scan from the catalog snapshot,
restricted to the identifier prefixes a scanner cares about (``css-`` for
the style scanner, ``api-``/``js-`` for the script scanner...). It replaces
per-token linear searches over the catalog with two lookups:

- ``exact(identifier)``: dictionary lookup of a full identifier.
- ``find(fragment)``: resolves a key fragment against normalized
  identifiers. Normalization lowercases and drops every non-alphanumeric
  character, so ``structuredClone``, ``structured-clone`` and
  ``api-structuredClone`` all meet on ``structuredclone``.

Tie-break for ``find`` when several records match:

1. A record whose normalized identifier, with its domain prefix removed,
   equals the fragment wins (``api-fetch`` beats ``api-fetch-priority``
   for ``fetch``).
2. Otherwise the first record in catalog order whose normalized identifier
   contains the fragment.

Both steps are deterministic for a given catalog order, and results are
memoized per fragment.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from baseline_scout.core.models import FeatureRecord

_NON_ALNUM = re.compile(r"[^a-z0-9]")


def normalize_key(value: str) -> str:
    """Lowercase and strip every non-alphanumeric character."""
    return _NON_ALNUM.sub("", value.lower())


class FeatureIndex:
    """Lookup structure over the catalog records matching a set of prefixes.

    Attributes:
        prefixes: Identifier prefixes this index was built for.
        records: Matching records, in catalog order.
    """

    def __init__(self, catalog: Iterable[FeatureRecord], prefixes: tuple[str, ...]) -> None:
        self.prefixes = prefixes
        self.records: tuple[FeatureRecord, ...] = tuple(
            r for r in catalog if r.identifier.startswith(prefixes)
        )
        self._by_id: dict[str, FeatureRecord] = {}
        self._by_stem: dict[str, FeatureRecord] = {}
        self._normalized: list[tuple[str, FeatureRecord]] = []
        self._memo: dict[str, FeatureRecord | None] = {}

        for record in self.records:
            # First occurrence wins for duplicate identifiers.
            self._by_id.setdefault(record.identifier, record)
            self._by_stem.setdefault(self._stem(record.identifier), record)
            self._normalized.append((normalize_key(record.identifier), record))

    def _stem(self, identifier: str) -> str:
        for prefix in self.prefixes:
            if identifier.startswith(prefix):
                return normalize_key(identifier[len(prefix):])
        return normalize_key(identifier)

    def __len__(self) -> int:
        return len(self.records)

    def __bool__(self) -> bool:
        return bool(self.records)

    def exact(self, identifier: str) -> FeatureRecord | None:
        """Return the record with exactly this identifier, if any."""
        return self._by_id.get(identifier)

    def find(self, fragment: str) -> FeatureRecord | None:
        """Resolve a key fragment to a record using the documented tie-break.

        Args:
            fragment: Raw fragment; normalized before lookup.

        Returns:
            The winning record, or None when nothing matches.
        """
        key = normalize_key(fragment)
        if not key:
            return None
        if key in self._memo:
            return self._memo[key]
        match = self._by_stem.get(key)
        if match is None:
            match = next((r for norm, r in self._normalized if key in norm), None)
        self._memo[key] = match
        return match
