"""Catalog cache: explicit, injectable key-value stores for catalog snapshots.

A cache maps a string key (``api-cache:<endpoint path>``) to a
``CacheEntry`` holding the fetch timestamp (epoch milliseconds) and the
feature records. Two implementations share the ``CatalogCache`` protocol:

- ``MemoryCache``: per-process dictionary, used in tests and for
  short-lived embedding.
- ``FileCache``: one JSON file per key under a cache directory::

      {"key": "api-cache:/v1/features", "timestamp": 1760000000000,
       "data": [{"identifier": "...", "name": "...", ...}]}

  Writes go to a temporary file in the same directory followed by an
  atomic ``os.replace``, so concurrent writers race to last-writer-wins and
  a reader never sees a half-written entry.

Caches raise ``CacheError`` on I/O failure; the accessor logs and treats
the cache as empty.
"""

from __future__ import annotations

import hashlib
import json
import logging
import os
import tempfile
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from baseline_scout.core.models import FeatureRecord, parse_features
from baseline_scout.exceptions import CacheError

logger = logging.getLogger(__name__)


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


@dataclass(frozen=True)
class CacheEntry:
    """One cached catalog snapshot."""

    timestamp: int
    features: tuple[FeatureRecord, ...]

    def is_fresh(self, ttl_ms: int, now: int | None = None) -> bool:
        """True when the entry is younger than ``ttl_ms``."""
        current = now if now is not None else now_ms()
        return current - self.timestamp < ttl_ms


class CatalogCache(Protocol):
    """Key-value store for catalog snapshots."""

    def get(self, key: str) -> CacheEntry | None:
        """Return the entry for ``key``, or None if absent."""

    def set(self, key: str, entry: CacheEntry) -> None:
        """Store ``entry`` under ``key``, replacing any previous entry."""

    def invalidate(self, key: str) -> None:
        """Remove the entry for ``key`` if present."""


class MemoryCache:
    """In-memory ``CatalogCache``."""

    def __init__(self) -> None:
        self._entries: dict[str, CacheEntry] = {}

    def get(self, key: str) -> CacheEntry | None:
        return self._entries.get(key)

    def set(self, key: str, entry: CacheEntry) -> None:
        self._entries[key] = entry

    def invalidate(self, key: str) -> None:
        self._entries.pop(key, None)


class FileCache:
    """On-disk ``CatalogCache`` with one JSON file per key.

    Args:
        directory: Cache directory; created on first write.
    """

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        """File holding the entry for ``key``."""
        digest = hashlib.sha256(key.encode("utf-8")).hexdigest()[:32]
        return self.directory / f"catalog-{digest}.json"

    def get(self, key: str) -> CacheEntry | None:
        path = self.path_for(key)
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            raise CacheError(f"Cannot read cache file {path}: {exc}") from exc
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise CacheError(f"Corrupt cache file {path}: {exc}") from exc

        if not isinstance(payload, dict):
            raise CacheError(f"Corrupt cache file {path}: not an object")
        timestamp = payload.get("timestamp")
        if isinstance(timestamp, bool) or not isinstance(timestamp, int):
            raise CacheError(f"Corrupt cache file {path}: bad timestamp")
        return CacheEntry(timestamp=timestamp, features=parse_features(payload.get("data")))

    def set(self, key: str, entry: CacheEntry) -> None:
        payload = {
            "key": key,
            "timestamp": entry.timestamp,
            "data": [record.to_api() for record in entry.features],
        }
        path = self.path_for(key)
        tmp_name: str | None = None
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w", encoding="utf-8", dir=self.directory,
                prefix=".tmp-", suffix=".json", delete=False,
            ) as tmp:
                tmp_name = tmp.name
                json.dump(payload, tmp)
            os.replace(tmp_name, path)
        except OSError as exc:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            raise CacheError(f"Cannot write cache file {path}: {exc}") from exc
        logger.debug("Cached %d feature(s) under %s", len(entry.features), key)

    def invalidate(self, key: str) -> None:
        path = self.path_for(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise CacheError(f"Cannot remove cache file {path}: {exc}") from exc
