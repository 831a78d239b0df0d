"""Feature catalog accessor: cached, retried retrieval of tracked features.

Retrieval algorithm for ``CatalogAccessor.fetch()``:

1. Read the cache entry for the endpoint's cache key. A fresh entry
   (younger than the TTL, 24h by default) is returned without touching
   the network.
2. Otherwise download the catalog, following ``metadata.next_page_token``
   pagination, with up to ``max_attempts`` attempts and exponential
   backoff between them (1s, 2s, ... by default).
3. On success, write the snapshot to the cache and return it.
4. When every attempt failed, return the stale cache entry flagged
   ``offline``, or an empty offline snapshot when there is none.

``fetch()`` never raises for network, payload-shape or cache failures;
callers always get a usable (possibly empty) snapshot.

Usage::

    accessor = CatalogAccessor(FileCache(Path("~/.cache/baseline-scout")))
    snapshot = await accessor.fetch()
    if snapshot.offline:
        print("Using cached feature data")
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterator
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlsplit

import httpx

from baseline_scout.catalog.cache import CacheEntry, CatalogCache, FileCache, MemoryCache, now_ms
from baseline_scout.catalog.http_client import DEFAULT_TIMEOUT, fetch_json
from baseline_scout.config import DEFAULT_ENDPOINT, ScoutConfig, load_config
from baseline_scout.core.models import FeatureRecord, parse_features
from baseline_scout.exceptions import CacheError, CatalogUnavailableError

logger = logging.getLogger(__name__)

HOUR_MS = 60 * 60 * 1000


@dataclass(frozen=True)
class CatalogSnapshot:
    """Immutable catalog contents handed to the scanners.

    Attributes:
        features: Feature records in catalog order.
        offline: True when the network fetch failed and the data is a stale
            cache entry (or empty for lack of one).
        fetched_at: Epoch-ms timestamp of the data, None if empty offline.
        source: ``"cache"``, ``"network"``, ``"stale-cache"`` or ``"empty"``.
    """

    features: tuple[FeatureRecord, ...]
    offline: bool = False
    fetched_at: int | None = None
    source: str = "network"

    def __iter__(self) -> Iterator[FeatureRecord]:
        return iter(self.features)

    def __len__(self) -> int:
        return len(self.features)


class CatalogAccessor:
    """Fetches the feature catalog through an injected cache.

    Args:
        cache: Cache store; defaults to a fresh ``MemoryCache``.
        endpoint: Features endpoint URL.
        ttl_hours: Age after which a cache entry is stale.
        max_attempts: Network attempts per fetch.
        backoff_base: Delay before the second attempt, in seconds; doubles
            for each further attempt.
        max_pages: Upper bound on followed pagination tokens.
        timeout: Per-request timeout in seconds.
        sleep: Awaitable sleep used for backoff; defaults to
            ``asyncio.sleep``.
        transport: Optional httpx transport override.
    """

    def __init__(
        self,
        cache: CatalogCache | None = None,
        *,
        endpoint: str = DEFAULT_ENDPOINT,
        ttl_hours: float = 24.0,
        max_attempts: int = 3,
        backoff_base: float = 1.0,
        max_pages: int = 50,
        timeout: float = DEFAULT_TIMEOUT,
        sleep: Callable[[float], Awaitable[Any]] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.cache: CatalogCache = cache if cache is not None else MemoryCache()
        self.endpoint = endpoint
        self.ttl_ms = int(ttl_hours * HOUR_MS)
        self.max_attempts = max(1, max_attempts)
        self.backoff_base = backoff_base
        self.max_pages = max(1, max_pages)
        self.timeout = timeout
        self._sleep = sleep or asyncio.sleep
        self._transport = transport

    @classmethod
    def from_config(cls, config: ScoutConfig | None = None) -> CatalogAccessor:
        """Build an accessor with a ``FileCache`` from configuration.

        Without an explicit config, defaults plus the environment overrides
        of ``load_config()`` apply.
        """
        config = config or load_config()
        return cls(
            FileCache(config.cache_dir),
            endpoint=config.endpoint,
            ttl_hours=config.cache_ttl_hours,
            max_attempts=config.max_attempts,
            backoff_base=config.backoff_base,
            max_pages=config.max_pages,
            timeout=config.timeout,
        )

    @property
    def cache_key(self) -> str:
        """Cache key derived from the endpoint path.

        An endpoint that does not parse as a URL is used verbatim.
        """
        try:
            path = urlsplit(self.endpoint).path
        except ValueError:
            path = self.endpoint
        return f"api-cache:{path or '/'}"

    # -- Cache access (failures logged, never raised) --

    def _read_cache(self) -> CacheEntry | None:
        try:
            return self.cache.get(self.cache_key)
        except CacheError as exc:
            logger.warning("Cache read failed: %s", exc)
            return None

    def _write_cache(self, entry: CacheEntry) -> None:
        try:
            self.cache.set(self.cache_key, entry)
        except CacheError as exc:
            logger.warning("Cache write failed: %s", exc)

    def invalidate(self) -> None:
        """Drop the cached catalog so the next fetch goes to the network."""
        try:
            self.cache.invalidate(self.cache_key)
        except CacheError as exc:
            logger.warning("Cache invalidation failed: %s", exc)

    def cached(self) -> CatalogSnapshot:
        """Return the cached catalog without any network access.

        The snapshot is flagged ``offline`` when the entry is stale or
        missing.
        """
        entry = self._read_cache()
        if entry is None:
            return CatalogSnapshot(features=(), offline=True, source="empty")
        fresh = entry.is_fresh(self.ttl_ms)
        return CatalogSnapshot(
            features=entry.features,
            offline=not fresh,
            fetched_at=entry.timestamp,
            source="cache" if fresh else "stale-cache",
        )

    # -- Fetching --

    async def fetch(self) -> CatalogSnapshot:
        """Return the catalog, from a fresh cache entry or the network.

        Returns:
            A ``CatalogSnapshot``; never raises for network or cache
            failures.
        """
        entry = self._read_cache()
        if entry is not None and entry.is_fresh(self.ttl_ms):
            logger.debug("Catalog cache hit for %s", self.cache_key)
            return CatalogSnapshot(
                features=entry.features, fetched_at=entry.timestamp, source="cache",
            )

        last_error: CatalogUnavailableError | None = None
        for attempt in range(self.max_attempts):
            try:
                features = await self._download()
            except CatalogUnavailableError as exc:
                last_error = exc
                if attempt < self.max_attempts - 1:
                    delay = self.backoff_base * (2 ** attempt)
                    logger.info(
                        "Catalog fetch attempt %d/%d failed; retrying in %.1fs",
                        attempt + 1, self.max_attempts, delay,
                    )
                    await self._sleep(delay)
                continue
            fresh_entry = CacheEntry(timestamp=now_ms(), features=features)
            self._write_cache(fresh_entry)
            return CatalogSnapshot(
                features=features, fetched_at=fresh_entry.timestamp, source="network",
            )

        logger.warning("Catalog fetch failed after %d attempt(s): %s", self.max_attempts, last_error)
        stale = self._read_cache()
        if stale is not None:
            return CatalogSnapshot(
                features=stale.features, offline=True,
                fetched_at=stale.timestamp, source="stale-cache",
            )
        return CatalogSnapshot(features=(), offline=True, source="empty")

    async def refresh(self) -> CatalogSnapshot:
        """Invalidate the cache entry, then fetch."""
        self.invalidate()
        return await self.fetch()

    async def _download(self) -> tuple[FeatureRecord, ...]:
        """Download every page of the catalog.

        Raises:
            CatalogUnavailableError: If any page request fails.
        """
        features: list[FeatureRecord] = []
        params: dict[str, str] | None = None
        for _ in range(self.max_pages):
            payload = await fetch_json(
                self.endpoint, params=params, timeout=self.timeout, transport=self._transport,
            )
            if not isinstance(payload, dict):
                logger.warning("Unexpected catalog payload type: %s", type(payload).__name__)
                break
            features.extend(parse_features(payload.get("features")))
            token = _next_page_token(payload)
            if token is None:
                break
            params = {"page_token": token}
        else:
            logger.warning("Stopped following catalog pages after %d page(s)", self.max_pages)
        return tuple(features)


def _next_page_token(payload: dict[str, Any]) -> str | None:
    metadata = payload.get("metadata")
    if not isinstance(metadata, dict):
        return None
    token = metadata.get("next_page_token")
    return token if isinstance(token, str) and token else None


async def fetch_catalog(config: ScoutConfig | None = None) -> CatalogSnapshot:
    """Fetch the catalog with an accessor built from configuration."""
    return await CatalogAccessor.from_config(config).fetch()
