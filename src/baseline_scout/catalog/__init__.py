"""Feature catalog retrieval: HTTP client, cache stores and the accessor.

Public API::

    from baseline_scout.catalog import CatalogAccessor, FileCache

    accessor = CatalogAccessor(FileCache(cache_dir))
    snapshot = asyncio.run(accessor.fetch())
"""

from __future__ import annotations

from baseline_scout.catalog.accessor import CatalogAccessor, CatalogSnapshot, fetch_catalog
from baseline_scout.catalog.cache import CacheEntry, CatalogCache, FileCache, MemoryCache

__all__ = [
    "CacheEntry",
    "CatalogAccessor",
    "CatalogCache",
    "CatalogSnapshot",
    "FileCache",
    "MemoryCache",
    "fetch_catalog",
]
