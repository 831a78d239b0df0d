"""Async HTTP client utilities for the feature catalog.

Provides a thin wrapper around ``httpx.AsyncClient`` with standardised
timeouts, user-agent headers, and error handling, so that catalog HTTP
behaviour is consistent and testable.

Unlike a best-effort fetch, ``fetch_json`` raises ``CatalogUnavailableError``
on every failure: the catalog accessor needs to tell a failed attempt from
an empty catalog in order to retry.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from baseline_scout import __version__
from baseline_scout.exceptions import CatalogUnavailableError

logger = logging.getLogger(__name__)

# Timeout for all catalog HTTP requests (seconds).
DEFAULT_TIMEOUT: float = 30.0

# User-Agent sent with every request.
USER_AGENT: str = f"BaselineScout/{__version__}"


async def fetch_json(
    url: str,
    *,
    params: dict[str, str] | None = None,
    timeout: float = DEFAULT_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Any:
    """Fetch a URL and parse the response as JSON.

    Args:
        url: The URL to fetch.
        params: Optional query parameters.
        timeout: Request timeout in seconds.
        transport: Optional transport override (tests use
            ``httpx.MockTransport``).

    Returns:
        Parsed JSON response.

    Raises:
        CatalogUnavailableError: On HTTP errors, timeouts, transport
            failures, a malformed URL or an invalid JSON body.
    """
    try:
        async with httpx.AsyncClient(
            timeout=timeout,
            headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
            follow_redirects=True,
            transport=transport,
        ) as client:
            resp = await client.get(url, params=params)
            resp.raise_for_status()
            return resp.json()
    except httpx.TimeoutException as exc:
        logger.warning("Timeout fetching %s", url)
        raise CatalogUnavailableError(f"Timeout fetching {url}") from exc
    except httpx.HTTPStatusError as exc:
        logger.warning("HTTP %d from %s", exc.response.status_code, url)
        raise CatalogUnavailableError(
            f"HTTP {exc.response.status_code} from {url}"
        ) from exc
    except (httpx.RequestError, httpx.InvalidURL, ValueError) as exc:
        logger.warning("Request error for %s: %s", url, exc)
        raise CatalogUnavailableError(f"Request error for {url}: {exc}") from exc
