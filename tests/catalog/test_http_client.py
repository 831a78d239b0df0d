"""Tests for the async catalog HTTP client.

All requests go through ``httpx.MockTransport``; no network access.
"""

from __future__ import annotations

import asyncio

import httpx
import pytest

from baseline_scout.catalog.http_client import USER_AGENT, fetch_json
from baseline_scout.exceptions import CatalogUnavailableError

URL = "https://api.example.test/v1/features"


def _fetch(handler, **kwargs):
    return asyncio.run(fetch_json(URL, transport=httpx.MockTransport(handler), **kwargs))


class TestFetchJson:
    """Tests for fetch_json()."""

    def test_returns_parsed_json(self) -> None:
        data = _fetch(lambda request: httpx.Response(200, json={"features": []}))
        assert data == {"features": []}

    def test_sends_headers_and_params(self) -> None:
        seen: dict = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["ua"] = request.headers["User-Agent"]
            seen["token"] = request.url.params.get("page_token")
            return httpx.Response(200, json={})

        _fetch(handler, params={"page_token": "abc"})
        assert seen == {"ua": USER_AGENT, "token": "abc"}

    @pytest.mark.parametrize("status", [404, 500, 503])
    def test_http_error_status(self, status: int) -> None:
        with pytest.raises(CatalogUnavailableError, match=f"HTTP {status}"):
            _fetch(lambda request: httpx.Response(status))

    def test_invalid_json_body(self) -> None:
        with pytest.raises(CatalogUnavailableError):
            _fetch(lambda request: httpx.Response(200, text="<html>oops</html>"))

    def test_connection_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(CatalogUnavailableError, match="Request error"):
            _fetch(handler)

    def test_timeout(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        with pytest.raises(CatalogUnavailableError, match="Timeout"):
            _fetch(handler)

    def test_malformed_url(self) -> None:
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={}))
        with pytest.raises(CatalogUnavailableError):
            asyncio.run(fetch_json("http://\x00x/", transport=transport))
