"""Shared fixtures for baseline_scout tests."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from baseline_scout.core.models import FeatureRecord

RecordFactory = Callable[..., FeatureRecord]


@pytest.fixture
def make_record() -> RecordFactory:
    """Factory for feature records with a raw status code."""

    def _make(identifier: str, status: str | None = "wide", name: str | None = None) -> FeatureRecord:
        return FeatureRecord(
            identifier=identifier,
            name=name or identifier,
            compatibility_status=status,
        )

    return _make


@pytest.fixture
def sample_catalog(make_record: RecordFactory) -> list[FeatureRecord]:
    """A small catalog covering every scanner's identifier namespace."""
    return [
        make_record("api-structuredClone", "limited", "structuredClone()"),
        make_record("api-fetch", "wide", "Fetch"),
        make_record("api-fetch-priority", "newly", "Fetch priority"),
        make_record("css-properties-container-type", "newly", "Container queries"),
        make_record("css-properties-gap", "wide", "gap"),
        make_record("css-properties-text-wrap", "limited", "text-wrap"),
        make_record("css-properties-text-wrap-balance", "newly", "text-wrap: balance"),
        make_record("html-element-dialog", "wide", "<dialog>"),
        make_record("html-attribute-popover", "limited", "Popover"),
        make_record("html-element-search", None, "<search>"),
    ]


@pytest.fixture
def catalog_payload() -> dict:
    """One page of the catalog API response."""
    return {
        "features": [
            {
                "feature_id": "api-structuredClone",
                "name": "structuredClone()",
                "baseline": {"status": "limited"},
                "spec": {"links": [{"link": "https://html.spec.whatwg.org/#structured-cloning"}]},
            },
            {
                "feature_id": "css-properties-gap",
                "name": "gap",
                "baseline": {"status": "widely", "low_date": "2020-03-01"},
            },
            {
                "identifier": "html-attribute-popover",
                "name": "Popover",
                "baseline": {"status": "newly", "since": "2024-04-16"},
                "mdn_url": "https://developer.mozilla.org/docs/Web/API/Popover_API",
            },
        ],
        "metadata": {"total": 3},
    }
