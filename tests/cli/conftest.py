"""Shared fixtures for CLI tests.

Provides temporary web projects (clean, with limited-availability
features, empty) and isolates every CLI invocation from the user's real
catalog cache and configuration.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, patch

import pytest
from click.testing import CliRunner

from baseline_scout.config import ENV_CACHE_DIR, ENV_ENDPOINT


@pytest.fixture(autouse=True)
def isolated_cache(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the catalog cache at a fresh temporary directory."""
    cache_dir = tmp_path_factory.mktemp("cache")
    monkeypatch.setenv(ENV_CACHE_DIR, str(cache_dir))
    monkeypatch.delenv(ENV_ENDPOINT, raising=False)
    return cache_dir


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click CliRunner for invoking commands."""
    return CliRunner()


@pytest.fixture
def mock_catalog(catalog_payload: dict) -> Any:
    """Serve ``catalog_payload`` instead of hitting the network."""
    with patch(
        "baseline_scout.catalog.accessor.fetch_json",
        new_callable=AsyncMock,
        return_value=catalog_payload,
    ) as mock_fetch:
        yield mock_fetch


@pytest.fixture
def limited_project(tmp_path: Path) -> Path:
    """A project using a limited-availability JS API and HTML attribute."""
    project = tmp_path / "site"
    project.mkdir()
    (project / "app.js").write_text("const x = structuredClone(obj);\n")
    (project / "index.html").write_text("<div popover>Hi</div>\n")
    return project


@pytest.fixture
def clean_project(tmp_path: Path) -> Path:
    """A project whose only detected feature is widely available."""
    project = tmp_path / "clean"
    project.mkdir()
    (project / "site.css").write_text(".grid { gap: 1rem; }\n")
    (project / "main.js").write_text("console.log('hi');\n")
    return project


@pytest.fixture
def empty_dir(tmp_path: Path) -> Path:
    """A directory with nothing scannable."""
    target = tmp_path / "empty"
    target.mkdir()
    (target / "notes.txt").write_text("nothing to see\n")
    return target
