"""Tests for project file enumeration."""

from __future__ import annotations

from pathlib import Path

import pytest

from baseline_scout.adapters.files import collect_files
from baseline_scout.config import ScoutConfig


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A small web project with vendored and ignored content."""
    (tmp_path / "src" / "components").mkdir(parents=True)
    (tmp_path / "src" / "app.js").write_text("structuredClone(x);\n")
    (tmp_path / "src" / "components" / "Card.tsx").write_text("export {};\n")
    (tmp_path / "styles.css").write_text(".a { gap: 1rem; }\n")
    (tmp_path / "index.html").write_text("<div popover></div>\n")
    (tmp_path / "README.md").write_text("# readme\n")
    (tmp_path / "node_modules" / "lib").mkdir(parents=True)
    (tmp_path / "node_modules" / "lib" / "index.js").write_text("fetch();\n")
    (tmp_path / "dist").mkdir()
    (tmp_path / "dist" / "bundle.js").write_text("fetch();\n")
    return tmp_path


class TestCollectFiles:
    """Tests for collect_files()."""

    def test_sorted_relative_posix_paths(self, project: Path) -> None:
        paths = [path for path, _ in collect_files(project)]
        assert paths == [
            "index.html",
            "src/app.js",
            "src/components/Card.tsx",
            "styles.css",
        ]

    def test_reads_content(self, project: Path) -> None:
        files = dict(collect_files(project))
        assert files["src/app.js"] == "structuredClone(x);\n"

    def test_custom_exclusions(self, project: Path) -> None:
        config = ScoutConfig(exclude_dirs=("src",))
        paths = [path for path, _ in collect_files(project, config)]
        assert "node_modules/lib/index.js" in paths
        assert not any(p.startswith("src/") for p in paths)

    def test_size_limit(self, project: Path) -> None:
        (project / "big.js").write_text("x" * 100)
        config = ScoutConfig(max_file_bytes=50)
        paths = [path for path, _ in collect_files(project, config)]
        assert "big.js" not in paths
        assert "src/app.js" in paths

    def test_undecodable_bytes_replaced(self, tmp_path: Path) -> None:
        (tmp_path / "latin.css").write_bytes(b".a { content: '\xe9'; }")
        [(path, content)] = collect_files(tmp_path)
        assert path == "latin.css"
        assert "�" in content

    def test_extension_override(self, project: Path) -> None:
        paths = [path for path, _ in collect_files(project, extensions={".css"})]
        assert paths == ["styles.css"]

    def test_single_file_root(self, project: Path) -> None:
        assert collect_files(project / "styles.css") == [("styles.css", ".a { gap: 1rem; }\n")]

    def test_empty_directory(self, tmp_path: Path) -> None:
        assert collect_files(tmp_path) == []

    def test_uppercase_extension(self, tmp_path: Path) -> None:
        (tmp_path / "LEGACY.HTM").write_text("<p>x</p>")
        assert [p for p, _ in collect_files(tmp_path)] == ["LEGACY.HTM"]
