"""Project file enumeration for the scan core.

The scanners never touch the filesystem. ``collect_files`` turns a project
tree into the ordered ``(path, content)`` pairs the aggregator consumes:

- Directory entries are visited in sorted order, so repeated runs over the
  same tree produce identical results.
- Directories named in ``config.exclude_dirs`` are not entered.
- Only files with a supported extension and at most
  ``config.max_file_bytes`` bytes are read.
- Content is decoded as UTF-8 with undecodable bytes replaced.
- Paths are relative to the root, with ``/`` separators.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from baseline_scout.config import ScoutConfig
from baseline_scout.scanners.registry import default_registry

logger = logging.getLogger(__name__)


def collect_files(
    root: Path,
    config: ScoutConfig | None = None,
    extensions: Iterable[str] | None = None,
) -> list[tuple[str, str]]:
    """Enumerate and read the scannable files under ``root``.

    Args:
        root: Project directory, or a single file.
        config: Exclusions and size limit; defaults to ``ScoutConfig()``.
        extensions: Lowercase extensions to keep; defaults to those of the
            built-in scanners.

    Returns:
        Ordered ``(relative_path, content)`` pairs.
    """
    config = config or ScoutConfig()
    wanted = frozenset(e.lower() for e in (extensions or default_registry().extensions))
    root = Path(root)

    if root.is_file():
        candidates: Iterable[Path] = [root]
        base = root.parent
    else:
        candidates = _walk(root, frozenset(config.exclude_dirs))
        base = root

    files: list[tuple[str, str]] = []
    for path in candidates:
        if path.suffix.lower() not in wanted:
            continue
        content = _read_source(path, config.max_file_bytes)
        if content is not None:
            files.append((path.relative_to(base).as_posix(), content))
    logger.debug("Collected %d file(s) under %s", len(files), root)
    return files


def _walk(directory: Path, excluded: frozenset[str]) -> Iterator[Path]:
    """Yield regular files depth-first in sorted order."""
    try:
        entries = sorted(directory.iterdir())
    except (PermissionError, OSError) as exc:
        logger.warning("Cannot list %s: %s", directory, exc)
        return
    for entry in entries:
        if entry.is_symlink():
            continue
        if entry.is_dir():
            if entry.name not in excluded:
                yield from _walk(entry, excluded)
        elif entry.is_file():
            yield entry


def _read_source(path: Path, max_bytes: int) -> str | None:
    try:
        size = path.stat().st_size
        if size > max_bytes:
            logger.info("Skipping %s: %d bytes exceeds the %d byte limit", path, size, max_bytes)
            return None
        return path.read_bytes().decode("utf-8", errors="replace")
    except (PermissionError, OSError) as exc:
        logger.warning("Cannot read %s: %s", path, exc)
        return None
