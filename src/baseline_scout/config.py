"""Configuration for catalog access, file enumeration and triage policy.

Settings come from three layers, later layers winning:

1. Defaults on ``ScoutConfig``.
2. An optional ``.baseline-scout.yaml`` in the scanned project root.
3. Environment variables ``BASELINE_SCOUT_ENDPOINT`` and
   ``BASELINE_SCOUT_CACHE_DIR``.

Example ``.baseline-scout.yaml``::

    cache_ttl_hours: 12
    exclude_dirs: [node_modules, .git, vendor]
    priority:
      newly: high
    report_property_levels: [limited]

A config file that cannot be read or is not a YAML mapping is ignored with a
warning. Values of the wrong type or unknown level names raise
``ConfigError``.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any
from urllib.parse import urlsplit

import yaml

from baseline_scout.core.status import (
    PriorityLevel,
    StatusLevel,
    build_priority_policy,
    parse_status_name,
)
from baseline_scout.exceptions import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".baseline-scout.yaml"
DEFAULT_ENDPOINT = "https://api.webstatus.dev/v1/features"
ENV_ENDPOINT = "BASELINE_SCOUT_ENDPOINT"
ENV_CACHE_DIR = "BASELINE_SCOUT_CACHE_DIR"


def _default_cache_dir() -> Path:
    return Path.home() / ".cache" / "baseline-scout"


@dataclass(frozen=True)
class ScoutConfig:
    """Resolved configuration.

    Attributes:
        endpoint: Features endpoint URL.
        cache_dir: Directory of the on-disk catalog cache.
        cache_ttl_hours: Age after which a cached catalog is stale.
        max_attempts: Network attempts before falling back to cache.
        backoff_base: First retry delay in seconds; doubles per attempt.
        max_pages: Upper bound on followed pagination tokens.
        timeout: Per-request timeout in seconds.
        exclude_dirs: Directory names skipped during file enumeration.
        max_file_bytes: Larger files are skipped during enumeration.
        priority: Status name to priority name overrides.
        report_property_levels: Status names the style scanner reports for
            property-name matches; None keeps the scanner default.
    """

    endpoint: str = DEFAULT_ENDPOINT
    cache_dir: Path = field(default_factory=_default_cache_dir)
    cache_ttl_hours: float = 24.0
    max_attempts: int = 3
    backoff_base: float = 1.0
    max_pages: int = 50
    timeout: float = 30.0
    exclude_dirs: tuple[str, ...] = ("node_modules", ".git", "dist", "build")
    max_file_bytes: int = 2 * 1024 * 1024
    priority: Mapping[str, str] = field(default_factory=dict)
    report_property_levels: tuple[str, ...] | None = None

    @property
    def priority_policy(self) -> Mapping[StatusLevel, PriorityLevel]:
        """Complete priority policy with this config's overrides applied."""
        return build_priority_policy(self.priority)

    @property
    def property_levels(self) -> frozenset[StatusLevel] | None:
        """Parsed ``report_property_levels``."""
        if self.report_property_levels is None:
            return None
        return frozenset(parse_status_name(name) for name in self.report_property_levels)


_NUMBER_FIELDS = {
    "cache_ttl_hours": float,
    "backoff_base": float,
    "timeout": float,
    "max_attempts": int,
    "max_pages": int,
    "max_file_bytes": int,
}


def _coerce(data: Mapping[str, Any]) -> dict[str, Any]:
    """Validate and coerce raw YAML values into ``ScoutConfig`` fields."""
    known = {f.name for f in fields(ScoutConfig)}
    values: dict[str, Any] = {}
    for key, value in data.items():
        if key not in known:
            logger.warning("Ignoring unknown config key: %s", key)
            continue
        if key in _NUMBER_FIELDS:
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigError(f"{key} must be a number, got {value!r}")
            if value <= 0:
                raise ConfigError(f"{key} must be positive, got {value!r}")
            values[key] = _NUMBER_FIELDS[key](value)
        elif key == "cache_dir":
            values[key] = Path(str(value)).expanduser()
        elif key == "endpoint":
            if not isinstance(value, str) or not value:
                raise ConfigError(f"endpoint must be a URL string, got {value!r}")
            values[key] = _check_endpoint(value, "endpoint")
        elif key in ("exclude_dirs", "report_property_levels"):
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise ConfigError(f"{key} must be a list of strings")
            values[key] = tuple(value)
        elif key == "priority":
            if not isinstance(value, dict):
                raise ConfigError("priority must be a mapping of status to priority")
            values[key] = dict(value)
    return values


def load_config(project_root: Path | None = None) -> ScoutConfig:
    """Load configuration for a project.

    Args:
        project_root: Directory that may hold ``.baseline-scout.yaml``.

    Returns:
        The resolved ``ScoutConfig``.

    Raises:
        ConfigError: If the config file holds invalid values.
    """
    config = ScoutConfig()
    if project_root is not None:
        data = _safe_load_yaml(project_root / CONFIG_FILENAME)
        if data:
            config = replace(config, **_coerce(data))
    _validate_levels(config)

    env_endpoint = os.environ.get(ENV_ENDPOINT)
    if env_endpoint:
        config = replace(config, endpoint=_check_endpoint(env_endpoint, ENV_ENDPOINT))
    env_cache = os.environ.get(ENV_CACHE_DIR)
    if env_cache:
        config = replace(config, cache_dir=Path(env_cache).expanduser())
    return config


def _check_endpoint(value: str, source: str) -> str:
    """Return ``value`` if it is an absolute http(s) URL, else raise ``ConfigError``."""
    try:
        parts = urlsplit(value)
    except ValueError as exc:
        raise ConfigError(f"{source} is not a valid URL: {value!r}") from exc
    if parts.scheme not in ("http", "https") or not parts.netloc or not value.isprintable():
        raise ConfigError(f"{source} must be an http(s) URL, got {value!r}")
    return value


def _validate_levels(config: ScoutConfig) -> None:
    """Parse level names now so bad names fail at load time, not mid-scan."""
    build_priority_policy(config.priority)
    for name in config.report_property_levels or ():
        parse_status_name(name)


def _safe_load_yaml(file_path: Path) -> dict[str, Any] | None:
    """Load a YAML mapping, returning None if absent, unreadable or malformed."""
    if not file_path.is_file():
        return None
    try:
        data = yaml.safe_load(file_path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError, UnicodeDecodeError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", file_path, exc)
        return None
    if data is None:
        return None
    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: top level is not a mapping", file_path)
        return None
    return data
