"""Data models for the scanner: FeatureRecord, Issue, ScanResult.

These are the core data types produced and consumed by the scanning
pipeline. They are intentionally decoupled from the scanners so that
downstream modules (CLI formatters, diagnostics adapter, catalog cache) can
import them without pulling in any parser.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Any

from baseline_scout.core.status import PriorityLevel, StatusLevel


# ---------------------------------------------------------------------------
# FeatureRecord: One tracked web-platform feature
# ---------------------------------------------------------------------------


def _as_str(value: Any, default: str = "") -> str:
    return value if isinstance(value, str) else default


def _spec_urls(payload: Mapping[str, Any]) -> tuple[str, ...]:
    """Collect specification URLs from either catalog payload shape."""
    urls: list[str] = []
    specs = payload.get("specifications")
    if isinstance(specs, list):
        for spec in specs:
            if isinstance(spec, str):
                urls.append(spec)
            elif isinstance(spec, Mapping) and isinstance(spec.get("url"), str):
                urls.append(spec["url"])
    spec_block = payload.get("spec")
    if isinstance(spec_block, Mapping) and isinstance(spec_block.get("links"), list):
        for link in spec_block["links"]:
            if isinstance(link, Mapping) and isinstance(link.get("link"), str):
                urls.append(link["link"])
    return tuple(dict.fromkeys(urls))


def _browser_support(payload: Mapping[str, Any]) -> tuple[tuple[str, str], ...]:
    """Collect (browser, version) pairs from either catalog payload shape."""
    support: dict[str, str] = {}
    entries = payload.get("browser_support")
    if isinstance(entries, list):
        for entry in entries:
            if not isinstance(entry, Mapping) or not isinstance(entry.get("browser"), str):
                continue
            detail = entry.get("support")
            added = detail.get("version_added") if isinstance(detail, Mapping) else None
            support[entry["browser"]] = str(added) if added not in (None, False) else ""
    impls = payload.get("browser_implementations")
    if isinstance(impls, Mapping):
        for browser, impl in impls.items():
            if isinstance(browser, str) and isinstance(impl, Mapping):
                support.setdefault(browser, _as_str(impl.get("version")))
    return tuple(sorted(support.items()))


@dataclass(frozen=True)
class FeatureRecord:
    """A single tracked web-platform feature from the catalog.

    Records are immutable; a catalog refresh replaces the whole list.

    Attributes:
        identifier: Stable namespaced key (``css-properties-gap``,
            ``html-element-dialog``, ``api-fetch``...).
        name: Human-readable display name.
        description: Informational text, opaque to the scanners.
        spec_urls: Specification URLs.
        mdn_url: MDN reference URL, if any.
        compatibility_status: Raw ``baseline.status`` code (``wide``,
            ``newly``, ``limited``) or None when absent.
        baseline_since: Date the feature reached its Baseline status.
        browser_support: Sorted (browser, version) pairs.
    """

    identifier: str
    name: str
    description: str = ""
    spec_urls: tuple[str, ...] = ()
    mdn_url: str | None = None
    compatibility_status: str | None = None
    baseline_since: str | None = None
    browser_support: tuple[tuple[str, str], ...] = ()

    @classmethod
    def from_api(cls, payload: Any) -> FeatureRecord | None:
        """Build a record from one element of the catalog's ``features`` array.

        Malformed optional fields fall back to defaults. Returns None when
        the payload is not an object or has no string identifier, since a
        record without an identifier can never match anything.
        """
        if not isinstance(payload, Mapping):
            return None
        identifier = payload.get("identifier", payload.get("feature_id"))
        if not isinstance(identifier, str) or not identifier:
            return None
        baseline = payload.get("baseline")
        status = since = None
        if isinstance(baseline, Mapping):
            status = baseline.get("status") if isinstance(baseline.get("status"), str) else None
            since = baseline.get("since") if isinstance(baseline.get("since"), str) else None
            if since is None and isinstance(baseline.get("low_date"), str):
                since = baseline["low_date"]
        mdn_url = payload.get("mdn_url")
        return cls(
            identifier=identifier,
            name=_as_str(payload.get("name"), identifier),
            description=_as_str(payload.get("description")),
            spec_urls=_spec_urls(payload),
            mdn_url=mdn_url if isinstance(mdn_url, str) else None,
            compatibility_status=status,
            baseline_since=since,
            browser_support=_browser_support(payload),
        )

    def to_api(self) -> dict[str, Any]:
        """Serialize back to the catalog payload shape (used by the cache)."""
        data: dict[str, Any] = {
            "identifier": self.identifier,
            "name": self.name,
            "description": self.description,
            "specifications": [{"url": url} for url in self.spec_urls],
            "browser_support": [
                {"browser": browser, "support": {"version_added": version}}
                for browser, version in self.browser_support
            ],
        }
        if self.mdn_url is not None:
            data["mdn_url"] = self.mdn_url
        if self.compatibility_status is not None:
            data["baseline"] = {"status": self.compatibility_status}
            if self.baseline_since is not None:
                data["baseline"]["since"] = self.baseline_since
        return data


def parse_features(raw: Any) -> tuple[FeatureRecord, ...]:
    """Coerce a raw ``features`` value into feature records.

    Anything that is not a list yields an empty tuple; list elements that
    are not usable records are dropped.
    """
    if not isinstance(raw, list):
        return ()
    records = (FeatureRecord.from_api(item) for item in raw)
    return tuple(r for r in records if r is not None)


# ---------------------------------------------------------------------------
# Issue: One detected feature usage
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Issue:
    """A single feature usage detected in a source file.

    Line and column are both 1-indexed. Issues are frozen; a priority
    change made during triage goes through ``ScanResult.with_priority``.

    Attributes:
        file: Path or identifier of the scanned unit.
        feature_id: Identifier of the matched ``FeatureRecord``.
        name: Display name captured at scan time.
        status: Baseline status of the matched feature.
        priority: Triage priority derived from the status.
        line: 1-indexed line of the triggering token.
        column: 1-indexed column of the triggering token.
    """

    file: str
    feature_id: str
    name: str
    status: StatusLevel
    priority: PriorityLevel
    line: int
    column: int

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON shape consumed by dashboards and IDE bridges."""
        return {
            "file": self.file,
            "featureId": self.feature_id,
            "name": self.name,
            "status": self.status.value,
            "priority": self.priority.label,
            "line": self.line,
            "column": self.column,
        }


# ---------------------------------------------------------------------------
# ScanResult: Aggregate of one scan run
# ---------------------------------------------------------------------------


def count_by_status(issues: Iterable[Issue]) -> dict[StatusLevel, int]:
    """Count issues per status level, zero-filling all four levels."""
    stats = {level: 0 for level in StatusLevel}
    for issue in issues:
        stats[issue.status] += 1
    return stats


def compute_score(stats: Mapping[StatusLevel, int]) -> int:
    """Percentage of usages that are widely or newly available.

    Returns 100 when there are no usages at all. Halves round up.
    """
    total = sum(stats.values())
    if total == 0:
        return 100
    good = stats.get(StatusLevel.WIDELY, 0) + stats.get(StatusLevel.NEWLY, 0)
    return (200 * good + total) // (2 * total)


@dataclass(frozen=True)
class ScanResult:
    """The complete, immutable result of one scan run.

    Build instances with ``from_issues`` so that ``stats`` and ``score``
    always agree with ``issues``.

    Attributes:
        score: Integer in [0, 100].
        stats: Issue count per status level; all four levels present.
        issues: Issues sorted by file path, ties in detection order.
        offline: True when the catalog came from a stale cache or was
            unavailable.
        cancelled: True when the scan stopped before the last file.
        files_scanned: Number of files processed (including skipped ones).
    """

    score: int
    stats: Mapping[StatusLevel, int]
    issues: tuple[Issue, ...]
    offline: bool = False
    cancelled: bool = False
    files_scanned: int = 0

    @classmethod
    def from_issues(
        cls,
        issues: Iterable[Issue],
        *,
        offline: bool = False,
        cancelled: bool = False,
        files_scanned: int = 0,
    ) -> ScanResult:
        """Sort issues, derive stats and score, and build the result."""
        ordered = tuple(sorted(issues, key=lambda issue: issue.file))
        stats = count_by_status(ordered)
        return cls(
            score=compute_score(stats),
            stats=MappingProxyType(stats),
            issues=ordered,
            offline=offline,
            cancelled=cancelled,
            files_scanned=files_scanned,
        )

    @classmethod
    def empty(cls, *, offline: bool = False) -> ScanResult:
        """A result with no issues (score 100)."""
        return cls.from_issues((), offline=offline)

    def with_priority(self, index: int, priority: PriorityLevel) -> ScanResult:
        """Return a copy with the priority of ``issues[index]`` replaced.

        Raises:
            IndexError: If ``index`` is out of range.
        """
        issues = list(self.issues)
        issues[index] = replace(issues[index], priority=priority)
        return replace(self, issues=tuple(issues))

    @property
    def total(self) -> int:
        """Total number of issues."""
        return len(self.issues)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-serializable ``{score, stats, issues}`` shape."""
        return {
            "score": self.score,
            "stats": {level.value: self.stats[level] for level in StatusLevel},
            "issues": [issue.to_dict() for issue in self.issues],
        }
