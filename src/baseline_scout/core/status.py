"""Baseline status classification and triage priority policy.

Two pure, total functions sit at the heart of every scanner:

- ``classify(record)`` maps a feature's raw ``baseline.status`` code
  (``wide``/``widely``, ``newly``, ``limited``) to a ``StatusLevel``.
  Anything else, including a missing record or a malformed payload, is
  ``UNKNOWN``.
- ``priority_of(status)`` maps a ``StatusLevel`` to a ``PriorityLevel``
  through a priority policy. The default policy treats feature gaps as the
  urgent work item::

      LIMITED -> HIGH
      NEWLY   -> MEDIUM
      WIDELY  -> LOW
      UNKNOWN -> LOW

Policies are plain read-only mappings covering all four status levels, so
a project can rank differently (see ``build_priority_policy``) without
touching the scanners.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum, IntEnum
from types import MappingProxyType
from typing import Any

from baseline_scout.exceptions import ConfigError


class StatusLevel(Enum):
    """Baseline availability of a web-platform feature."""

    WIDELY = "widely available"
    NEWLY = "newly available"
    LIMITED = "limited availability"
    UNKNOWN = "unknown"


class PriorityLevel(IntEnum):
    """Triage priority of a detected feature usage.

    The integer encoding enables direct comparison: LOW < MEDIUM < HIGH.
    """

    LOW = 1
    MEDIUM = 2
    HIGH = 3

    @property
    def label(self) -> str:
        """Display label (``"High"``, ``"Medium"``, ``"Low"``)."""
        return self.name.capitalize()


# Raw codes as served by the feature catalog's ``baseline.status`` field;
# the live API spells the widely available code ``widely``.
_RAW_STATUS: dict[str, StatusLevel] = {
    "wide": StatusLevel.WIDELY,
    "widely": StatusLevel.WIDELY,
    "newly": StatusLevel.NEWLY,
    "limited": StatusLevel.LIMITED,
}

DEFAULT_PRIORITY_POLICY: Mapping[StatusLevel, PriorityLevel] = MappingProxyType({
    StatusLevel.LIMITED: PriorityLevel.HIGH,
    StatusLevel.NEWLY: PriorityLevel.MEDIUM,
    StatusLevel.WIDELY: PriorityLevel.LOW,
    StatusLevel.UNKNOWN: PriorityLevel.LOW,
})


def status_from_code(code: Any) -> StatusLevel:
    """Map a raw status code to a ``StatusLevel``; never raises."""
    if not isinstance(code, str):
        return StatusLevel.UNKNOWN
    return _RAW_STATUS.get(code.strip().lower(), StatusLevel.UNKNOWN)


def classify(record: Any) -> StatusLevel:
    """Classify a feature record by its Baseline status.

    Accepts a ``FeatureRecord``, a raw catalog payload dict (with a nested
    ``baseline`` object) or ``None``.

    Args:
        record: The feature to classify.

    Returns:
        The matching ``StatusLevel``; ``UNKNOWN`` for missing or
        unrecognized data.
    """
    if record is None:
        return StatusLevel.UNKNOWN
    if isinstance(record, Mapping):
        baseline = record.get("baseline")
        if not isinstance(baseline, Mapping):
            return StatusLevel.UNKNOWN
        return status_from_code(baseline.get("status"))
    return status_from_code(getattr(record, "compatibility_status", None))


def priority_of(
    status: StatusLevel,
    policy: Mapping[StatusLevel, PriorityLevel] | None = None,
) -> PriorityLevel:
    """Return the triage priority for a status level.

    Args:
        status: Status level to rank. Values that are not a ``StatusLevel``
            are ranked as ``UNKNOWN``.
        policy: Optional complete policy mapping. Defaults to
            ``DEFAULT_PRIORITY_POLICY``.

    Returns:
        The ``PriorityLevel`` the policy assigns.
    """
    active = policy if policy is not None else DEFAULT_PRIORITY_POLICY
    if not isinstance(status, StatusLevel):
        status = StatusLevel.UNKNOWN
    return active[status]


def parse_status_name(name: str) -> StatusLevel:
    """Parse a status name (enum name, display value or raw code)."""
    key = name.strip().lower()
    for level in StatusLevel:
        if key in (level.name.lower(), level.value):
            return level
    if key in _RAW_STATUS:
        return _RAW_STATUS[key]
    raise ConfigError(f"Unknown status level: {name!r}")


def _parse_priority_name(name: str) -> PriorityLevel:
    try:
        return PriorityLevel[name.strip().upper()]
    except KeyError:
        raise ConfigError(f"Unknown priority level: {name!r}") from None


def build_priority_policy(
    overrides: Mapping[str, str] | None = None,
) -> Mapping[StatusLevel, PriorityLevel]:
    """Build a complete priority policy from name-based overrides.

    Status names may be enum names (``limited``), display values
    (``limited availability``) or raw catalog codes (``wide``). Priority
    names are ``high``, ``medium`` or ``low`` in any case. Levels without
    an override keep their default priority, so the result is always total.

    Args:
        overrides: Mapping of status name to priority name.

    Returns:
        A read-only mapping covering all four status levels.

    Raises:
        ConfigError: If a status or priority name is not recognized.
    """
    policy = dict(DEFAULT_PRIORITY_POLICY)
    for status_name, priority_name in (overrides or {}).items():
        if not isinstance(status_name, str) or not isinstance(priority_name, str):
            raise ConfigError(
                f"Priority overrides must map names to names, got "
                f"{status_name!r}: {priority_name!r}"
            )
        policy[parse_status_name(status_name)] = _parse_priority_name(priority_name)
    return MappingProxyType(policy)
