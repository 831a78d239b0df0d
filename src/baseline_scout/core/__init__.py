"""Core data model, status classification and feature lookup.

The aggregator lives in ``baseline_scout.core.aggregator`` and is not
re-exported here because it depends on the scanners package::

    from baseline_scout.core import Issue, ScanResult, StatusLevel, classify
    from baseline_scout.core.aggregator import run_scan
"""

from baseline_scout.core.index import FeatureIndex, normalize_key
from baseline_scout.core.models import (
    FeatureRecord,
    Issue,
    ScanResult,
    compute_score,
    count_by_status,
    parse_features,
)
from baseline_scout.core.status import (
    DEFAULT_PRIORITY_POLICY,
    PriorityLevel,
    StatusLevel,
    build_priority_policy,
    classify,
    priority_of,
)

__all__ = [
    "DEFAULT_PRIORITY_POLICY",
    "FeatureIndex",
    "FeatureRecord",
    "Issue",
    "PriorityLevel",
    "ScanResult",
    "StatusLevel",
    "build_priority_policy",
    "classify",
    "compute_score",
    "count_by_status",
    "normalize_key",
    "parse_features",
    "priority_of",
]
