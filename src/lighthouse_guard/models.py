"""Data models for Lighthouse Guard: audit snapshots, comparison results, log rows."""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple


# Canonical metric names, in log column order.
METRIC_VOCABULARY: Tuple[str, ...] = ("performance", "accessibility", "best-practices", "seo")

DEFAULT_TRACKED_METRICS: Tuple[str, ...] = ("performance", "accessibility")


class _Absent:
    """Marker for a metric key that is not present in a scores mapping."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "undefined"

    def __bool__(self) -> bool:
        return False


ABSENT = _Absent()


def is_score(value: Any) -> bool:
    """True for a well-formed numeric score (finite int/float, not bool)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def value_type_name(value: Any) -> str:
    """Name a raw document value the way the JSON document would describe it."""
    if value is ABSENT:
        return "undefined"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


@dataclass
class SiteResult:
    """One audited site at one point in time.

    ``scores`` holds raw values straight from the document, keyed by canonical
    metric name. ``None`` means the site carries no audit data at all; a metric
    missing from the mapping means it was not measured.
    """

    site_id: str
    url: str
    scores: Optional[Dict[str, Any]] = None

    @property
    def has_scores(self) -> bool:
        return self.scores is not None

    def score(self, metric: str) -> Any:
        """Raw value for ``metric``, or ``ABSENT`` if not measured."""
        if self.scores is None:
            return ABSENT
        return self.scores.get(metric, ABSENT)

    def numeric_score(self, metric: str) -> Optional[float]:
        value = self.score(metric)
        return value if is_score(value) else None


@dataclass
class AuditSnapshot:
    """All per-site results from one audit run, keyed by site identifier."""

    sites: Dict[str, SiteResult] = field(default_factory=dict)

    def __contains__(self, site_id: object) -> bool:
        return site_id in self.sites

    def __iter__(self) -> Iterator[SiteResult]:
        return iter(self.sites.values())

    def __len__(self) -> int:
        return len(self.sites)

    def get(self, site_id: str) -> Optional[SiteResult]:
        return self.sites.get(site_id)


@dataclass
class MetricDelta:
    """Score change for one site and one tracked metric."""

    metric: str
    old_score: float
    new_score: float
    percent_decrease: float  # NaN when old_score == 0
    is_regression: bool


class EntryKind(Enum):
    """Kinds of diagnostic produced while comparing snapshots."""

    NEW_SITE = "new_site"
    DATA_MISSING = "data_missing"
    INVALID_TYPE = "invalid_type"
    OK = "ok"
    REGRESSION = "regression"


_ENTRY_LEVELS = {
    EntryKind.NEW_SITE: "info",
    EntryKind.DATA_MISSING: "warning",
    EntryKind.INVALID_TYPE: "warning",
    EntryKind.OK: "info",
    EntryKind.REGRESSION: "error",
}


def _display_value(value: Any) -> str:
    if value is None:
        return "null"
    return str(value)


def _format_percent(value: float) -> str:
    if math.isnan(value):
        return "n/a"
    return f"{value:.1f}%"


@dataclass
class ReportEntry:
    """One human-readable decision about a site or a (site, metric) pair."""

    kind: EntryKind
    site_id: str
    site_url: str
    metric: Optional[str] = None
    delta: Optional[MetricDelta] = None
    old_value: Any = ABSENT
    new_value: Any = ABSENT
    threshold_percent: Optional[int] = None

    @property
    def level(self) -> str:
        return _ENTRY_LEVELS[self.kind]

    @property
    def message(self) -> str:
        if self.kind is EntryKind.NEW_SITE:
            return f"- Site {self.site_url}: New site, no previous data for comparison."
        if self.kind is EntryKind.DATA_MISSING:
            return (
                f"- Site {self.site_url}: Lighthouse data missing in new or old results. "
                "Skipping."
            )
        if self.kind is EntryKind.INVALID_TYPE:
            return (
                f"  - Metric {self.metric}: Invalid score type "
                f"(new: {value_type_name(self.new_value)}, old: {value_type_name(self.old_value)}). "
                f"Value (new: {_display_value(self.new_value)}, "
                f"old: {_display_value(self.old_value)}). Skipping."
            )
        assert self.delta is not None
        if self.kind is EntryKind.OK:
            return (
                f"  - Metric {self.metric}: OK "
                f"(New: {self.delta.new_score:.2f}, Old: {self.delta.old_score:.2f})"
            )
        return (
            f"  - Site {self.site_url}: REGRESSION in {self.metric}! "
            f"New score: {self.delta.new_score:.2f}, Old score: {self.delta.old_score:.2f}. "
            f"Decrease: {_format_percent(self.delta.percent_decrease)} "
            f"(Threshold: {self.threshold_percent}%)"
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "kind": self.kind.value,
            "site_hash": self.site_id,
            "site_url": self.site_url,
            "metric": self.metric,
            "message": self.message.strip(),
        }
        if self.delta is not None:
            pct = self.delta.percent_decrease
            data.update(
                old_score=self.delta.old_score,
                new_score=self.delta.new_score,
                percent_decrease=None if math.isnan(pct) else round(pct, 4),
                is_regression=self.delta.is_regression,
            )
        return data


@dataclass
class EvaluationReport:
    """Verdict of one comparison run plus every diagnostic, in evaluation order."""

    has_baseline: bool
    threshold_percent: int
    tracked_metrics: Tuple[str, ...]
    entries: List[ReportEntry] = field(default_factory=list)

    @property
    def regressions(self) -> List[ReportEntry]:
        return [e for e in self.entries if e.kind is EntryKind.REGRESSION]

    @property
    def has_regressions(self) -> bool:
        return any(e.kind is EntryKind.REGRESSION for e in self.entries)

    @property
    def comparisons(self) -> int:
        """Number of numeric (site, metric) comparisons performed."""
        return sum(1 for e in self.entries if e.delta is not None)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "has_baseline": self.has_baseline,
            "has_regressions": self.has_regressions,
            "threshold_percent": self.threshold_percent,
            "tracked_metrics": list(self.tracked_metrics),
            "comparisons": self.comparisons,
            "entries": [e.to_dict() for e in self.entries],
        }


@dataclass
class MetricsLogRow:
    """One persisted row of the metrics log: a site's scores at one run."""

    timestamp: str
    site_url: str
    site_hash: str
    scores: Dict[str, Optional[float]] = field(default_factory=dict)

    @classmethod
    def from_site(cls, site: SiteResult, timestamp: str) -> "MetricsLogRow":
        return cls(
            timestamp=timestamp,
            site_url=site.url,
            site_hash=site.site_id,
            scores={m: site.numeric_score(m) for m in METRIC_VOCABULARY},
        )

    def score(self, metric: str) -> Optional[float]:
        return self.scores.get(metric)
