"""Regression detection between two audit snapshots.

A score regresses when the new value falls strictly below the old value
discounted by the threshold::

    new < old * (1 - threshold_percent / 100)

The test is one-sided: increases, and decreases within tolerance, never count.
"""

import math
from typing import Iterable, List, Optional

from .config import GuardConfig
from .logging_config import get_logger
from .models import (
    AuditSnapshot,
    EntryKind,
    EvaluationReport,
    MetricDelta,
    ReportEntry,
    SiteResult,
    is_score,
)

logger = get_logger(__name__)


def is_regression(old_score: float, new_score: float, threshold_percent: float) -> bool:
    """Strict one-sided threshold test."""
    return new_score < old_score * (1 - threshold_percent / 100)


def percent_decrease(old_score: float, new_score: float) -> float:
    """Relative drop from ``old_score`` in percent; NaN when ``old_score`` is 0."""
    if old_score == 0:
        return math.nan
    return (old_score - new_score) / old_score * 100


def compare_scores(
    metric: str, old_score: float, new_score: float, threshold_percent: float
) -> MetricDelta:
    return MetricDelta(
        metric=metric,
        old_score=old_score,
        new_score=new_score,
        percent_decrease=percent_decrease(old_score, new_score),
        is_regression=is_regression(old_score, new_score, threshold_percent),
    )


class RegressionEvaluator:
    """Compares a new snapshot against a baseline using a ``GuardConfig``."""

    def __init__(self, config: GuardConfig):
        self.config = config

    def evaluate(
        self, new_snapshot: AuditSnapshot, old_snapshot: Optional[AuditSnapshot]
    ) -> EvaluationReport:
        report = EvaluationReport(
            has_baseline=old_snapshot is not None,
            threshold_percent=self.config.threshold_percent,
            tracked_metrics=self.config.tracked_metrics,
        )
        if old_snapshot is None:
            logger.debug("No baseline snapshot; skipping per-site comparison")
            return report

        for new_site in new_snapshot:
            report.entries.extend(self._evaluate_site(new_site, old_snapshot.get(new_site.site_id)))

        logger.debug(
            f"Compared {len(new_snapshot)} sites: {report.comparisons} comparisons, "
            f"{len(report.regressions)} regressions"
        )
        return report

    def _evaluate_site(
        self, new_site: SiteResult, old_site: Optional[SiteResult]
    ) -> List[ReportEntry]:
        if old_site is None:
            return [self._entry(EntryKind.NEW_SITE, new_site)]

        if not new_site.has_scores or not old_site.has_scores:
            return [self._entry(EntryKind.DATA_MISSING, new_site)]

        entries = []
        for metric in self.config.tracked_metrics:
            new_value = new_site.score(metric)
            old_value = old_site.score(metric)

            if not is_score(new_value) or not is_score(old_value):
                entries.append(
                    self._entry(
                        EntryKind.INVALID_TYPE,
                        new_site,
                        metric=metric,
                        old_value=old_value,
                        new_value=new_value,
                    )
                )
                continue

            delta = compare_scores(metric, old_value, new_value, self.config.threshold_percent)
            kind = EntryKind.REGRESSION if delta.is_regression else EntryKind.OK
            entries.append(self._entry(kind, new_site, metric=metric, delta=delta))

        return entries

    def _entry(self, kind: EntryKind, site: SiteResult, **kwargs) -> ReportEntry:
        return ReportEntry(
            kind=kind,
            site_id=site.site_id,
            site_url=site.url,
            threshold_percent=self.config.threshold_percent,
            **kwargs,
        )


def evaluate(
    new_snapshot: AuditSnapshot,
    old_snapshot: Optional[AuditSnapshot],
    tracked_metrics: Iterable[str],
    threshold_percent: int,
) -> EvaluationReport:
    """Evaluate with an explicit metric set and threshold."""
    config = GuardConfig(tracked_metrics=tuple(tracked_metrics), threshold_percent=threshold_percent)
    return RegressionEvaluator(config).evaluate(new_snapshot, old_snapshot)
