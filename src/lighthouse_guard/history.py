"""Per-site trend summaries over the metrics log."""

from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import numpy as np

from .models import MetricsLogRow


@dataclass
class SiteTrend:
    """How one metric of one site moved across the logged runs."""

    site_hash: str
    site_url: str
    metric: str
    timestamps: List[str] = field(default_factory=list)
    values: List[float] = field(default_factory=list)

    @property
    def runs(self) -> int:
        return len(self.values)

    @property
    def latest(self) -> Optional[float]:
        return self.values[-1] if self.values else None

    @property
    def change(self) -> Optional[float]:
        """Latest value minus the previous one."""
        if len(self.values) < 2:
            return None
        return self.values[-1] - self.values[-2]

    @property
    def mean(self) -> Optional[float]:
        return float(np.mean(self.values)) if self.values else None

    @property
    def minimum(self) -> Optional[float]:
        return float(np.min(self.values)) if self.values else None

    @property
    def maximum(self) -> Optional[float]:
        return float(np.max(self.values)) if self.values else None

    @property
    def slope(self) -> Optional[float]:
        """Least-squares slope of the score per run (None below two runs)."""
        if len(self.values) < 2:
            return None
        x = np.arange(len(self.values), dtype=float)
        slope, _intercept = np.polyfit(x, np.asarray(self.values, dtype=float), 1)
        return float(slope)

    def to_dict(self) -> Dict[str, object]:
        return {
            "site_hash": self.site_hash,
            "site_url": self.site_url,
            "metric": self.metric,
            "runs": self.runs,
            "latest": self.latest,
            "change": self.change,
            "mean": self.mean,
            "min": self.minimum,
            "max": self.maximum,
            "slope": self.slope,
            "points": [
                {"timestamp": t, "value": v} for t, v in zip(self.timestamps, self.values)
            ],
        }


def summarize_history(
    rows: List[MetricsLogRow],
    metric: str,
    last_n: Optional[int] = None,
    site_filter: Optional[str] = None,
) -> List[SiteTrend]:
    """Group log rows by site and collect the values of ``metric``.

    Rows without a value for ``metric`` are skipped. ``site_filter`` is a
    case-insensitive substring matched against URL and hash. Sites keep the
    order in which they first appear in the log.
    """
    needle = site_filter.lower() if site_filter else None
    trends: "OrderedDict[str, SiteTrend]" = OrderedDict()

    for row in rows:
        if needle and needle not in row.site_url.lower() and needle not in row.site_hash.lower():
            continue
        value = row.score(metric)
        if value is None:
            continue
        trend = trends.get(row.site_hash)
        if trend is None:
            trend = trends[row.site_hash] = SiteTrend(
                site_hash=row.site_hash, site_url=row.site_url, metric=metric
            )
        # Latest URL wins if a site was renamed between runs
        trend.site_url = row.site_url
        trend.timestamps.append(row.timestamp)
        trend.values.append(value)

    result = list(trends.values())
    if last_n is not None:
        for trend in result:
            trend.timestamps = trend.timestamps[-last_n:]
            trend.values = trend.values[-last_n:]
    return result
