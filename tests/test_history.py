"""Tests for per-site trend summaries."""

import pytest

from lighthouse_guard.history import summarize_history
from lighthouse_guard.models import MetricsLogRow


def _row(ts, site_hash, url, performance=None, seo=None):
    return MetricsLogRow(
        timestamp=ts,
        site_url=url,
        site_hash=site_hash,
        scores={"performance": performance, "accessibility": None, "best-practices": None, "seo": seo},
    )


@pytest.fixture
def rows():
    return [
        _row("t1", "a", "https://a.org/", performance=0.90, seo=0.8),
        _row("t1", "b", "https://b.org/", performance=0.50),
        _row("t2", "a", "https://a.org/", performance=0.80, seo=0.8),
        _row("t2", "b", "https://b.org/", performance=None),
        _row("t3", "a", "https://a.org/", performance=0.70, seo=0.9),
    ]


class TestSummarizeHistory:
    """Test summarize_history grouping and statistics."""

    def test_groups_by_site_in_first_seen_order(self, rows):
        trends = summarize_history(rows, "performance")
        assert [t.site_hash for t in trends] == ["a", "b"]

    def test_skips_missing_values(self, rows):
        trends = summarize_history(rows, "performance")
        assert trends[1].values == [0.50]
        assert trends[1].runs == 1

    def test_statistics(self, rows):
        trend = summarize_history(rows, "performance")[0]
        assert trend.latest == pytest.approx(0.70)
        assert trend.change == pytest.approx(-0.10)
        assert trend.mean == pytest.approx(0.80)
        assert trend.minimum == pytest.approx(0.70)
        assert trend.maximum == pytest.approx(0.90)
        assert trend.slope == pytest.approx(-0.10)

    def test_single_point_has_no_slope(self, rows):
        trend = summarize_history(rows, "performance")[1]
        assert trend.slope is None
        assert trend.change is None

    def test_last_n(self, rows):
        trend = summarize_history(rows, "performance", last_n=2)[0]
        assert trend.values == pytest.approx([0.80, 0.70])
        assert trend.timestamps == ["t2", "t3"]

    def test_site_filter(self, rows):
        trends = summarize_history(rows, "performance", site_filter="B.ORG")
        assert [t.site_hash for t in trends] == ["b"]

    def test_other_metric(self, rows):
        trends = summarize_history(rows, "seo")
        assert [t.site_hash for t in trends] == ["a"]
        assert trends[0].values == pytest.approx([0.8, 0.8, 0.9])

    def test_empty(self):
        assert summarize_history([], "performance") == []

    def test_to_dict(self, rows):
        data = summarize_history(rows, "performance")[0].to_dict()
        assert data["runs"] == 3
        assert data["points"][0] == {"timestamp": "t1", "value": 0.90}
