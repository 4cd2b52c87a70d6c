"""Tests for loading and normalizing results documents."""

import pytest

from lighthouse_guard.exceptions import SnapshotLoadError
from lighthouse_guard.loader import (
    LoadFailure,
    Loaded,
    load_snapshot,
    parse_site,
    parse_snapshot,
    require_snapshot,
)
from lighthouse_guard.models import ABSENT


class TestLoadSnapshot:
    """Test load_snapshot tagged results."""

    def test_loads_valid_document(self, write_results, new_doc):
        path = write_results("new.json", new_doc)
        result = load_snapshot(path)
        assert isinstance(result, Loaded)
        assert len(result.snapshot) == 2
        assert "hash-home" in result.snapshot

    def test_missing_file_is_failure(self, tmp_path):
        result = load_snapshot(tmp_path / "nope.json")
        assert isinstance(result, LoadFailure)
        assert result.kind == "missing"

    def test_directory_is_missing(self, tmp_path):
        result = load_snapshot(tmp_path)
        assert isinstance(result, LoadFailure)
        assert result.kind == "missing"

    def test_invalid_json_is_malformed(self, write_results):
        path = write_results("bad.json", "{not json")
        result = load_snapshot(path)
        assert isinstance(result, LoadFailure)
        assert result.kind == "malformed"
        assert "invalid JSON" in result.reason

    def test_non_object_top_level_is_malformed(self, write_results):
        path = write_results("list.json", [1, 2, 3])
        result = load_snapshot(path)
        assert isinstance(result, LoadFailure)
        assert result.kind == "malformed"

    def test_empty_object_is_valid(self, write_results):
        path = write_results("empty.json", {})
        result = load_snapshot(path)
        assert isinstance(result, Loaded)
        assert len(result.snapshot) == 0


class TestRequireSnapshot:
    """Test escalation of load failures."""

    def test_returns_snapshot(self, write_results, new_doc):
        snapshot = require_snapshot(load_snapshot(write_results("new.json", new_doc)))
        assert len(snapshot) == 2

    def test_raises_on_failure(self, tmp_path):
        with pytest.raises(SnapshotLoadError) as exc_info:
            require_snapshot(load_snapshot(tmp_path / "nope.json"))
        assert exc_info.value.kind == "missing"
        assert "nope.json" in str(exc_info.value)


class TestParseSite:
    """Test input-boundary normalization of a site entry."""

    def test_lighthouse_key(self):
        result = parse_site("abc", {"url": "https://a.org/", "lighthouse": {"performance": 0.5}})
        assert result.url == "https://a.org/"
        assert result.score("performance") == 0.5

    def test_scores_key(self):
        result = parse_site("abc", {"scores": {"seo": 0.7}})
        assert result.score("seo") == 0.7

    def test_url_falls_back_to_site_id(self):
        assert parse_site("abc", {"lighthouse": {}}).url == "abc"
        assert parse_site("abc", {"url": None, "lighthouse": {}}).url == "abc"
        assert parse_site("abc", {"url": "", "lighthouse": {}}).url == "abc"

    def test_missing_scores_mapping(self):
        result = parse_site("abc", {"url": "https://a.org/"})
        assert result.scores is None
        assert not result.has_scores

    def test_null_scores_mapping(self):
        assert parse_site("abc", {"lighthouse": None}).scores is None

    def test_non_object_entry(self):
        result = parse_site("abc", "garbage")
        assert result.scores is None
        assert result.url == "abc"

    def test_camel_case_best_practices_normalized(self):
        result = parse_site("abc", {"lighthouse": {"bestPractices": 0.9}})
        assert result.score("best-practices") == 0.9
        assert "bestPractices" not in result.scores

    def test_canonical_name_wins_over_alias(self):
        result = parse_site(
            "abc", {"lighthouse": {"best-practices": 0.8, "bestPractices": 0.1}}
        )
        assert result.score("best-practices") == 0.8

    def test_absent_metric_is_not_zero(self):
        result = parse_site("abc", {"lighthouse": {"performance": 0}})
        assert result.score("performance") == 0
        assert result.score("seo") is ABSENT
        assert result.numeric_score("seo") is None
        assert result.numeric_score("performance") == 0


class TestParseSnapshot:
    def test_preserves_document_order(self):
        snapshot = parse_snapshot({"b": {"lighthouse": {}}, "a": {"lighthouse": {}}})
        assert [s.site_id for s in snapshot] == ["b", "a"]
