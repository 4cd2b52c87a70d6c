"""Shared test fixtures for Lighthouse Guard tests."""

import json
import logging

import pytest

from lighthouse_guard.loader import parse_snapshot


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Run every test from an empty directory with no threshold/config env vars."""
    monkeypatch.chdir(tmp_path)
    for var in (
        "REGRESSION_THRESHOLD_PERCENT",
        "LIGHTHOUSE_GUARD_TRACKED_METRICS",
        "LIGHTHOUSE_GUARD_METRICS_LOG_NAME",
    ):
        monkeypatch.delenv(var, raising=False)
    yield
    logger = logging.getLogger("lighthouse_guard")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def write_results(tmp_path):
    """Write a results document and return its path."""

    def _write(name, data):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(data, str):
            path.write_text(data, encoding="utf-8")
        else:
            path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


def site(url, **scores):
    """Speedlify-shaped site entry; keyword names use underscores for hyphens."""
    return {
        "url": url,
        "lighthouse": {k.replace("_", "-"): v for k, v in scores.items()},
    }


@pytest.fixture
def old_doc():
    """Baseline run with two sites."""
    return {
        "hash-home": site(
            "https://www.undrr.org/",
            performance=0.85,
            accessibility=0.90,
            best_practices=1,
            seo=0.92,
        ),
        "hash-prevention": site(
            "https://www.preventionweb.net/",
            performance=0.60,
            accessibility=0.95,
            best_practices=0.96,
            seo=0.9,
        ),
    }


@pytest.fixture
def new_doc():
    """Current run: home regresses on performance, prevention is within tolerance."""
    return {
        "hash-home": site(
            "https://www.undrr.org/",
            performance=0.75,
            accessibility=0.82,
            best_practices=1,
            seo=0.92,
        ),
        "hash-prevention": site(
            "https://www.preventionweb.net/",
            performance=0.58,
            accessibility=0.96,
            best_practices=0.96,
            seo=0.9,
        ),
    }


@pytest.fixture
def old_snapshot(old_doc):
    return parse_snapshot(old_doc)


@pytest.fixture
def new_snapshot(new_doc):
    return parse_snapshot(new_doc)


@pytest.fixture
def make_site():
    return site
