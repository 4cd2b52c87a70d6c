"""Load and validate Speedlify results documents into typed audit snapshots.

A results document is a JSON object keyed by site hash::

    {
      "a1b2c3": {
        "url": "https://www.undrr.org/",
        "lighthouse": {"performance": 0.85, "accessibility": 0.97, ...},
        ...
      }
    }

Loading never raises: callers get either ``Loaded`` or ``LoadFailure`` and
decide whether a failure is fatal (see ``require_snapshot``).
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .exceptions import SnapshotLoadError
from .logging_config import get_logger
from .models import AuditSnapshot, SiteResult

logger = get_logger(__name__)

# Keys under which a site's scores mapping may appear, in lookup order.
SCORE_KEYS = ("lighthouse", "scores")

# Input spellings of metric names -> canonical names.
METRIC_ALIASES: Dict[str, str] = {
    "bestPractices": "best-practices",
    "best_practices": "best-practices",
}

MISSING = "missing"
MALFORMED = "malformed"


@dataclass(frozen=True)
class Loaded:
    """A results document that was read and validated."""

    path: Path
    snapshot: AuditSnapshot


@dataclass(frozen=True)
class LoadFailure:
    """A results document that could not be used.

    ``kind`` is ``"missing"`` (no readable file) or ``"malformed"`` (the
    contents are not a JSON object keyed by site).
    """

    path: Path
    kind: str
    reason: str


LoadResult = Union[Loaded, LoadFailure]


def load_snapshot(path: Union[str, Path]) -> LoadResult:
    """Read a results document from ``path``."""
    p = Path(path)
    if not p.is_file():
        logger.warning(f"Warning: Results file not found: {p}")
        return LoadFailure(path=p, kind=MISSING, reason="file not found")

    try:
        raw_text = p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Warning: Results file not readable: {p} ({e})")
        return LoadFailure(path=p, kind=MISSING, reason=str(e))

    try:
        raw = json.loads(raw_text)
    except json.JSONDecodeError as e:
        logger.error(f"Error reading or parsing JSON from {p}: {e}")
        return LoadFailure(path=p, kind=MALFORMED, reason=f"invalid JSON: {e}")

    if not isinstance(raw, dict):
        reason = f"expected a JSON object keyed by site, got {type(raw).__name__}"
        logger.error(f"Error reading results from {p}: {reason}")
        return LoadFailure(path=p, kind=MALFORMED, reason=reason)

    snapshot = parse_snapshot(raw)
    logger.debug(f"Loaded {len(snapshot)} sites from {p}")
    return Loaded(path=p, snapshot=snapshot)


def require_snapshot(result: LoadResult) -> AuditSnapshot:
    """Unwrap a load result, raising ``SnapshotLoadError`` on failure."""
    if isinstance(result, LoadFailure):
        raise SnapshotLoadError(result.path, result.kind, result.reason)
    return result.snapshot


def parse_snapshot(raw: Dict[str, Any]) -> AuditSnapshot:
    """Build an ``AuditSnapshot`` from a decoded results document."""
    sites: Dict[str, SiteResult] = {}
    for site_id, entry in raw.items():
        sites[site_id] = parse_site(site_id, entry)
    return AuditSnapshot(sites=sites)


def parse_site(site_id: str, entry: Any) -> SiteResult:
    """Normalize one site entry.

    Entries that are not objects, or whose scores are not an object, become
    sites without audit data rather than errors.
    """
    if not isinstance(entry, dict):
        return SiteResult(site_id=site_id, url=site_id, scores=None)

    url = entry.get("url")
    if not isinstance(url, str) or not url:
        url = site_id

    return SiteResult(site_id=site_id, url=url, scores=_parse_scores(entry))


def _parse_scores(entry: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    for key in SCORE_KEYS:
        if key not in entry:
            continue
        value = entry[key]
        if not isinstance(value, dict):
            return None
        scores: Dict[str, Any] = {}
        for name, score in value.items():
            canonical = METRIC_ALIASES.get(name, name)
            # Canonical spelling wins if a document carries both
            if canonical in scores and name != canonical:
                continue
            scores[canonical] = score
        return scores
    return None
