"""Append-only CSV log of per-site Lighthouse scores, one row per site per run.

Format::

    timestamp,site_url,site_hash,performance,accessibility,best-practices,seo
    2026-10-19T15:00:00.000Z,"https://www.undrr.org/",a1b2c3,0.85,0.97,1,0.92

``site_url`` is always quoted and ``site_hash`` only when it holds a comma,
quote or line break. Metrics that were not measured are empty
fields. Rows are never rewritten.
"""

import csv
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Union

from .exceptions import MetricsLogError
from .logging_config import get_logger
from .models import METRIC_VOCABULARY, AuditSnapshot, MetricsLogRow

logger = get_logger(__name__)

HEADER = ("timestamp", "site_url", "site_hash") + METRIC_VOCABULARY


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a ``Z`` suffix."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_score(value: Optional[float]) -> str:
    if value is None:
        return ""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def _quote(text: str) -> str:
    return '"' + text.replace('"', '""') + '"'


def _quote_if_needed(text: str) -> str:
    return _quote(text) if any(c in text for c in ',"\r\n') else text


def format_row(row: MetricsLogRow) -> str:
    fields = [row.timestamp, _quote(row.site_url), _quote_if_needed(row.site_hash)]
    fields.extend(format_score(row.score(m)) for m in METRIC_VOCABULARY)
    return ",".join(fields)


def _parse_score(cell: Optional[str]) -> Optional[float]:
    if cell is None or not cell.strip():
        return None
    try:
        return float(cell)
    except ValueError:
        return None


class MetricsLog:
    """The metrics log file at ``path``."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def rows_for(self, snapshot: AuditSnapshot, timestamp: str) -> List[MetricsLogRow]:
        """Rows for every site in ``snapshot`` that carries audit data."""
        return [MetricsLogRow.from_site(site, timestamp) for site in snapshot if site.has_scores]

    def append(self, snapshot: AuditSnapshot, timestamp: Optional[str] = None) -> int:
        """Append one row per site with audit data; returns the number of rows written.

        The header is written first when the file does not exist yet (or is
        empty). Every call appends, so repeated runs accumulate history.

        Raises:
            MetricsLogError: If the file cannot be written
        """
        timestamp = timestamp or utc_timestamp()
        rows = self.rows_for(snapshot, timestamp)

        lines = []
        if self._needs_header():
            lines.append(",".join(HEADER))
        lines.extend(format_row(r) for r in rows)

        if lines:
            try:
                with open(self.path, "a", encoding="utf-8", newline="") as f:
                    f.write("\n".join(lines) + "\n")
            except OSError as e:
                raise MetricsLogError(self.path, str(e))

        logger.info(f"Metrics written to CSV: {self.path} ({len(rows)} rows)")
        return len(rows)

    def read(self) -> List[MetricsLogRow]:
        """All rows in file order; empty if the log does not exist.

        Raises:
            MetricsLogError: If the file exists but cannot be read
        """
        if not self.path.exists():
            return []

        rows: List[MetricsLogRow] = []
        try:
            with open(self.path, encoding="utf-8", newline="") as f:
                for record in csv.DictReader(f):
                    rows.append(
                        MetricsLogRow(
                            timestamp=record.get("timestamp") or "",
                            site_url=record.get("site_url") or "",
                            site_hash=record.get("site_hash") or "",
                            scores={m: _parse_score(record.get(m)) for m in METRIC_VOCABULARY},
                        )
                    )
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            raise MetricsLogError(self.path, f"unreadable: {e}")

        return rows

    def _needs_header(self) -> bool:
        try:
            return not self.path.exists() or self.path.stat().st_size == 0
        except OSError as e:
            raise MetricsLogError(self.path, str(e))
