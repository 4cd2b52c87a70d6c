"""Rendering of evaluation reports as CI log lines."""

from pathlib import Path
from typing import Union

from rich.console import Console

from ..models import EntryKind, EvaluationReport

ENTRY_STYLES = {
    EntryKind.NEW_SITE: "cyan",
    EntryKind.DATA_MISSING: "yellow",
    EntryKind.INVALID_TYPE: "yellow",
    EntryKind.OK: "green",
    EntryKind.REGRESSION: "bold red",
}


def render_report(
    report: EvaluationReport,
    old_path: Union[str, Path],
    new_path: Union[str, Path],
    console: Console,
) -> None:
    """Print one line per decision, grouped under a header per compared site."""

    def say(text: str, style: str = "") -> None:
        console.print(text, style=style or None, markup=False, highlight=False)

    if not report.has_baseline:
        say(
            "No old results data found to compare against. Skipping regression check.",
            "yellow",
        )
        return

    say(
        f"Comparing new results from {Path(new_path).name} "
        f"with old results from {Path(old_path).name}"
    )
    say(f"Regression threshold: {report.threshold_percent}%")

    current_site = None
    for entry in report.entries:
        if entry.metric is not None and entry.site_id != current_site:
            say(f"- Checking site: {entry.site_url}")
            current_site = entry.site_id
        say(entry.message, ENTRY_STYLES[entry.kind])

    say("")
    if report.has_regressions:
        say("Significant metric regressions detected. Failing workflow.", "bold red")
    else:
        say("No significant metric regressions detected.", "bold green")
