"""History CLI command -- show how sites' scores moved across logged runs."""

import json
from pathlib import Path
from typing import List, Optional

import typer

from ..config import DEFAULT_METRICS_LOG_NAME
from ..exceptions import MetricsLogError
from ..history import SiteTrend, summarize_history
from ..metrics_log import MetricsLog
from ..models import METRIC_VOCABULARY
from . import app
from ._common import console, err_console


def _sparkline(values: list) -> str:
    """Generate an ASCII sparkline from a list of numeric values."""
    if not values:
        return ""
    blocks = " ▁▂▃▄▅▆▇█"
    mn, mx = min(values), max(values)
    if mx == mn:
        return blocks[4] * len(values)
    return "".join(
        blocks[min(8, int((v - mn) / (mx - mn) * 8))] for v in values
    )


def _fmt(value: Optional[float], signed: bool = False) -> str:
    if value is None:
        return "-"
    return f"{value:+.3f}" if signed else f"{value:.2f}"


@app.command()
def history(
    log: Path = typer.Argument(
        Path(DEFAULT_METRICS_LOG_NAME),
        help="Metrics log written by the check command",
        dir_okay=False,
    ),
    metric: str = typer.Option(
        "performance",
        "--metric",
        "-m",
        help=f"Metric to show ({', '.join(METRIC_VOCABULARY)})",
    ),
    site: Optional[str] = typer.Option(
        None,
        "--site",
        "-s",
        help="Only sites whose URL or hash contains this text",
    ),
    last_n: int = typer.Option(
        20,
        "--last",
        "-n",
        help="Number of recent runs to include per site",
        min=2,
        max=1000,
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in machine-readable JSON format",
    ),
):
    """
    Summarize per-site score history from the metrics log.

    [bold cyan]Examples:[/bold cyan]

      lighthouse-guard history _data/lighthouse-metrics.csv

      lighthouse-guard history _data/lighthouse-metrics.csv --metric accessibility --site undrr

      lighthouse-guard history _data/lighthouse-metrics.csv --json
    """
    if metric not in METRIC_VOCABULARY:
        err_console.print(
            f"[red]Error:[/red] --metric must be one of: {', '.join(METRIC_VOCABULARY)}"
        )
        raise typer.Exit(1)

    if not log.exists():
        console.print(
            f"[yellow]No metrics log found at[/yellow] {log}. "
            "Run [bold]lighthouse-guard check[/bold] first to record scores."
        )
        raise typer.Exit(0)

    try:
        rows = MetricsLog(log).read()
    except MetricsLogError as e:
        err_console.print(f"[red]Error reading history:[/red] {e}", highlight=False)
        raise typer.Exit(1)

    trends = summarize_history(rows, metric, last_n=last_n, site_filter=site)

    if json_output:
        print(json.dumps([t.to_dict() for t in trends], indent=2))
        return

    if not trends:
        console.print(f"[yellow]No {metric} scores recorded[/yellow]")
        raise typer.Exit(0)

    _output_rich(trends, metric)


def _output_rich(trends: List[SiteTrend], metric: str) -> None:
    """Human-readable Rich table output."""
    from rich.markup import escape
    from rich.table import Table

    table = Table(title=f"{metric} history", show_lines=False, pad_edge=True)
    table.add_column("Site", style="cyan", overflow="fold")
    table.add_column("Runs", justify="right")
    table.add_column("Latest", justify="right", style="bold")
    table.add_column("Change", justify="right")
    table.add_column("Min", justify="right")
    table.add_column("Mean", justify="right")
    table.add_column("Max", justify="right")
    table.add_column("Slope/run", justify="right")
    table.add_column("Trend")

    for t in trends:
        change = t.change
        change_style = "red" if change is not None and change < 0 else "green"
        table.add_row(
            escape(t.site_url),
            str(t.runs),
            _fmt(t.latest),
            f"[{change_style}]{_fmt(change, signed=True)}[/{change_style}]",
            _fmt(t.minimum),
            _fmt(t.mean),
            _fmt(t.maximum),
            _fmt(t.slope, signed=True),
            _sparkline(t.values),
        )

    console.print()
    console.print(table)
    console.print()
