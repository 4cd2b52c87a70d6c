"""Check command — compare new Lighthouse results against the previous run."""

import json
from pathlib import Path
from typing import List, Optional

import typer

from ..check import EXIT_FAILURE, require_paths, run_check
from ..config import load_config
from ..exceptions import LighthouseGuardError, SnapshotLoadError, UsageError
from ..logging_config import setup_logging
from ..models import METRIC_VOCABULARY
from . import app
from ._common import console, err_console
from ._report import render_report

USAGE = "Usage: lighthouse-guard check <old_results.json> <new_results.json>"


@app.command()
def check(
    old_results: Optional[Path] = typer.Argument(
        None,
        help="Results document from the previous run (baseline)",
    ),
    new_results: Optional[Path] = typer.Argument(
        None,
        help="Results document from the current run",
    ),
    threshold: Optional[int] = typer.Option(
        None,
        "--threshold",
        "-t",
        help="Regression threshold in percent (default: $REGRESSION_THRESHOLD_PERCENT or 10)",
    ),
    metric: Optional[List[str]] = typer.Option(
        None,
        "--metric",
        "-m",
        help=f"Metric to compare; repeatable ({', '.join(METRIC_VOCABULARY)})",
    ),
    metrics_log: Optional[Path] = typer.Option(
        None,
        "--metrics-log",
        help="CSV metrics log to append to (default: next to the new results)",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file path (TOML format)",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Also append DEBUG-level log records to this file",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Print the evaluation report as JSON",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose (DEBUG) logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress all but ERROR logging",
    ),
):
    """
    Fail when any tracked Lighthouse score dropped by more than the threshold.

    The new results are always appended to the metrics log; the comparison is
    skipped (and the check passes) when there are no old results.

    [bold cyan]Examples:[/bold cyan]

      lighthouse-guard check results/results-last-runs.json _data/results-last-runs.json

      REGRESSION_THRESHOLD_PERCENT=5 lighthouse-guard check old.json new.json

      lighthouse-guard check old.json new.json -m performance -m seo --json
    """
    try:
        require_paths(old_results, new_results)
    except UsageError as e:
        err_console.print(f"[red]Error:[/red] {e.reason}")
        err_console.print(USAGE, markup=False, highlight=False)
        raise typer.Exit(EXIT_FAILURE)

    if verbose and quiet:
        err_console.print("[red]Error:[/red] --verbose and --quiet are mutually exclusive")
        raise typer.Exit(EXIT_FAILURE)

    try:
        logger = setup_logging(verbose=verbose, quiet=quiet, log_file=log_file)
    except LighthouseGuardError as e:
        err_console.print(f"[red]Error:[/red] {e}", highlight=False)
        raise typer.Exit(EXIT_FAILURE)

    try:
        settings = load_config(
            config_file=config,
            threshold_percent=threshold,
            tracked_metrics=tuple(metric) if metric else None,
        )
        outcome = run_check(old_results, new_results, settings, metrics_log_path=metrics_log)

    except SnapshotLoadError as e:
        logger.debug(f"{e.__class__.__name__}: {e}")
        err_console.print("[red]Error:[/red] Could not load new results data. Exiting.")
        err_console.print(str(e), markup=False, highlight=False)
        raise typer.Exit(EXIT_FAILURE)

    except LighthouseGuardError as e:
        logger.debug(f"{e.__class__.__name__}: {e}")
        err_console.print(f"[red]Error:[/red] {e}", highlight=False)
        raise typer.Exit(EXIT_FAILURE)

    except KeyboardInterrupt:
        err_console.print("\n[yellow]Check interrupted[/yellow]")
        raise typer.Exit(130)

    except Exception as e:
        logger.exception("Unexpected error during regression check")
        err_console.print(f"[red]Unexpected error:[/red] {e}", highlight=False)
        raise typer.Exit(EXIT_FAILURE)

    if json_output:
        data = outcome.report.to_dict()
        data["metrics_log"] = str(outcome.metrics_log_path)
        data["rows_written"] = outcome.rows_written
        print(json.dumps(data, indent=2))
    else:
        render_report(outcome.report, old_results, new_results, console)

    raise typer.Exit(outcome.exit_code)
