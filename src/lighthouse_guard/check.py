"""One regression-check run: load results, persist history, compare, decide."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

from .config import GuardConfig
from .evaluator import RegressionEvaluator
from .exceptions import UsageError
from .loader import Loaded, load_snapshot, require_snapshot
from .logging_config import get_logger
from .metrics_log import MetricsLog
from .models import EvaluationReport

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


@dataclass
class CheckOutcome:
    """Result of ``run_check``."""

    report: EvaluationReport
    metrics_log_path: Path
    rows_written: int

    @property
    def exit_code(self) -> int:
        return EXIT_FAILURE if self.report.has_regressions else EXIT_OK


def require_paths(
    old_results_path: Optional[Union[str, Path]], new_results_path: Optional[Union[str, Path]]
) -> Tuple[Path, Path]:
    """Both results paths are mandatory; checked before any file is touched."""
    missing = [
        name
        for name, value in (("old results", old_results_path), ("new results", new_results_path))
        if value is None or str(value) == ""
    ]
    if missing:
        raise UsageError(f"missing {' and '.join(missing)} path")
    return Path(old_results_path), Path(new_results_path)


def default_metrics_log_path(new_results_path: Union[str, Path], config: GuardConfig) -> Path:
    """The metrics log lives next to the new results document by default."""
    return Path(new_results_path).parent / config.metrics_log_name


def run_check(
    old_results_path: Union[str, Path],
    new_results_path: Union[str, Path],
    config: GuardConfig,
    metrics_log_path: Optional[Union[str, Path]] = None,
) -> CheckOutcome:
    """Run a full check.

    The new snapshot is always appended to the metrics log before comparing.
    A missing or malformed baseline is tolerated and reported as "no baseline".

    Raises:
        UsageError: If either path is missing
        SnapshotLoadError: If the new results cannot be loaded (nothing is
            written in that case)
        MetricsLogError: If the metrics log cannot be appended to
    """
    old_results_path, new_results_path = require_paths(old_results_path, new_results_path)
    new_snapshot = require_snapshot(load_snapshot(new_results_path))

    old_result = load_snapshot(old_results_path)
    old_snapshot = old_result.snapshot if isinstance(old_result, Loaded) else None
    if old_snapshot is None:
        logger.info(f"No baseline available ({old_result.reason}); comparison will be skipped")

    log_path = (
        Path(metrics_log_path)
        if metrics_log_path is not None
        else default_metrics_log_path(new_results_path, config)
    )
    rows_written = MetricsLog(log_path).append(new_snapshot)

    report = RegressionEvaluator(config).evaluate(new_snapshot, old_snapshot)
    return CheckOutcome(report=report, metrics_log_path=log_path, rows_written=rows_written)
