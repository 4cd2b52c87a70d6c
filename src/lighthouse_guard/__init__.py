"""
Lighthouse Guard - Lighthouse score regression checks for Speedlify runs

Compares two Speedlify results documents, flags per-site score drops larger
than a configured threshold, and keeps an append-only CSV history of every
run's scores.
"""

__version__ = "0.1.0"

from .check import CheckOutcome, run_check
from .config import GuardConfig, load_config
from .evaluator import RegressionEvaluator, evaluate, is_regression
from .loader import LoadFailure, Loaded, load_snapshot
from .metrics_log import MetricsLog
from .models import (
    METRIC_VOCABULARY,
    AuditSnapshot,
    EntryKind,
    EvaluationReport,
    SiteResult,
)

__all__ = [
    "run_check",  # Main entry point
    "CheckOutcome",
    "GuardConfig",
    "load_config",
    "RegressionEvaluator",
    "evaluate",
    "is_regression",
    "load_snapshot",
    "Loaded",
    "LoadFailure",
    "MetricsLog",
    "METRIC_VOCABULARY",
    "AuditSnapshot",
    "SiteResult",
    "EntryKind",
    "EvaluationReport",
]
