"""Configuration loading and management for Lighthouse Guard.

Configuration sources are merged in priority order:
    1. Defaults (defined in GuardConfig)
    2. Project config (./lighthouse-guard.toml)
    3. Explicit config file (--config)
    4. Environment variables
    5. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(threshold_percent=5)
    >>> config.threshold_percent
    5
    >>> config.tracked_metrics
    ('performance', 'accessibility')
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Tuple

from .exceptions import ConfigurationError, InvalidConfigError
from .logging_config import get_logger
from .models import DEFAULT_TRACKED_METRICS, METRIC_VOCABULARY

logger = get_logger(__name__)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

DEFAULT_THRESHOLD_PERCENT = 10
DEFAULT_METRICS_LOG_NAME = "lighthouse-metrics.csv"
PROJECT_CONFIG_NAME = "lighthouse-guard.toml"

THRESHOLD_ENV_VAR = "REGRESSION_THRESHOLD_PERCENT"
ENV_PREFIX = "LIGHTHOUSE_GUARD_"


@dataclass(frozen=True)
class GuardConfig:
    """Settings for one regression check.

    Attributes:
        tracked_metrics: Metrics compared for pass/fail. Must be drawn from
            the metric vocabulary; the metrics log always records all of them.
        threshold_percent: A drop strictly larger than this percentage of the
            previous score is a regression.
        metrics_log_name: File name of the metrics log, created next to the
            new results document unless a path is given explicitly.
    """

    tracked_metrics: Tuple[str, ...] = DEFAULT_TRACKED_METRICS
    threshold_percent: int = DEFAULT_THRESHOLD_PERCENT
    metrics_log_name: str = DEFAULT_METRICS_LOG_NAME

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        # Accept any iterable of names but store a tuple
        object.__setattr__(self, "tracked_metrics", tuple(self.tracked_metrics))

        if not self.tracked_metrics:
            raise InvalidConfigError(
                "tracked_metrics", self.tracked_metrics, "at least one metric is required"
            )
        unknown = [m for m in self.tracked_metrics if m not in METRIC_VOCABULARY]
        if unknown:
            raise InvalidConfigError(
                "tracked_metrics",
                ", ".join(unknown),
                f"must be one of: {', '.join(METRIC_VOCABULARY)}",
            )
        if len(set(self.tracked_metrics)) != len(self.tracked_metrics):
            raise InvalidConfigError(
                "tracked_metrics", ", ".join(self.tracked_metrics), "duplicate metric names"
            )

        if isinstance(self.threshold_percent, bool) or not isinstance(self.threshold_percent, int):
            raise InvalidConfigError(
                "threshold_percent", self.threshold_percent, "must be an integer percent"
            )
        if not 0 <= self.threshold_percent <= 100:
            raise InvalidConfigError(
                "threshold_percent", self.threshold_percent, "must be between 0 and 100"
            )

        if not self.metrics_log_name:
            raise InvalidConfigError("metrics_log_name", self.metrics_log_name, "must not be empty")


def load_config(config_file: Optional[Path] = None, **overrides: Any) -> GuardConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit TOML config file path
        **overrides: Direct overrides (typically from CLI flags); ``None``
            values are ignored

    Returns:
        Validated GuardConfig instance

    Raises:
        ConfigurationError: If a config file is missing or unreadable
        InvalidConfigError: If a merged value fails validation
    """
    merged: dict = {}

    project_config = Path.cwd() / PROJECT_CONFIG_NAME
    if project_config.exists():
        merged.update(_load_toml_file(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        merged.update(_load_toml_file(config_file))

    merged.update(_load_env_vars())

    merged.update({k: v for k, v in overrides.items() if v is not None})

    if isinstance(merged.get("tracked_metrics"), str):
        merged["tracked_metrics"] = _split_metrics(merged["tracked_metrics"])

    try:
        config = GuardConfig(**merged)
    except TypeError as e:
        # Unknown field in config
        raise ConfigurationError(f"Invalid configuration: {e}")

    logger.debug(f"Loaded configuration: {config}")
    return config


def parse_threshold(value: Optional[str]) -> int:
    """Parse the threshold environment value.

    The leading integer is used, so ``"12.5"`` reads as 12 and ``"15%"`` as
    15. Absent, empty or non-numeric values fall back to the default threshold.
    """
    match = _LEADING_INT.match(value) if value is not None else None
    if match is None:
        if value is not None and value.strip():
            logger.warning(
                f"Ignoring non-numeric {THRESHOLD_ENV_VAR}={value!r}; "
                f"using {DEFAULT_THRESHOLD_PERCENT}%"
            )
        return DEFAULT_THRESHOLD_PERCENT
    return int(match.group(1))


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from environment variables.

    Supported environment variables:
        REGRESSION_THRESHOLD_PERCENT: int (non-numeric falls back to default)
        LIGHTHOUSE_GUARD_TRACKED_METRICS: comma-separated metric names
        LIGHTHOUSE_GUARD_METRICS_LOG_NAME: str

    Returns:
        Dict of field_name -> parsed_value for any variables found.
    """
    result: dict[str, Any] = {}

    if THRESHOLD_ENV_VAR in os.environ:
        result["threshold_percent"] = parse_threshold(os.environ[THRESHOLD_ENV_VAR])

    metrics = os.environ.get(f"{ENV_PREFIX}TRACKED_METRICS")
    if metrics:
        result["tracked_metrics"] = _split_metrics(metrics)

    log_name = os.environ.get(f"{ENV_PREFIX}METRICS_LOG_NAME")
    if log_name:
        result["metrics_log_name"] = log_name

    return result


def _split_metrics(value: str) -> Tuple[str, ...]:
    return tuple(part.strip() for part in value.split(",") if part.strip())


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Args:
        path: Path to TOML file

    Returns:
        Parsed TOML as dict

    Raises:
        ConfigurationError: If the file cannot be read or parsed
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        import tomli as tomllib  # type: ignore

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Invalid config file '{path}': {e}")
