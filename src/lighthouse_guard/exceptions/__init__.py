"""Exception hierarchy for Lighthouse Guard."""

from .base import LighthouseGuardError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    UsageError,
)
from .snapshot import SnapshotError, SnapshotLoadError
from .storage import MetricsLogError, StorageError

__all__ = [
    "LighthouseGuardError",
    "ConfigurationError",
    "InvalidConfigError",
    "UsageError",
    "SnapshotError",
    "SnapshotLoadError",
    "StorageError",
    "MetricsLogError",
]
