"""Persistence exceptions: the append-only metrics log."""

from pathlib import Path
from typing import Union

from .base import LighthouseGuardError


class StorageError(LighthouseGuardError):
    """Base class for persistence errors."""

    pass


class MetricsLogError(StorageError):
    """Raised when the metrics log cannot be written or read."""

    def __init__(self, path: Union[str, Path], reason: str):
        super().__init__(
            f"Metrics log unavailable: {path}",
            details={"path": str(path), "reason": reason},
        )
        self.path = path
        self.reason = reason
