"""Audit snapshot exceptions: loading and validating results documents."""

from pathlib import Path
from typing import Union

from .base import LighthouseGuardError


class SnapshotError(LighthouseGuardError):
    """Base class for results-document errors."""

    pass


class SnapshotLoadError(SnapshotError):
    """Raised when a results document that must exist cannot be loaded.

    ``kind`` is ``"missing"`` when the file is absent or unreadable and
    ``"malformed"`` when its contents are not a JSON object.
    """

    def __init__(self, path: Union[str, Path], kind: str, reason: str):
        super().__init__(
            f"Could not load results from {path}",
            details={"path": str(path), "kind": kind, "reason": reason},
        )
        self.path = path
        self.kind = kind
        self.reason = reason
