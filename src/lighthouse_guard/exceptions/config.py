"""Configuration and invocation exceptions: settings, arguments."""

from typing import Any

from .base import LighthouseGuardError


class ConfigurationError(LighthouseGuardError):
    """Base class for configuration-related errors."""

    pass


class InvalidConfigError(ConfigurationError):
    """Raised when configuration values are invalid."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for {key}: {value}",
            details={"key": key, "value": str(value), "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason


class UsageError(ConfigurationError):
    """Raised when required invocation inputs are missing."""

    def __init__(self, reason: str):
        super().__init__(f"Usage error: {reason}")
        self.reason = reason
