"""Tests for the Lighthouse Guard exception hierarchy."""

from lighthouse_guard.exceptions import (
    ConfigurationError,
    InvalidConfigError,
    LighthouseGuardError,
    MetricsLogError,
    SnapshotError,
    SnapshotLoadError,
    StorageError,
    UsageError,
)


class TestLighthouseGuardError:
    """Test base exception formatting."""

    def test_message_only(self):
        err = LighthouseGuardError("Something failed")
        assert str(err) == "Something failed"
        assert err.details == {}

    def test_details_rendered(self):
        err = LighthouseGuardError("Something failed", details={"path": "a.json"})
        assert str(err) == "Something failed (path=a.json)"


class TestHierarchy:
    def test_config_errors(self):
        assert issubclass(InvalidConfigError, ConfigurationError)
        assert issubclass(UsageError, ConfigurationError)
        assert issubclass(ConfigurationError, LighthouseGuardError)

    def test_snapshot_load_error(self):
        err = SnapshotLoadError("new.json", "missing", "file not found")
        assert isinstance(err, SnapshotError)
        assert err.kind == "missing"
        assert str(err) == (
            "Could not load results from new.json "
            "(path=new.json, kind=missing, reason=file not found)"
        )

    def test_metrics_log_error(self):
        err = MetricsLogError("log.csv", "Permission denied")
        assert isinstance(err, StorageError)
        assert err.reason == "Permission denied"
        assert "log.csv" in str(err)

    def test_invalid_config_error_fields(self):
        err = InvalidConfigError("threshold_percent", 150, "must be between 0 and 100")
        assert err.key == "threshold_percent"
        assert err.value == 150
        assert "threshold_percent" in str(err)
