"""Tests for the error hierarchy."""

from ensure_interval.core.errors import (
    IntervalError,
    JobExecutionError,
    JobsLoadError,
    MaxCatchupsExceeded,
    TickExecutionError,
)

from conftest import T0


class TestErrors:
    """Tests for error types."""

    def test_all_inherit_from_base(self):
        """Callers should be able to catch IntervalError for everything."""
        for error in (
            JobsLoadError(OSError("x")),
            JobExecutionError("job", ValueError("x")),
            TickExecutionError([], T0),
            MaxCatchupsExceeded(20),
        ):
            assert isinstance(error, IntervalError)

    def test_only_max_catchups_is_temporary(self):
        """Restarting only makes sense after falling behind."""
        assert MaxCatchupsExceeded(20).temporary is True
        assert JobsLoadError(OSError("x")).temporary is False
        assert JobExecutionError("job", ValueError("x")).temporary is False

    def test_load_error_message(self):
        """Load errors should keep the loader's message."""
        error = JobsLoadError(OSError("registry offline"))

        assert str(error) == "getting jobs: registry offline"
        assert isinstance(error.cause, OSError)

    def test_tick_error_joins_messages(self):
        """The composite message lists every job failure."""
        errors = [
            JobExecutionError("a", ValueError("first")),
            JobExecutionError("b", KeyError("second")),
        ]

        error = TickExecutionError(errors, T0)

        assert str(error) == "executing job a: first, executing job b: 'second'"
        assert error.job_names == ["a", "b"]
        assert error.errors == errors
