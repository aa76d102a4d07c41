"""ensure-interval exception hierarchy.

Every error raised out of a scheduler run inherits from IntervalError,
so callers can catch one type and inspect ``temporary`` to decide
whether restarting the run is reasonable.
"""

from __future__ import annotations

from datetime import datetime


class IntervalError(Exception):
    """Base exception for all scheduler errors."""

    def __init__(self, message: str = "", *, temporary: bool = False) -> None:
        super().__init__(message)
        self.temporary = temporary


class JobsLoadError(IntervalError):
    """The job loader failed to produce the job list."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"getting jobs: {cause}")
        self.cause = cause


class JobExecutionError(IntervalError):
    """A single job raised while executing."""

    def __init__(self, job_name: str, cause: BaseException) -> None:
        super().__init__(f"executing job {job_name}: {cause}")
        self.job_name = job_name
        self.cause = cause


class TickExecutionError(IntervalError):
    """One or more jobs failed during a tick.

    Attributes:
        errors: Per-job failures, in the order the jobs were loaded.
        tick_time: Tick boundary the jobs were running for.
    """

    def __init__(self, errors: list[JobExecutionError], tick_time: datetime) -> None:
        super().__init__(", ".join(str(err) for err in errors))
        self.errors = list(errors)
        self.tick_time = tick_time

    @property
    def job_names(self) -> list[str]:
        return [err.job_name for err in self.errors]


class MaxCatchupsExceeded(IntervalError):
    """The backlog could not be drained within the catch-up ceiling."""

    def __init__(self, max_catchups: int) -> None:
        super().__init__("max catchups reached", temporary=True)
        self.max_catchups = max_catchups
