"""ensure-interval - fixed-tick job scheduler with catch-up."""

from .core.errors import (
    IntervalError,
    JobExecutionError,
    JobsLoadError,
    MaxCatchupsExceeded,
    TickExecutionError,
)
from .scheduler import Job, JobLoader, Scheduler, run, static_loader

__version__ = "0.1.0"

__all__ = [
    "IntervalError",
    "Job",
    "JobExecutionError",
    "JobLoader",
    "JobsLoadError",
    "MaxCatchupsExceeded",
    "Scheduler",
    "TickExecutionError",
    "run",
    "static_loader",
]
