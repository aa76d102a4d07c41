"""Fixed-tick job scheduling.

This module provides:
- Job definitions and loader helpers
- Tick executor running due jobs concurrently
- Tick driver with bounded catch-up of missed ticks
"""

from .executor import due_jobs, is_due, process_jobs
from .job import Job, JobLoader, static_loader
from .scheduler import Scheduler, TickStats, run

__all__ = [
    "Job",
    "JobLoader",
    "Scheduler",
    "TickStats",
    "due_jobs",
    "is_due",
    "process_jobs",
    "run",
    "static_loader",
]
