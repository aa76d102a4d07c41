"""Tick executor.

Runs the jobs due at one tick boundary concurrently and waits for every
one of them before returning:
- Due selection against each job's own period grid
- Fan-out with asyncio (worker threads for plain functions)
- Fan-in of all results, failures aggregated into one error
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from datetime import datetime, timedelta

from ..core.errors import JobExecutionError, TickExecutionError
from ..core.utils import get_logger, truncate
from .job import Job

logger = get_logger(__name__)


def is_due(tick_time: datetime, interval: timedelta, job: Job) -> bool:
    """Check if a job's period grid lands on a tick boundary.

    Args:
        tick_time: Tick boundary being processed.
        interval: Base tick interval.
        job: Job to check.

    Returns:
        True if the job should run at tick_time.
    """
    return truncate(tick_time, job.period(interval)) == tick_time


def due_jobs(
    tick_time: datetime,
    interval: timedelta,
    jobs: Sequence[Job],
) -> list[Job]:
    """Select the jobs due at tick_time, keeping loader order."""
    return [job for job in jobs if is_due(tick_time, interval, job)]


async def process_jobs(
    tick_time: datetime,
    interval: timedelta,
    jobs: Sequence[Job],
    log=None,
) -> int:
    """Run every job due at tick_time and wait for all of them.

    A failing job never cancels the others; the tick only finishes once
    every launched job has reported back.

    Args:
        tick_time: Tick boundary being processed.
        interval: Base tick interval.
        jobs: Jobs loaded for this iteration.
        log: Logger to report on. Defaults to the module logger.

    Returns:
        Number of jobs launched.

    Raises:
        TickExecutionError: If any job raised.
    """
    log = log or logger
    selected = due_jobs(tick_time, interval, jobs)

    for job in selected:
        log.debug(
            "running job",
            job=job.name,
            period_seconds=job.period(interval).total_seconds(),
        )
    log.debug("started jobs", count=len(selected), tick=tick_time.isoformat())

    if not selected:
        return 0

    results = await asyncio.gather(
        *(job.invoke() for job in selected),
        return_exceptions=True,
    )

    errors: list[JobExecutionError] = []
    for job, result in zip(selected, results):
        if isinstance(result, Exception):
            error = JobExecutionError(job.name, result)
            error.__cause__ = result
            log.error("job failed", job=job.name, error=str(result))
            errors.append(error)
        elif isinstance(result, BaseException):
            raise result
        else:
            log.debug("job finished", job=job.name)

    if errors:
        raise TickExecutionError(errors, tick_time)

    return len(selected)
