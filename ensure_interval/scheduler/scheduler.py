"""Fixed-tick scheduler with catch-up.

Usage:
    async def refresh():
        ...

    def load():
        return [Job(name="refresh", func=refresh, frequency=5)]

    scheduler = Scheduler(interval_seconds=1, load_jobs=load)
    await scheduler.run()  # runs until a job fails or stop() is called
"""

from __future__ import annotations

import asyncio
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Awaitable, Callable

from ..core.config import DEFAULT_MAX_CATCHUPS, SchedulerConfig
from ..core.errors import IntervalError, JobsLoadError, MaxCatchupsExceeded
from ..core.utils import get_logger, to_timedelta, truncate, utc_now
from .executor import process_jobs
from .job import Job, JobLoader, load_jobs

logger = get_logger(__name__)

Clock = Callable[[], datetime]
Sleep = Callable[[float], Awaitable[Any]]


@dataclass
class TickStats:
    """Counters for a scheduler run.

    Attributes:
        ticks: Tick boundaries processed, catch-up rounds included.
        catchup_rounds: Catch-up rounds processed.
        jobs_run: Job invocations launched.
        last_tick: Most recent boundary processed.
        last_elapsed_seconds: Time spent past the last boundary.
        started_at: When the run started.
    """

    ticks: int = 0
    catchup_rounds: int = 0
    jobs_run: int = 0
    last_tick: datetime | None = None
    last_elapsed_seconds: float = 0.0
    started_at: datetime | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "ticks": self.ticks,
            "catchup_rounds": self.catchup_rounds,
            "jobs_run": self.jobs_run,
            "last_tick": self.last_tick.isoformat() if self.last_tick else None,
            "last_elapsed_seconds": self.last_elapsed_seconds,
            "started_at": self.started_at.isoformat() if self.started_at else None,
        }


class Scheduler:
    """Runs jobs on a fixed tick grid, replaying ticks missed by slow jobs.

    Every iteration the current time is truncated to the base interval,
    the job list is reloaded and the due jobs run. When that overruns the
    interval, the following boundaries are processed back to back until
    the backlog is drained, failing with MaxCatchupsExceeded once more
    rounds than max_catchups would be needed.
    """

    def __init__(
        self,
        interval_seconds: float | timedelta,
        load_jobs: JobLoader,
        max_catchups: int = DEFAULT_MAX_CATCHUPS,
        log=None,
        clock: Clock = utc_now,
        sleep: Sleep = asyncio.sleep,
    ):
        """Initialize scheduler.

        Args:
            interval_seconds: Base tick interval.
            load_jobs: Called once per iteration for the current jobs.
            max_catchups: Catch-up rounds tolerated per iteration.
            log: structlog-style logger. Defaults to the module logger.
            clock: Returns the current aware UTC time.
            sleep: Coroutine function sleeping for a number of seconds.
        """
        self.interval = to_timedelta(interval_seconds)
        if self.interval <= timedelta(0):
            raise ValueError(f"Interval must be positive, got {self.interval}")

        self._load_jobs = load_jobs
        self._log = log or logger
        self._clock = clock
        self._sleep = sleep
        self._lock = threading.Lock()
        self._max_catchups = 0
        self.set_max_catchups(max_catchups)

        self._running = False
        self._shutdown = asyncio.Event()
        self.stats = TickStats()

    @classmethod
    def from_config(
        cls,
        config: SchedulerConfig,
        load_jobs: JobLoader,
        **kwargs: Any,
    ) -> Scheduler:
        """Create a scheduler from configuration."""
        return cls(
            interval_seconds=config.interval_seconds,
            load_jobs=load_jobs,
            max_catchups=config.max_catchups,
            **kwargs,
        )

    @property
    def max_catchups(self) -> int:
        """Current catch-up ceiling."""
        with self._lock:
            return self._max_catchups

    def set_max_catchups(self, value: int) -> None:
        """Change the catch-up ceiling, effective at the next check.

        Safe to call from other threads while the scheduler runs.
        """
        if value < 1:
            raise ValueError(f"max_catchups must be at least 1, got {value}")
        with self._lock:
            self._max_catchups = value

    @property
    def running(self) -> bool:
        return self._running

    def stop(self) -> None:
        """Ask the run loop to return after the tick in progress."""
        self._shutdown.set()

    async def run(self) -> None:
        """Run until a failure or stop().

        Raises:
            JobsLoadError: If the loader raised.
            TickExecutionError: If any job raised.
            MaxCatchupsExceeded: If the backlog could not be drained.
        """
        if self._running:
            raise RuntimeError("Scheduler already running")

        self._running = True
        self._shutdown.clear()
        self.stats = TickStats(started_at=self._clock())
        self._log.info(
            "starting scheduler",
            interval_seconds=self.interval.total_seconds(),
            max_catchups=self.max_catchups,
        )

        try:
            while not self._shutdown.is_set():
                last_elapsed = await self._run_iteration()
                await self._wait(self.interval - last_elapsed)
        except IntervalError as e:
            self._log.error(
                "scheduler stopped on error",
                error=str(e),
                error_type=type(e).__name__,
                temporary=e.temporary,
            )
            raise
        finally:
            self._running = False

        self._log.info("scheduler stopped", **self.stats.to_dict())

    async def _run_iteration(self) -> timedelta:
        """Process one tick plus any catch-up rounds.

        Returns:
            Time elapsed since the last processed boundary.
        """
        now = truncate(self._clock(), self.interval)
        jobs = await self._load()

        await self._process(now, jobs)
        finished = self._clock()
        last_elapsed = finished - now
        elapsed = last_elapsed

        total_interval = self.interval
        rounds = 0
        while elapsed > total_interval:
            max_catchups = self.max_catchups
            if rounds >= max_catchups:
                raise MaxCatchupsExceeded(max_catchups)
            if rounds == 0:
                self._log.info(
                    "catching up",
                    tick=now.isoformat(),
                    behind_seconds=(elapsed - total_interval).total_seconds(),
                )

            boundary = now + total_interval
            await self._process(boundary, jobs)
            rounds += 1
            self.stats.catchup_rounds += 1

            finished = self._clock()
            last_elapsed = finished - boundary
            elapsed = finished - now
            total_interval += self.interval

        self.stats.last_elapsed_seconds = last_elapsed.total_seconds()
        return last_elapsed

    async def _load(self) -> list[Job]:
        try:
            return await load_jobs(self._load_jobs)
        except Exception as e:
            raise JobsLoadError(e) from e

    async def _process(self, tick_time: datetime, jobs: list[Job]) -> None:
        launched = await process_jobs(tick_time, self.interval, jobs, log=self._log)
        self.stats.ticks += 1
        self.stats.jobs_run += launched
        self.stats.last_tick = tick_time

    async def _wait(self, delay: timedelta) -> None:
        """Sleep for delay, returning early once stop() is called."""
        seconds = delay.total_seconds()
        if seconds <= 0 or self._shutdown.is_set():
            return

        sleeper = asyncio.ensure_future(self._sleep(seconds))
        stopper = asyncio.ensure_future(self._shutdown.wait())
        try:
            await asyncio.wait(
                {sleeper, stopper},
                return_when=asyncio.FIRST_COMPLETED,
            )
        finally:
            for task in (sleeper, stopper):
                if not task.done():
                    task.cancel()

    def get_status(self) -> dict:
        """Get scheduler status.

        Returns:
            Dictionary with scheduler metrics.
        """
        return {
            "running": self._running,
            "interval_seconds": self.interval.total_seconds(),
            "max_catchups": self.max_catchups,
            **self.stats.to_dict(),
        }


async def run(
    interval_seconds: float | timedelta,
    load_jobs: JobLoader,
    **kwargs: Any,
) -> None:
    """Run jobs at interval until a failure.

    Args:
        interval_seconds: Base tick interval.
        load_jobs: Called once per iteration for the current jobs.
        **kwargs: Passed to Scheduler.

    Raises:
        IntervalError: When the run ends on a failure.
    """
    scheduler = Scheduler(interval_seconds, load_jobs, **kwargs)
    await scheduler.run()
