"""Job definitions and job loader contract."""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Awaitable, Callable, Union

JobFunc = Callable[[], Any]

JobLoader = Callable[[], Union[Sequence["Job"], Awaitable[Sequence["Job"]]]]


@dataclass
class Job:
    """Job to run on the tick grid.

    Attributes:
        name: Job identifier, used in logs and error attribution.
        func: Zero-argument function. Plain functions run on a worker
            thread; ``async def`` functions are awaited on the loop.
        frequency: Multiple of the base interval between runs.
    """

    name: str
    func: JobFunc
    frequency: int = 1

    def __post_init__(self):
        if not isinstance(self.frequency, int) or self.frequency < 1:
            raise ValueError(
                f"Job '{self.name}' frequency must be a positive integer, "
                f"got {self.frequency!r}"
            )

    @property
    def is_async(self) -> bool:
        """Whether func is a coroutine function."""
        return inspect.iscoroutinefunction(self.func)

    def period(self, interval: timedelta) -> timedelta:
        """Get this job's own period for a base interval."""
        return interval * self.frequency

    async def invoke(self) -> Any:
        """Run func once, off the event loop when it is synchronous."""
        if self.is_async:
            return await self.func()
        return await asyncio.to_thread(self.func)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "frequency": self.frequency,
            "async": self.is_async,
        }


def static_loader(jobs: Sequence[Job]) -> JobLoader:
    """Wrap a fixed job list as a loader.

    Args:
        jobs: Jobs to hand out on every tick.

    Returns:
        Loader returning a fresh copy of the list.
    """
    snapshot = list(jobs)

    def load() -> list[Job]:
        return list(snapshot)

    return load


async def load_jobs(loader: JobLoader) -> list[Job]:
    """Call a loader, awaiting its result if it is awaitable."""
    result = loader()
    if inspect.isawaitable(result):
        result = await result
    return list(result)
