"""Shared fixtures for scheduler tests."""

from datetime import datetime, timedelta, timezone

import pytest

# A multiple of 60 seconds since the epoch
T0 = datetime(2024, 1, 1, 0, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Manually advanced clock with a matching sleep coroutine."""

    def __init__(self, start: datetime = T0):
        self.now = start
        self.sleeps: list[float] = []
        self.on_sleep = None

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.advance(seconds)
        if self.on_sleep is not None:
            self.on_sleep(len(self.sleeps))


@pytest.fixture
def clock():
    return FakeClock()
