"""Job definitions referenced by CLI tests."""

from ensure_interval.scheduler.job import Job


def noop():
    pass


def broken():
    raise RuntimeError("disk full")


JOBS = [
    Job(name="every_tick", func=noop, frequency=1),
    Job(name="every_other", func=noop, frequency=2),
    Job(name="every_third", func=noop, frequency=3),
]

FAILING = [Job(name="broken", func=broken, frequency=1)]


def load_jobs():
    return list(JOBS)


NOT_JOBS = ["every_tick"]
