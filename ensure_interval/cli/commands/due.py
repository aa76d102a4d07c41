"""Due command - show which jobs run at a tick boundary."""

from __future__ import annotations

from datetime import datetime, timezone

import click

from ...core.utils import to_timedelta, truncate, utc_now
from ...scheduler.executor import is_due
from ...scheduler.job import load_jobs
from ..utils import async_command, output_json, output_table, print_header, resolve_loader


def parse_time(value: str | None) -> datetime:
    """Parse an ISO timestamp, treating naive values as UTC."""
    if value is None:
        return utc_now()
    try:
        moment = datetime.fromisoformat(value)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--at") from e
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


@click.command()
@click.option(
    "--jobs",
    "jobs_ref",
    required=True,
    help="Job loader or job list as 'package.module:attribute'.",
)
@click.option(
    "--interval",
    type=float,
    default=1.0,
    help="Base tick interval in seconds (default: 1.0).",
)
@click.option(
    "--at",
    "at",
    default=None,
    help="ISO timestamp to check (default: now).",
)
@click.option(
    "--output",
    type=click.Choice(["table", "json"], case_sensitive=False),
    default="table",
    help="Output format.",
)
@async_command
async def due(jobs_ref: str, interval: float, at: str | None, output: str) -> None:
    """Show which jobs are due at a tick boundary.

    \b
    Examples:
      python -m ensure_interval due --jobs myapp.jobs:load_jobs
      python -m ensure_interval due --jobs myapp.jobs:JOBS --at 2024-01-01T00:00:06
    """
    if interval <= 0:
        raise click.BadParameter("must be positive", param_hint="--interval")

    step = to_timedelta(interval)
    tick = truncate(parse_time(at), step)
    jobs = await load_jobs(resolve_loader(jobs_ref))
    rows = [
        {
            "name": job.name,
            "frequency": job.frequency,
            "period_seconds": job.period(step).total_seconds(),
            "due": is_due(tick, step, job),
        }
        for job in jobs
    ]

    if output == "json":
        output_json({"tick": tick.isoformat(), "jobs": rows})
        return

    print_header(f"Tick {tick.isoformat()}")
    output_table(
        ["Job", "Frequency", "Period (s)", "Due"],
        [
            [row["name"], row["frequency"], row["period_seconds"], "yes" if row["due"] else "no"]
            for row in rows
        ],
    )
    click.echo(f"\n{sum(1 for row in rows if row['due'])} of {len(rows)} jobs due")
