"""ensure-interval - command-line interface.

Usage:
    python -m ensure_interval --help
    python -m ensure_interval run --jobs myapp.jobs:load_jobs
    python -m ensure_interval due --jobs myapp.jobs:load_jobs
"""

from __future__ import annotations

import click

from ..core.utils import setup_logging


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="INFO",
    help="Set logging level.",
)
@click.option(
    "--log-format",
    type=click.Choice(["console", "json"], case_sensitive=False),
    default="console",
    help="Set logging format.",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str, log_format: str) -> None:
    """ensure-interval - fixed-tick job scheduler.

    Runs jobs at multiples of a base interval and replays ticks that
    slow jobs caused to be missed.

    \b
    Examples:
      python -m ensure_interval run --jobs myapp.jobs:load_jobs --interval 5
      python -m ensure_interval due --jobs myapp.jobs:JOBS
    """
    ctx.ensure_object(dict)
    ctx.obj["log_level"] = log_level
    ctx.obj["log_format"] = log_format
    setup_logging(level=log_level, log_format=log_format)


# Import and register commands
from .commands import due, run

cli.add_command(run.run)
cli.add_command(due.due)


if __name__ == "__main__":
    cli()
