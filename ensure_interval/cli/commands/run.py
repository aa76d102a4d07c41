"""Run command - starts the tick scheduler.

Starts a scheduler session that:
- Reloads jobs from the given loader every tick
- Runs due jobs concurrently, replaying ticks missed by slow jobs
- Stops on the first failure or on SIGINT/SIGTERM
"""

from __future__ import annotations

import asyncio
import signal
import sys

import click
from click.core import ParameterSource

from ...core.config import Config, SchedulerConfig, load_config
from ...core.errors import IntervalError
from ...core.utils import get_logger, setup_logging
from ...scheduler.job import JobLoader
from ...scheduler.scheduler import Scheduler
from ..utils import handle_error, resolve_loader

logger = get_logger(__name__)


async def run_scheduler(config: SchedulerConfig, loader: JobLoader) -> None:
    """Run the scheduler until it fails or a shutdown signal arrives.

    Args:
        config: Scheduler settings.
        loader: Job loader called every tick.
    """
    scheduler = Scheduler.from_config(config, loader)
    loop = asyncio.get_running_loop()

    def handle_shutdown(sig, frame):
        logger.info(f"Received signal {sig}, shutting down...")
        # Wakes the loop if it is blocked in the end-of-tick sleep
        loop.call_soon_threadsafe(scheduler.stop)

    # Register signal handlers (Unix only)
    previous_handlers = {}
    if sys.platform != "win32":
        for sig in (signal.SIGINT, signal.SIGTERM):
            previous_handlers[sig] = signal.signal(sig, handle_shutdown)

    click.echo("Starting scheduler...")
    click.echo(f"  Interval: {config.interval_seconds}s")
    click.echo(f"  Max catch-ups: {config.max_catchups}")
    click.echo("Press Ctrl+C to stop.")
    click.echo("-" * 50)

    try:
        await scheduler.run()
    except KeyboardInterrupt:
        pass
    finally:
        for sig, handler in previous_handlers.items():
            if handler is not None:
                signal.signal(sig, handler)
        status = scheduler.get_status()
        click.echo(
            f"Processed {status['ticks']} ticks "
            f"({status['catchup_rounds']} catch-up rounds, {status['jobs_run']} job runs)."
        )


def build_config(
    config_path: str | None,
    interval: float | None,
    max_catchups: int | None,
) -> Config:
    """Resolve configuration for a run.

    Scheduler settings come from the --config file when one is given,
    otherwise from the ENSURE_INTERVAL_* environment variables. Command
    line options override either.
    """
    config = load_config(config_path)
    scheduler_config = config.scheduler if config_path else SchedulerConfig.from_env()

    overrides = {}
    if interval is not None:
        overrides["interval_seconds"] = interval
    if max_catchups is not None:
        overrides["max_catchups"] = max_catchups
    if overrides:
        scheduler_config = SchedulerConfig(**{**scheduler_config.model_dump(), **overrides})

    return config.model_copy(update={"scheduler": scheduler_config})


def apply_logging_config(ctx: click.Context, config: Config) -> None:
    """Apply the logging section where the group options were left unset."""
    root = ctx.find_root()
    from_config = {}
    if root.get_parameter_source("log_level") in (ParameterSource.DEFAULT, None):
        from_config["level"] = config.logging.level
    if root.get_parameter_source("log_format") in (ParameterSource.DEFAULT, None):
        from_config["log_format"] = config.logging.format
    if not from_config:
        return

    obj = root.obj or {}
    setup_logging(
        level=from_config.get("level", obj.get("log_level", "INFO")),
        log_format=from_config.get("log_format", obj.get("log_format", "console")),
    )


@click.command()
@click.option(
    "--jobs",
    "jobs_ref",
    required=True,
    help="Job loader or job list as 'package.module:attribute'.",
)
@click.option(
    "--interval",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Base tick interval in seconds (default: config or ENSURE_INTERVAL_SECONDS, 1.0).",
)
@click.option(
    "--max-catchups",
    type=click.IntRange(min=1),
    default=None,
    help="Catch-up rounds allowed before failing "
    "(default: config or ENSURE_INTERVAL_MAX_CATCHUPS, 20).",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="JSON config file. Without it, scheduler settings come from the environment.",
)
@click.pass_context
def run(
    ctx: click.Context,
    jobs_ref: str,
    interval: float | None,
    max_catchups: int | None,
    config_path: str | None,
) -> None:
    """Run jobs on a fixed tick grid.

    \b
    Examples:
      python -m ensure_interval run --jobs myapp.jobs:load_jobs
      python -m ensure_interval run --jobs myapp.jobs:JOBS --interval 5
      ENSURE_INTERVAL_SECONDS=5 python -m ensure_interval run --jobs myapp.jobs:JOBS
    """
    loader = resolve_loader(jobs_ref)
    try:
        config = build_config(config_path, interval, max_catchups)
    except ValueError as e:
        raise click.UsageError(f"Invalid scheduler configuration: {e}") from e
    apply_logging_config(ctx, config)

    try:
        asyncio.run(run_scheduler(config.scheduler, loader))
    except IntervalError as e:
        if e.temporary:
            click.echo("The scheduler fell too far behind; restarting is safe.", err=True)
        handle_error(e)
