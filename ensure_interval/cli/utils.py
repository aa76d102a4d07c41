"""CLI utility functions.

Provides:
- Async execution helpers for Click commands
- Job loader resolution from ``module:attribute`` references
- Output formatting utilities
"""

from __future__ import annotations

import asyncio
import importlib
import json
import sys
from functools import wraps
from typing import Any, Callable, TypeVar

import click

from ..core.utils import get_logger
from ..scheduler.job import Job, JobLoader, static_loader

logger = get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def async_command(f: F) -> F:
    """Decorator to run async functions in Click commands.

    Usage:
        @cli.command()
        @async_command
        async def my_command():
            await some_async_operation()
    """
    @wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        return asyncio.run(f(*args, **kwargs))
    return wrapper  # type: ignore


def import_object(reference: str) -> Any:
    """Import an object from a ``package.module:attribute`` reference."""
    module_name, sep, attr_path = reference.partition(":")
    if not sep or not module_name or not attr_path:
        raise click.BadParameter(
            f"expected 'module:attribute', got {reference!r}", param_hint="--jobs"
        )

    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise click.BadParameter(
            f"cannot import module {module_name!r}: {e}", param_hint="--jobs"
        ) from e

    for attr in attr_path.split("."):
        try:
            obj = getattr(obj, attr)
        except AttributeError as e:
            raise click.BadParameter(
                f"{module_name!r} has no attribute {attr_path!r}", param_hint="--jobs"
            ) from e
    return obj


def resolve_loader(reference: str) -> JobLoader:
    """Turn a ``--jobs`` reference into a job loader.

    The reference may name a loader function or a list of Job objects.
    """
    obj = import_object(reference)
    if isinstance(obj, (list, tuple)):
        if not all(isinstance(job, Job) for job in obj):
            raise click.BadParameter(
                f"{reference!r} must contain only Job objects", param_hint="--jobs"
            )
        return static_loader(obj)
    if callable(obj):
        return obj
    raise click.BadParameter(
        f"{reference!r} is neither a job loader nor a list of jobs", param_hint="--jobs"
    )


def print_header(title: str, width: int = 70) -> None:
    """Print a formatted header."""
    click.echo("=" * width)
    click.echo(f"  {title}")
    click.echo("=" * width)


def handle_error(error: Exception, verbose: bool = False) -> None:
    """Handle and display errors consistently."""
    if verbose:
        logger.exception("Command failed", error=str(error))
    click.echo(f"\nError: {error}", err=True)
    sys.exit(1)


def output_json(data: Any) -> None:
    """Output data as JSON."""
    click.echo(json.dumps(data, indent=2, default=str))


def output_table(headers: list[str], rows: list[list[Any]]) -> None:
    """Output data as formatted table."""
    # Calculate column widths
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(str(cell)))

    # Print header
    header_line = " | ".join(f"{h:<{widths[i]}}" for i, h in enumerate(headers))
    click.echo(header_line)
    click.echo("-" * len(header_line))

    # Print rows
    for row in rows:
        row_line = " | ".join(f"{str(cell):<{widths[i]}}" for i, cell in enumerate(row))
        click.echo(row_line)
