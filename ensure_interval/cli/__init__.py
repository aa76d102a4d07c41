"""CLI package for ensure-interval.

Provides a command-line interface for:
- Running a job loader on a fixed tick grid
- Inspecting which jobs are due at a given tick
"""

from .main import cli

__all__ = ["cli"]
