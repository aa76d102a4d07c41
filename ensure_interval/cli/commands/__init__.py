"""CLI command modules.

Commands:
- run: Start the tick scheduler
- due: Show which jobs are due at a tick boundary
"""

from . import due, run

__all__ = ["due", "run"]
