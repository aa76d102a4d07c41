"""Core utilities, configuration and errors."""

from .config import Config, SchedulerConfig, load_config
from .errors import (
    IntervalError,
    JobExecutionError,
    JobsLoadError,
    MaxCatchupsExceeded,
    TickExecutionError,
)
from .utils import get_logger, setup_logging

__all__ = [
    "Config",
    "IntervalError",
    "JobExecutionError",
    "JobsLoadError",
    "MaxCatchupsExceeded",
    "SchedulerConfig",
    "TickExecutionError",
    "get_logger",
    "load_config",
    "setup_logging",
]
