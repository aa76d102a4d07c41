"""Configuration management for ensure-interval."""

from __future__ import annotations

import json
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field

DEFAULT_MAX_CATCHUPS = 20


class SchedulerConfig(BaseModel):
    """Tick driver configuration.

    Attributes:
        interval_seconds: Base tick interval.
        max_catchups: Catch-up rounds tolerated before a run fails.
    """

    interval_seconds: float = Field(default=1.0, gt=0)
    max_catchups: int = Field(default=DEFAULT_MAX_CATCHUPS, ge=1)

    @classmethod
    def from_env(cls) -> SchedulerConfig:
        """Load scheduler settings from environment variables."""
        load_dotenv()
        return cls(
            interval_seconds=float(os.getenv("ENSURE_INTERVAL_SECONDS", "1.0")),
            max_catchups=int(
                os.getenv("ENSURE_INTERVAL_MAX_CATCHUPS", str(DEFAULT_MAX_CATCHUPS))
            ),
        )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    format: str = "console"


class Config(BaseModel):
    """Main configuration container."""

    scheduler: SchedulerConfig = Field(default_factory=SchedulerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config(config_path: str | Path | None = None) -> Config:
    """Load configuration from JSON file.

    Args:
        config_path: Path to config file. Defaults to configs/default.json.

    Returns:
        Loaded configuration object.
    """
    if config_path is None:
        config_path = Path(__file__).parent.parent.parent / "configs" / "default.json"

    config_path = Path(config_path)

    if not config_path.exists():
        return Config()

    with open(config_path) as f:
        data = json.load(f)

    return Config(
        scheduler=data.get("scheduler", {}),
        logging=data.get("logging", {}),
    )
