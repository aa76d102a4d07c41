"""Tests for configuration loading."""

import json

import pytest
from pydantic import ValidationError

from ensure_interval.core.config import Config, SchedulerConfig, load_config


class TestSchedulerConfig:
    """Tests for SchedulerConfig."""

    def test_defaults(self):
        """Defaults should be one second and twenty catch-ups."""
        config = SchedulerConfig()

        assert config.interval_seconds == 1.0
        assert config.max_catchups == 20

    def test_rejects_invalid_values(self):
        """Interval must be positive and at least one catch-up allowed."""
        with pytest.raises(ValidationError):
            SchedulerConfig(interval_seconds=0)

        with pytest.raises(ValidationError):
            SchedulerConfig(max_catchups=0)

    def test_from_env(self, monkeypatch, tmp_path):
        """Settings should be read from the environment."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("ENSURE_INTERVAL_SECONDS", "0.5")
        monkeypatch.setenv("ENSURE_INTERVAL_MAX_CATCHUPS", "4")

        config = SchedulerConfig.from_env()

        assert config.interval_seconds == 0.5
        assert config.max_catchups == 4

    def test_from_env_defaults(self, monkeypatch, tmp_path):
        """Unset variables fall back to defaults."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("ENSURE_INTERVAL_SECONDS", raising=False)
        monkeypatch.delenv("ENSURE_INTERVAL_MAX_CATCHUPS", raising=False)

        config = SchedulerConfig.from_env()

        assert config == SchedulerConfig()


class TestLoadConfig:
    """Tests for load_config."""

    def test_missing_file_gives_defaults(self, tmp_path):
        """A missing file should not be an error."""
        config = load_config(tmp_path / "missing.json")

        assert config == Config()

    def test_loads_sections(self, tmp_path):
        """Values from the file should override defaults."""
        path = tmp_path / "config.json"
        path.write_text(
            json.dumps(
                {
                    "scheduler": {"interval_seconds": 5, "max_catchups": 3},
                    "logging": {"level": "DEBUG", "format": "json"},
                }
            )
        )

        config = load_config(path)

        assert config.scheduler.interval_seconds == 5
        assert config.scheduler.max_catchups == 3
        assert config.logging.level == "DEBUG"
        assert config.logging.format == "json"

    def test_partial_file(self, tmp_path):
        """Missing sections keep their defaults."""
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"scheduler": {"max_catchups": 2}}))

        config = load_config(path)

        assert config.scheduler.interval_seconds == 1.0
        assert config.scheduler.max_catchups == 2
        assert config.logging.level == "INFO"
