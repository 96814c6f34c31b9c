"""Tests for environment-driven configuration."""

from pathlib import Path

import pytest

from coldcraft.config import AppConfig
from coldcraft.models import Tone


class TestAppConfig:
    def test_defaults(self):
        config = AppConfig.from_env({})
        assert config.generation_delay_seconds == 2.0
        assert config.default_tone == Tone.PROFESSIONAL
        assert config.export_dir == Path("exports")
        assert config.log_level == "INFO"

    def test_overrides(self):
        config = AppConfig.from_env({
            "COLDCRAFT_GENERATION_DELAY": "0.5",
            "COLDCRAFT_DEFAULT_TONE": "Casual",
            "COLDCRAFT_EXPORT_DIR": "/tmp/out",
            "COLDCRAFT_LOG_LEVEL": "debug",
        })
        assert config.generation_delay_seconds == 0.5
        assert config.default_tone == Tone.CASUAL
        assert config.export_dir == Path("/tmp/out")
        assert config.log_level == "DEBUG"

    def test_blank_values_use_defaults(self):
        config = AppConfig.from_env({"COLDCRAFT_GENERATION_DELAY": " ", "COLDCRAFT_DEFAULT_TONE": ""})
        assert config.generation_delay_seconds == 2.0
        assert config.default_tone == Tone.PROFESSIONAL

    def test_negative_delay(self):
        with pytest.raises(ValueError, match="must be >= 0"):
            AppConfig.from_env({"COLDCRAFT_GENERATION_DELAY": "-1"})

    def test_non_numeric_delay(self):
        with pytest.raises(ValueError):
            AppConfig.from_env({"COLDCRAFT_GENERATION_DELAY": "soon"})

    def test_unknown_tone(self):
        with pytest.raises(ValueError, match="Unknown tone 'pushy'"):
            AppConfig.from_env({"COLDCRAFT_DEFAULT_TONE": "pushy"})

    def test_reads_os_environ(self, monkeypatch):
        monkeypatch.setenv("COLDCRAFT_GENERATION_DELAY", "0")
        assert AppConfig.from_env().generation_delay_seconds == 0.0
