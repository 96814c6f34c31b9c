"""Runtime settings, read from environment variables (and .env via python-dotenv in app.py)."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from coldcraft.models import Tone

ENV_PREFIX = "COLDCRAFT_"


@dataclass
class AppConfig:
    """Configuration for the generator session and UI."""
    generation_delay_seconds: float = 2.0
    default_tone: Tone = Tone.PROFESSIONAL
    export_dir: Path = Path("exports")
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        """
        Build a config from COLDCRAFT_* variables, falling back to defaults.

        Raises:
            ValueError: If the delay is negative or not a number, or the tone is unknown.
        """
        env = os.environ if environ is None else environ
        defaults = cls()

        raw_delay = env.get(f"{ENV_PREFIX}GENERATION_DELAY", "")
        delay = float(raw_delay) if raw_delay.strip() else defaults.generation_delay_seconds
        if delay < 0:
            raise ValueError(f"{ENV_PREFIX}GENERATION_DELAY must be >= 0, got {delay}")

        raw_tone = env.get(f"{ENV_PREFIX}DEFAULT_TONE", "").strip().lower()
        try:
            tone = Tone(raw_tone) if raw_tone else defaults.default_tone
        except ValueError:
            valid = ", ".join(t.value for t in Tone)
            raise ValueError(f"Unknown tone '{raw_tone}' in {ENV_PREFIX}DEFAULT_TONE; valid tones: {valid}")

        raw_dir = env.get(f"{ENV_PREFIX}EXPORT_DIR", "").strip()
        export_dir = Path(raw_dir) if raw_dir else defaults.export_dir

        log_level = env.get(f"{ENV_PREFIX}LOG_LEVEL", "").strip().upper() or defaults.log_level

        return cls(
            generation_delay_seconds=delay,
            default_tone=tone,
            export_dir=export_dir,
            log_level=log_level,
        )
