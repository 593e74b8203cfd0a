"""
config.py - Environment configuration for the API and the constraint engine.

Every variable is read with the PRINTZONE_ prefix.
"""

import os
from functools import lru_cache
from pathlib import Path

from printzone.constraints.tuning import (
    CURVE_SAFETY,
    CURVE_SAMPLE_STEP,
    CURVE_TEXT_MARGIN_RATIO,
    MIN_ELEMENT_SIZE,
    ROTATION_SAFETY,
    TRANSLATION_SAFETY,
    ConstraintTuning,
)

ENV_PREFIX = "PRINTZONE_"


# Load .env file if it exists
def _load_dotenv():
    env_path = Path(__file__).parent.parent.parent / ".env"
    if env_path.exists():
        with open(env_path) as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, value = line.split("=", 1)
                    key = key.strip()
                    value = value.strip()
                    if key and value and key not in os.environ:
                        os.environ[key] = value

_load_dotenv()


def _env(name: str, default: str) -> str:
    return os.environ.get(ENV_PREFIX + name, default)


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        self.app_name: str = "printzone"
        self.app_version: str = "0.1.0"

        # Server settings
        self.host: str = _env("HOST", "0.0.0.0")
        self.port: int = int(_env("PORT", "8000"))
        self.debug: bool = _env("DEBUG", "false").lower() == "true"
        self.log_level: str = _env("LOG_LEVEL", "INFO").upper()
        self.api_prefix: str = _env("API_PREFIX", "/api/v1")

        # CORS settings
        self.cors_origins: list = _env(
            "CORS_ORIGINS",
            "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000,http://127.0.0.1:5173"
        ).split(",")

        # Constraint tuning
        self.translation_safety: float = float(_env("TRANSLATION_SAFETY", str(TRANSLATION_SAFETY)))
        self.rotation_safety: float = float(_env("ROTATION_SAFETY", str(ROTATION_SAFETY)))
        self.curve_safety: float = float(_env("CURVE_SAFETY", str(CURVE_SAFETY)))
        self.min_element_size: float = float(_env("MIN_ELEMENT_SIZE", str(MIN_ELEMENT_SIZE)))
        self.curve_sample_step: float = float(_env("CURVE_SAMPLE_STEP", str(CURVE_SAMPLE_STEP)))
        self.curve_text_margin_ratio: float = float(
            _env("CURVE_TEXT_MARGIN_RATIO", str(CURVE_TEXT_MARGIN_RATIO))
        )

    def tuning(self) -> ConstraintTuning:
        """Constraint parameters with any environment overrides applied."""
        return ConstraintTuning(
            translation_safety=self.translation_safety,
            rotation_safety=self.rotation_safety,
            curve_safety=self.curve_safety,
            min_element_size=self.min_element_size,
            curve_sample_step=self.curve_sample_step,
            curve_text_margin_ratio=self.curve_text_margin_ratio,
        )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
