"""
Configuration module - centralized settings for the quality gate.
Uses pydantic-settings to load values from environment variables and .env file.
"""

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Quality gate settings loaded from environment variables.

    Pydantic-settings automatically:
    1. Reads from environment variables (highest priority)
    2. Falls back to .env file values
    3. Uses default values if neither exists

    To tune scoring in production, set environment variables:
        export SCORE_ERROR_WEIGHT=15
        export SCORE_WARNING_WEIGHT=3
    """

    # ---------------------------------------------------------------------------
    # PYDANTIC SETTINGS CONFIGURATION
    # ---------------------------------------------------------------------------
    model_config = SettingsConfigDict(
        env_file=".env",        # Load from .env file in project root
        env_file_encoding="utf-8",
        extra="ignore",         # Ignore extra env vars not defined here
    )

    # ---------------------------------------------------------------------------
    # APPLICATION SETTINGS
    # ---------------------------------------------------------------------------
    APP_NAME: str = "Codegate"

    # ENVIRONMENT: "development" or "production"
    # - production enables rules that only matter for shipped code (console.log)
    ENVIRONMENT: str = "development"

    # LOG_LEVEL: level for the structured gate logger
    LOG_LEVEL: str = "INFO"

    # ---------------------------------------------------------------------------
    # SCORING
    # ---------------------------------------------------------------------------
    # Points subtracted from 100 per error / warning.
    # Must stay non-negative, otherwise an extra issue could raise the score.
    SCORE_ERROR_WEIGHT: int = Field(default=10, ge=0)
    SCORE_WARNING_WEIGHT: int = Field(default=5, ge=0)

    # ---------------------------------------------------------------------------
    # RULE TUNING
    # ---------------------------------------------------------------------------
    # Inline <script> bodies longer than this are reported as a performance warning
    LARGE_INLINE_SCRIPT_CHARS: int = Field(default=5000, gt=0)

    # Substrings of src/class/id that mark an above-the-fold image.
    # These images are never lazy-loaded.
    HERO_IMAGE_MARKERS: List[str] = ["hero", "logo", "banner"]

    # ---------------------------------------------------------------------------
    # AUTO-FIX
    # ---------------------------------------------------------------------------
    # Value written to <html lang="..."> when the attribute is missing
    AUTOFIX_DEFAULT_LANG: str = "en"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"


# ---------------------------------------------------------------------------
# GLOBAL SETTINGS INSTANCE
# ---------------------------------------------------------------------------
# Usage: from codegate.core.config import settings
settings = Settings()
