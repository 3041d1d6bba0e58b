"""
Engine configuration settings.
"""

import logging
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine settings."""

    # Logging
    LOG_LEVEL: str = "WARNING"

    # Data
    DATA_DIR: Path = Path(__file__).parent.parent / "data"

    # Base stats (unmodified player attributes)
    BASE_HEALTH: float = 100
    BASE_DAMAGE: float = 10
    BASE_SPEED: float = 200
    BASE_FIRE_RATE: float = 500  # ms between shots
    BASE_PROJECTILE_COUNT: int = 1
    BASE_BULLET_SPEED: float = 400
    BASE_BULLET_LIFETIME: float = 2000  # ms
    BASE_MAGNETIC_RANGE: float = 100
    BASE_EXPERIENCE_MULTIPLIER: float = 1.0

    model_config = SettingsConfigDict(env_prefix="GEAR_EFFECTS_", env_file=".env")


settings = Settings()


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Apply a log level to the package logger.

    Args:
        level: Level name. Defaults to settings.LOG_LEVEL.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger("gear_effects")
    logger.setLevel((level or settings.LOG_LEVEL).upper())
    return logger
