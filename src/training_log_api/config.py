"""Configuration settings for the training log API."""
import logging
import os
from typing import List, Literal


EnvironmentType = Literal["development", "staging", "production"]

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings:
    """Application settings."""

    # Environment
    ENVIRONMENT: EnvironmentType = "development"
    LOG_LEVEL: str = "INFO"

    # Limits
    MAX_DOCUMENT_LENGTH: int = 500_000
    STATS_CACHE_TTL_SECONDS: float = 30.0

    # HTTP
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:3001"]

    def __init__(self):
        # Environment
        env = os.getenv("ENVIRONMENT", "development").lower()
        if env in ("development", "staging", "production"):
            self.ENVIRONMENT = env  # type: ignore
        else:
            self.ENVIRONMENT = "development"

        level = os.getenv("LOG_LEVEL", "INFO").upper()
        if level in VALID_LOG_LEVELS:
            self.LOG_LEVEL = level
        else:
            logging.getLogger(__name__).warning(
                f"Invalid LOG_LEVEL '{level}'. Valid levels are: {', '.join(VALID_LOG_LEVELS)}. Defaulting to INFO."
            )
            self.LOG_LEVEL = "INFO"

        # Limits
        self.MAX_DOCUMENT_LENGTH = _env_number("MAX_DOCUMENT_LENGTH", 500_000, int)
        self.STATS_CACHE_TTL_SECONDS = _env_number("STATS_CACHE_TTL_SECONDS", 30.0, float)

        # HTTP
        origins = os.getenv("CORS_ORIGINS")
        if origins:
            self.CORS_ORIGINS = [o.strip() for o in origins.split(",") if o.strip()]
        else:
            self.CORS_ORIGINS = list(Settings.CORS_ORIGINS)


def _env_number(name: str, default, cast):
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return cast(raw)
    except ValueError:
        return default


settings = Settings()
