"""Configuration settings for the workout parser."""
import os
from typing import Literal


EnvironmentType = Literal["development", "staging", "production"]


class Settings:
    """Application settings."""

    # Environment
    ENVIRONMENT: EnvironmentType = "development"
    LOG_LEVEL: str = "INFO"

    # Movement catalog
    MOVEMENT_CATALOG_URL: str | None = None
    MOVEMENT_CATALOG_API_KEY: str | None = None
    MOVEMENT_CATALOG_TIMEOUT: float = 10.0
    MOVEMENT_CATALOG_MAX_ATTEMPTS: int = 3

    def __init__(self):
        # Environment
        env = os.getenv("ENVIRONMENT", "development").lower()
        if env in ("development", "staging", "production"):
            self.ENVIRONMENT = env  # type: ignore
        else:
            self.ENVIRONMENT = "development"

        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

        # Movement catalog
        self.MOVEMENT_CATALOG_URL = os.getenv("MOVEMENT_CATALOG_URL")
        self.MOVEMENT_CATALOG_API_KEY = os.getenv("MOVEMENT_CATALOG_API_KEY")
        self.MOVEMENT_CATALOG_TIMEOUT = _env_float("MOVEMENT_CATALOG_TIMEOUT", 10.0)
        self.MOVEMENT_CATALOG_MAX_ATTEMPTS = max(1, _env_int("MOVEMENT_CATALOG_MAX_ATTEMPTS", 3))


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, default))
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, default))
    except ValueError:
        return default


settings = Settings()
