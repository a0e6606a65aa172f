"""shapeguard configuration management."""

import logging
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_prefix="SHAPEGUARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Entity store used by Entity.find / Entity.save
    store_backend: Literal["memory", "sqlite"] = "memory"
    database_url: str = "sqlite+aiosqlite:///./shapeguard.db"

    # Level for the "shapeguard" logger; None leaves it to the application
    log_level: str | None = None

    @property
    def database_path(self) -> str:
        """Filesystem path portion of an sqlite URL."""
        if self.database_url.startswith("sqlite"):
            return self.database_url.split("///")[-1]
        return "./shapeguard.db"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(settings: Settings | None = None) -> None:
    """Apply ``log_level`` to the package logger, if one is configured."""
    settings = settings or get_settings()
    if settings.log_level:
        logging.getLogger("shapeguard").setLevel(settings.log_level.upper())
