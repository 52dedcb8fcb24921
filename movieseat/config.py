"""Application configuration settings."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "MovieSeat API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    HOST: str = "0.0.0.0"
    PORT: int = 4000

    # Storage
    STORAGE_BACKEND: Literal["json", "redis", "sql"] = "json"
    DATA_DIR: Path = Path("./data")
    CATALOG_FILE: str = "programs.json"
    LEDGER_FILE: str = "bookings.json"
    DATABASE_URL: str = "sqlite+aiosqlite:///./data/movieseat.db"

    # Redis
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_PASSWORD: str | None = None
    REDIS_DB: int = 0
    REDIS_KEY_PREFIX: str = "movieseat"

    # Booking engine
    LOCK_SCOPE: Literal["showing", "global"] = "showing"
    RECONCILE_ON_STARTUP: bool = True

    # Default catalog written on first startup
    SEED_PROGRAM_TITLE: str = "Avengers: Endgame"
    SEED_DURATION_MINUTES: int = 180
    SEED_SEAT_COUNT: int = 36
    SEED_SEAT_ROW: str = "A"

    @property
    def catalog_path(self) -> Path:
        """Get path of the JSON catalog file."""
        return self.DATA_DIR / self.CATALOG_FILE

    @property
    def ledger_path(self) -> Path:
        """Get path of the JSON ledger file."""
        return self.DATA_DIR / self.LEDGER_FILE

    @property
    def redis_url(self) -> str:
        """Get Redis URL."""
        if self.REDIS_PASSWORD:
            return f"redis://:{self.REDIS_PASSWORD}@{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"
        return f"redis://{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
