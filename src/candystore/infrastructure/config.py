"""Application configuration using pydantic-settings.

Every setting is read from ``CANDYSTORE_*`` environment variables (or a
local ``.env`` file). Only the composition root and the entry points
call ``get_settings()``; everything else receives what it needs.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):

    model_config = SettingsConfigDict(
        env_prefix="CANDYSTORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    database_url: str = "sqlite:///./data/candystore.db"
    echo_sql: bool = False
    log_level: str = "INFO"
    low_stock_threshold: int = 10

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("low_stock_threshold")
    @classmethod
    def validate_threshold(cls, v: int) -> int:
        if v < 0:
            raise ValueError("low_stock_threshold must be non-negative")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
