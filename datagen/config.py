"""
Ambient settings for the batch-insert SQL generator.

Uses Pydantic Settings to load environment variables (or a local `.env`) that
control logging only. Nothing in here influences the generated SQL: the YAML
config passed on the command line is the single source of truth for output.
"""
from __future__ import annotations

from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Logging
    log_level: str = Field("WARNING", alias="DATAGEN_LOG_LEVEL")
    log_json: bool = Field(False, alias="DATAGEN_LOG_JSON")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
