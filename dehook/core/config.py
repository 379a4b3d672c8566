"""
Library configuration using Pydantic Settings.
"""

import logging
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class HookSettings(BaseSettings):
    """Settings read from DEHOOK_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="DEHOOK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="text", description="json or text")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {v}")
        return level

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        if v not in {"json", "text"}:
            raise ValueError("log_format must be 'json' or 'text'")
        return v

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level)


@lru_cache
def get_settings() -> HookSettings:
    """Get cached settings instance."""
    return HookSettings()
