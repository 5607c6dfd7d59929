"""
Configuration settings for kvpool.

Uses Pydantic Settings to load environment variables (and an optional `.env`
file) for the Redis connection descriptor, pool sizing, retry policy defaults
and logging.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Redis
    redis_url: str = Field("redis://localhost:6379/0", alias="REDIS_URL")
    redis_pool_max_connections: int = Field(10, ge=1, alias="REDIS_POOL_MAX_CONNECTIONS")
    redis_pool_timeout_seconds: float = Field(1.0, ge=0, alias="REDIS_POOL_TIMEOUT_SECONDS")

    # Retry policy
    retry_policy: Literal["fixed", "exponential_jittered"] = Field("fixed", alias="RETRY_POLICY")
    retry_attempts: int = Field(15, ge=1, alias="RETRY_ATTEMPTS")
    retry_delay_ms: int = Field(10, ge=0, alias="RETRY_DELAY_MS")

    # Application
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

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
