"""Configuration shared by every utility module."""
from functools import lru_cache
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RedisSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="COMMON_REDIS_",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = "localhost"
    port: int = 6379
    username: Optional[str] = None
    password: Optional[str] = None
    enable_tls: bool = False
    replica_host: Optional[str] = None
    fallback_on_empty: bool = False

    @field_validator("username", "password", "replica_host", mode="before")
    @classmethod
    def _blank_as_unset(cls, value: Optional[str]) -> Optional[str]:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def effective_replica_host(self) -> str:
        return self.replica_host or self.host


class LoggingSettings(BaseSettings):
    model_config = SettingsConfigDict(
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = "info"
    log_to_console: bool = True
    log_to_file: bool = False
    log_file: str = "app.log"


@lru_cache(maxsize=1)
def get_redis_settings() -> RedisSettings:
    return RedisSettings()


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    return LoggingSettings()


__all__ = [
    "RedisSettings",
    "LoggingSettings",
    "get_redis_settings",
    "get_logging_settings",
]
