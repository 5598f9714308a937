"""Client configuration loaded from environment variables."""

from functools import lru_cache
from typing import Any, Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """All settings are read from environment variables (case-insensitive)."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ── InfluxDB ──────────────────────────────────────────────────────────────
    influx_url: str = "http://localhost:8086"
    influx_database: str = "test"
    # Leave the username empty to send requests without ``u`` / ``p``.
    influx_username: str = ""
    influx_password: str = ""
    influx_timeout: float = 10.0

    # ── Logging ───────────────────────────────────────────────────────────────
    log_level: LogLevel = "INFO"

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
