"""Environment-driven settings for dbent.

Only logging is configurable: the value types and the derive decorators have
no tunables. Variables use the ``DBENT_`` prefix and may live in a ``.env``
file.

Examples:
    >>> import os
    >>> os.environ["DBENT_LOG_LEVEL"] = "DEBUG"
    >>> DbentSettings().log_level
    'DEBUG'
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DbentSettings(BaseSettings):
    """Settings read from ``DBENT_*`` environment variables.

    Fields
    ──────
    log_level    : Structlog log level
    log_json     : JSON output (True), console (False), auto-detect tty (unset)
    service_name : ``service.name`` attached to every log event
    """

    model_config = SettingsConfigDict(
        env_prefix="DBENT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"
    log_json: bool | None = None
    service_name: str = Field(default="dbent", min_length=1)

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {value!r}")
        return level
