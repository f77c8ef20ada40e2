"""Environment-driven settings for funky.

funky is a pure library, so the only things worth configuring are its
ambient concerns: how its (DEBUG-only) logs are rendered and which service
name they are tagged with.

Manifesto:
    - **Pydantic validation:** Type-checked when first read
    - **Environment-driven:** Reads ``FUNKY_*`` env vars and a ``.env`` file
    - **Quiet by default:** ``WARNING`` level, funky's own logs stay hidden

Examples:
    >>> from funky.core.settings import FunkySettings
    >>> FunkySettings(log_level="DEBUG").log_level
    'DEBUG'

Tags:
    settings, configuration, pydantic, environment, funky
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def normalize_log_level(value: str) -> str:
    """Upper-case ``value`` and check it names a standard log level."""
    level = value.upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"unknown log level: {value!r}")
    return level


class FunkySettings(BaseSettings):
    """Settings read from ``FUNKY_``-prefixed environment variables.

    Fields
    ──────
    log_level : Structlog log level (DEBUG, INFO, WARNING, ERROR)
    log_json  : JSON output; ``None`` auto-detects (JSON when stdout is not a tty)
    service   : Service name added to every log record
    """

    model_config = SettingsConfigDict(
        env_prefix="FUNKY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Observability ────────────────────────────────────────────
    log_level: str = "WARNING"
    log_json: bool | None = None
    service: str = Field(default="funky", min_length=1)

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        return normalize_log_level(value)


@lru_cache(maxsize=1)
def get_settings() -> FunkySettings:
    """Return the process-wide settings (cached; ``get_settings.cache_clear()`` resets)."""
    return FunkySettings()


__all__ = ["FunkySettings", "get_settings", "normalize_log_level"]
