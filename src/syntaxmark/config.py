"""Centralised configuration using pydantic-settings.

All environment variables are read through the Settings class.
Consumers call ``get_settings()`` to obtain a cached, validated instance.
Tests construct ``Settings(_env_file=None, ...)`` directly for isolation.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

_LEVEL_NAMES = frozenset(("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"))


# ---------------------------------------------------------------------------
# Sub-models (one per configuration domain)
# ---------------------------------------------------------------------------
class RenderConfig(BaseModel):
    """HTML rendering options."""

    line_number_width: int = Field(default=6, ge=1)
    line_number_color: str = "#000000"
    # Emitted at each line start when the scan ended inside an open region
    dangling_close_markup: str = "</font>"


class LogConfig(BaseModel):
    """Logging destination and verbosity."""

    level: str = "WARNING"
    file: Path | None = None

    @field_validator("level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LEVEL_NAMES:
            msg = f"unknown log level {value!r}; expected one of {sorted(_LEVEL_NAMES)}"
            raise ValueError(msg)
        return level


# ---------------------------------------------------------------------------
# Root settings
# ---------------------------------------------------------------------------
class Settings(BaseSettings):
    """Settings with automatic .env loading and type validation.

    Environment variables use the ``SYNTAXMARK_`` prefix and a
    double-underscore delimiter for nesting:
    ``SYNTAXMARK_RENDER__LINE_NUMBER_WIDTH``, ``SYNTAXMARK_LOG__LEVEL``, etc.
    """

    model_config = SettingsConfigDict(
        env_prefix="SYNTAXMARK_",
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
    )

    render: RenderConfig = RenderConfig()
    log: LogConfig = LogConfig()


# ---------------------------------------------------------------------------
# Singleton access
# ---------------------------------------------------------------------------
@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance.

    Call ``get_settings.cache_clear()`` in tests to reset.
    """
    settings = Settings()
    if Path(".env").is_file():
        logger.info("Settings loaded .env from: %s", Path(".env").absolute())
    return settings
