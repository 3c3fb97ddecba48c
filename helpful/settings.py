"""Runtime configuration read from ``HELPFUL_*`` environment variables."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["Settings", "get_settings"]

_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_OFF = {"", "0", "false", "off", "no"}

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Toggles for backtrace capture, span filtering and log verbosity."""

    backtrace: bool = Field(
        default=False,
        description=(
            "Capture a raw interpreter backtrace whenever an Error is constructed. "
            "Unset, `0` and `false` mean off; any other value (`1`, `full`, ...) means on."
        ),
    )
    span_level: str = Field(
        default="INFO",
        description="Spans below this level are not recorded in the call history.",
    )
    log_level: str = Field(default="INFO", description="Level of the helpful logger.")

    model_config = SettingsConfigDict(env_prefix="HELPFUL_")

    @field_validator("backtrace", mode="before")
    @classmethod
    def _lenient_toggle(cls, value: Any) -> bool:
        if value is None or isinstance(value, bool):
            return bool(value)
        return str(value).strip().lower() not in _OFF

    @field_validator("span_level", "log_level", mode="before")
    @classmethod
    def _known_level(cls, value: Any) -> str:
        upper = str(value).strip().upper()
        if upper not in _LEVELS:
            logger.warning("unknown level %r, using INFO (expected one of %s)", value, ", ".join(_LEVELS))
            return "INFO"
        return upper


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the cached settings instance.

    The environment is read once per process; tests override values by
    clearing the cache with ``get_settings.cache_clear()``.
    """

    return Settings()
