"""
Environment-driven settings.

Values are read once from the process environment (and a `.env` file when
present) and cached. Call `get_settings.cache_clear()` after changing the
environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import find_dotenv, load_dotenv

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    default_page_size: int = 100
    max_page_size: int = 1000
    strict_time_parsing: bool = False


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    return raw.lower() in _TRUTHY


def load_settings() -> Settings:
    # search from the working directory, not from this installed module
    load_dotenv(find_dotenv(usecwd=True))
    return Settings(
        default_page_size=_env_int("QUERYKIT_DEFAULT_PAGE_SIZE", Settings.default_page_size),
        max_page_size=_env_int("QUERYKIT_MAX_PAGE_SIZE", Settings.max_page_size),
        strict_time_parsing=_env_bool("QUERYKIT_STRICT_TIME_PARSING", Settings.strict_time_parsing),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()


__all__ = ["Settings", "load_settings", "get_settings"]
