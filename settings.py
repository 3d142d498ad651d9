from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


_DEFAULT_STRATEGY_ENV = "WEATHER_DEFAULT_STRATEGY"
_SCHEDULE_ENABLED_ENV = "WEATHER_SCHEDULE_ENABLED"
_SCHEDULE_INTERVAL_ENV = "WEATHER_SCHEDULE_INTERVAL_SECONDS"
_SCHEDULE_DELAY_ENV = "WEATHER_SCHEDULE_INITIAL_DELAY_SECONDS"
_INTERACTIVE_CONSOLE_ENV = "WEATHER_INTERACTIVE_CONSOLE"
_LOG_LEVEL_ENV = "LOG_LEVEL"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    default_strategy: Optional[str]
    schedule_enabled: bool
    schedule_interval_seconds: float
    schedule_initial_delay_seconds: float
    interactive_console: bool
    log_level: str


def _read_optional_env(name: str, default: Optional[str]) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or None


def _read_bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip().lower()
    if candidate in _TRUE_VALUES:
        return True
    if candidate in _FALSE_VALUES:
        return False
    return default


def _read_seconds(name: str, default: float, allow_zero: bool = False) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = float(candidate)
    except ValueError:
        return default
    if parsed > 0 or (allow_zero and parsed == 0):
        return parsed
    return default


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        default_strategy=_read_optional_env(_DEFAULT_STRATEGY_ENV, None),
        schedule_enabled=_read_bool_env(_SCHEDULE_ENABLED_ENV, True),
        schedule_interval_seconds=_read_seconds(_SCHEDULE_INTERVAL_ENV, 30.0),
        schedule_initial_delay_seconds=_read_seconds(_SCHEDULE_DELAY_ENV, 5.0, allow_zero=True),
        interactive_console=_read_bool_env(_INTERACTIVE_CONSOLE_ENV, False),
        log_level=_read_log_level("INFO"),
    )
