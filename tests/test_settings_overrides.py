from __future__ import annotations

import logging

import pytest

from logging_config import ContextualFormatter
from settings import get_settings


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults(monkeypatch) -> None:
    for name in (
        "WEATHER_DEFAULT_STRATEGY",
        "WEATHER_SCHEDULE_ENABLED",
        "WEATHER_SCHEDULE_INTERVAL_SECONDS",
        "WEATHER_SCHEDULE_INITIAL_DELAY_SECONDS",
        "WEATHER_INTERACTIVE_CONSOLE",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = get_settings()

    assert settings.default_strategy is None
    assert settings.schedule_enabled is True
    assert settings.schedule_interval_seconds == 30.0
    assert settings.schedule_initial_delay_seconds == 5.0
    assert settings.interactive_console is False
    assert settings.log_level == "INFO"


def test_environment_overrides_apply(monkeypatch) -> None:
    monkeypatch.setenv("WEATHER_DEFAULT_STRATEGY", " realtime ")
    monkeypatch.setenv("WEATHER_SCHEDULE_ENABLED", "No")
    monkeypatch.setenv("WEATHER_SCHEDULE_INTERVAL_SECONDS", "2.5")
    monkeypatch.setenv("WEATHER_SCHEDULE_INITIAL_DELAY_SECONDS", "0")
    monkeypatch.setenv("WEATHER_INTERACTIVE_CONSOLE", "yes")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = get_settings()

    assert settings.default_strategy == "realtime"
    assert settings.schedule_enabled is False
    assert settings.schedule_interval_seconds == 2.5
    assert settings.schedule_initial_delay_seconds == 0.0
    assert settings.interactive_console is True
    assert settings.log_level == "DEBUG"


def test_invalid_values_fall_back_to_defaults(monkeypatch) -> None:
    monkeypatch.setenv("WEATHER_DEFAULT_STRATEGY", "   ")
    monkeypatch.setenv("WEATHER_SCHEDULE_ENABLED", "maybe")
    monkeypatch.setenv("WEATHER_SCHEDULE_INTERVAL_SECONDS", "0")
    monkeypatch.setenv("WEATHER_SCHEDULE_INITIAL_DELAY_SECONDS", "-3")

    settings = get_settings()

    assert settings.default_strategy is None
    assert settings.schedule_enabled is True
    assert settings.schedule_interval_seconds == 30.0
    assert settings.schedule_initial_delay_seconds == 5.0


def test_contextual_formatter_appends_known_extras() -> None:
    formatter = ContextualFormatter(fmt="%(message)s")
    record = logging.LogRecord("test", logging.INFO, __file__, 1, "Reading committed", None, None)
    record.strategy = "REALTIME"
    record.subscriber_count = 3
    record.unrelated = "ignored"

    assert formatter.format(record) == "Reading committed | strategy=REALTIME subscriber_count=3"
