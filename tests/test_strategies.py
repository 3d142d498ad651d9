"""Unit tests for the reading generation strategies."""

from __future__ import annotations

import random
from datetime import datetime, timezone

import pytest

from models.readings import Reading
from services.errors import InvalidArgumentError
from services.strategies import (
    ManualInputStrategy,
    RealTimeSensorStrategy,
    ScheduledBatchStrategy,
    build_default_strategies,
)


def _reading(temperature: float = 21.5) -> Reading:
    return Reading(
        temperature_celsius=temperature,
        humidity_percent=45.0,
        wind_kph=12.0,
        observed_at=datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc),
    )


def test_manual_strategy_requires_input() -> None:
    with pytest.raises(InvalidArgumentError):
        ManualInputStrategy().update(None)


def test_manual_strategy_rejects_non_reading_input() -> None:
    with pytest.raises(InvalidArgumentError):
        ManualInputStrategy().update({"temperatureCelsius": 1.0})  # type: ignore[arg-type]


def test_manual_strategy_returns_same_object() -> None:
    reading = _reading(temperature=99.0)

    result = ManualInputStrategy().update(reading)

    assert result is reading
    assert result.observed_at == datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    ("strategy_cls", "temperature", "humidity", "wind"),
    [
        (RealTimeSensorStrategy, (-10.0, 40.0), (10.0, 100.0), (0.0, 60.0)),
        (ScheduledBatchStrategy, (-5.0, 35.0), (20.0, 90.0), (0.0, 40.0)),
    ],
)
def test_generated_readings_stay_within_ranges(strategy_cls, temperature, humidity, wind) -> None:
    strategy = strategy_cls(rng=random.Random(1234))

    previous: datetime | None = None
    for _ in range(500):
        reading = strategy.update(None)
        assert temperature[0] <= reading.temperature_celsius <= temperature[1]
        assert humidity[0] <= reading.humidity_percent <= humidity[1]
        assert wind[0] <= reading.wind_kph <= wind[1]
        assert reading.observed_at.tzinfo is not None
        if previous is not None:
            assert reading.observed_at >= previous
        previous = reading.observed_at


def test_generated_strategies_ignore_manual_input() -> None:
    supplied = _reading(temperature=500.0)

    result = RealTimeSensorStrategy(rng=random.Random(7)).update(supplied)

    assert result is not supplied
    assert result.temperature_celsius <= 40.0


def test_generated_strategy_uses_injected_clock() -> None:
    fixed = datetime(2030, 6, 1, tzinfo=timezone.utc)

    reading = ScheduledBatchStrategy(clock=lambda: fixed).update()

    assert reading.observed_at == fixed


def test_default_strategies_are_ordered_manual_first() -> None:
    names = [strategy.name for strategy in build_default_strategies()]

    assert names == ["MANUAL", "REALTIME", "SCHEDULED"]
