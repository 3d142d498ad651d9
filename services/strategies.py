"""Reading generation strategies."""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Callable, List, Optional

from models.readings import Reading, StrategyName
from services.errors import InvalidArgumentError

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class UpdateStrategy(ABC):
    """Produces a reading, optionally from externally supplied data."""

    name: str

    @abstractmethod
    def update(self, manual_input: Optional[Reading] = None) -> Reading:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class ManualInputStrategy(UpdateStrategy):
    """Passes operator-entered readings through untouched."""

    name = StrategyName.manual.value

    def update(self, manual_input: Optional[Reading] = None) -> Reading:
        if manual_input is None:
            raise InvalidArgumentError("Manual strategy requires a reading to be supplied.")
        if not isinstance(manual_input, Reading):
            raise InvalidArgumentError(
                f"Manual strategy expects a Reading, got {type(manual_input).__name__}."
            )
        return manual_input


class _RandomizedStrategy(UpdateStrategy):
    """Draws each field uniformly from a fixed range.

    Subclasses only declare their ranges. Calls share no state beyond the
    random source, so concurrent use from several threads is safe.
    """

    temperature_range: tuple[float, float]
    humidity_range: tuple[float, float]
    wind_range: tuple[float, float]

    def __init__(self, rng: Optional[random.Random] = None, clock: Clock = utc_now) -> None:
        self._rng = rng or random.Random()
        self._clock = clock

    def update(self, manual_input: Optional[Reading] = None) -> Reading:
        return Reading(
            temperature_celsius=self._rng.uniform(*self.temperature_range),
            humidity_percent=self._rng.uniform(*self.humidity_range),
            wind_kph=self._rng.uniform(*self.wind_range),
            observed_at=self._clock(),
        )


class RealTimeSensorStrategy(_RandomizedStrategy):
    name = StrategyName.realtime.value
    temperature_range = (-10.0, 40.0)
    humidity_range = (10.0, 100.0)
    wind_range = (0.0, 60.0)


class ScheduledBatchStrategy(_RandomizedStrategy):
    # Coarser, calmer profile than the real-time sensor.
    name = StrategyName.scheduled.value
    temperature_range = (-5.0, 35.0)
    humidity_range = (20.0, 90.0)
    wind_range = (0.0, 40.0)


def build_default_strategies() -> List[UpdateStrategy]:
    """Return one instance of every built-in strategy, manual first."""
    return [ManualInputStrategy(), RealTimeSensorStrategy(), ScheduledBatchStrategy()]
