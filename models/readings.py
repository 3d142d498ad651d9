"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class StrategyName(str, Enum):
    """Names of the built-in reading generation strategies."""

    manual = "MANUAL"
    realtime = "REALTIME"
    scheduled = "SCHEDULED"


class SubscriberKind(str, Enum):
    """Display families a subscriber can belong to."""

    phone = "PHONE"
    webapp = "WEBAPP"
    outdoor = "OUTDOOR"


@dataclass(frozen=True, slots=True)
class Reading:
    """A single weather sample and the moment it was captured.

    No range checks are applied here: generated readings stay within their
    strategy's bounds and manual readings are taken as entered.
    """

    temperature_celsius: float
    humidity_percent: float
    wind_kph: float
    observed_at: datetime

    def describe(self) -> str:
        return (
            f"{self.temperature_celsius:.1f}°C, {self.humidity_percent:.1f}% humidity, "
            f"{self.wind_kph:.1f} kph wind"
        )
