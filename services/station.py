"""The weather station: active strategy, last reading and subscribers."""

from __future__ import annotations

import logging
from functools import lru_cache
from threading import Lock
from typing import Iterable, Optional, Sequence, Union

from models.readings import Reading, SubscriberKind
from services.errors import (
    IllegalStateError,
    InvalidArgumentError,
    NotFoundError,
    StrategyNotFoundError,
)
from services.strategies import UpdateStrategy, build_default_strategies
from services.subscribers import Subscriber, SubscriberRegistry, create_subscriber
from settings import get_settings

logger = logging.getLogger(__name__)


class WeatherStation:
    """Coordinates strategy selection, reading production and fan-out.

    A single lock guards the active strategy, the last reading and the
    registry. Strategies run outside the lock and subscribers are notified
    after it is released, against the snapshot taken when the reading was
    committed.
    """

    def __init__(self, strategies: Iterable[UpdateStrategy]) -> None:
        available = tuple(strategy for strategy in strategies if strategy is not None)
        if not available:
            raise IllegalStateError("At least one update strategy is required.")
        self._strategies = available
        self._strategy: Optional[UpdateStrategy] = available[0]
        self._last_reading: Optional[Reading] = None
        self._registry = SubscriberRegistry()
        self._lock = Lock()

    # Strategies ---------------------------------------------------------
    def available_strategies(self) -> tuple[UpdateStrategy, ...]:
        return self._strategies

    def strategy_named(self, name: str) -> UpdateStrategy:
        """Case-insensitive lookup among the strategies given at construction."""
        candidate = (name or "").strip().upper()
        if not candidate:
            raise InvalidArgumentError("Strategy name cannot be empty.")
        for strategy in self._strategies:
            if strategy.name.upper() == candidate:
                return strategy
        raise StrategyNotFoundError(
            name, tuple(strategy.name for strategy in self._strategies)
        )

    def set_strategy(self, strategy: Optional[UpdateStrategy]) -> None:
        if strategy is None:
            raise InvalidArgumentError("Strategy cannot be None.")
        with self._lock:
            previous = self._strategy
            self._strategy = strategy
        logger.info(
            "Update strategy switched from %s to %s",
            previous.name if previous else None,
            strategy.name,
            extra={"strategy": strategy.name},
        )

    def select_strategy(self, name: str) -> UpdateStrategy:
        strategy = self.strategy_named(name)
        self.set_strategy(strategy)
        return strategy

    def current_strategy(self) -> Optional[UpdateStrategy]:
        with self._lock:
            return self._strategy

    def is_active(self, name: str) -> bool:
        current = self.current_strategy()
        return current is not None and current.name.upper() == name.upper()

    # Subscribers --------------------------------------------------------
    def subscribe(self, kind: Union[SubscriberKind, str], subscriber_id: str) -> bool:
        """Register a display; returns False when the id is already taken."""
        return self.attach(create_subscriber(kind, subscriber_id))

    def attach(self, subscriber: Subscriber) -> bool:
        with self._lock:
            if not self._registry.add(subscriber):
                logger.info(
                    "Subscriber id already registered",
                    extra={"subscriber_id": subscriber.subscriber_id, "reason": "duplicate"},
                )
                return False
            catch_up = self._last_reading
            logger.info(
                "Subscriber registered",
                extra={
                    "subscriber_id": subscriber.subscriber_id,
                    "subscriber_kind": subscriber.kind.value,
                    "subscriber_count": len(self._registry),
                },
            )
        if catch_up is not None:
            self._deliver(subscriber, catch_up)
        return True

    def unsubscribe(self, subscriber_id: str) -> bool:
        with self._lock:
            removed = self._registry.remove(subscriber_id)
            remaining = len(self._registry)
        if removed is None:
            return False
        logger.info(
            "Subscriber removed",
            extra={"subscriber_id": subscriber_id, "subscriber_count": remaining},
        )
        return True

    def list_subscribers(self) -> tuple[Subscriber, ...]:
        with self._lock:
            return self._registry.snapshot()

    def get_subscriber(self, subscriber_id: str) -> Subscriber:
        with self._lock:
            subscriber = self._registry.get(subscriber_id)
        if subscriber is None:
            raise NotFoundError(f"Subscriber {subscriber_id!r} not found.")
        return subscriber

    # Readings -----------------------------------------------------------
    def last_reading(self) -> Optional[Reading]:
        with self._lock:
            return self._last_reading

    def trigger_update(
        self,
        manual_input: Optional[Reading] = None,
        expected_strategy: Optional[str] = None,
    ) -> Reading:
        """Produce a reading with the active strategy and fan it out.

        When ``expected_strategy`` is given, the update is refused unless that
        strategy is the one captured at entry. Strategy errors propagate
        unchanged and leave the station untouched.
        """
        with self._lock:
            strategy = self._strategy
        if strategy is None:
            raise IllegalStateError("No update strategy has been set.")
        if expected_strategy is not None and strategy.name.upper() != expected_strategy.upper():
            raise InvalidArgumentError(
                f"Current strategy is {strategy.name}, not {expected_strategy.upper()}."
            )

        reading = strategy.update(manual_input)

        with self._lock:
            self._last_reading = reading
            audience = self._registry.snapshot()

        logger.info(
            "Reading committed, notifying %d subscriber(s)",
            len(audience),
            extra={
                "strategy": strategy.name,
                "subscriber_count": len(audience),
                "temperature_c": round(reading.temperature_celsius, 1),
                "humidity_pct": round(reading.humidity_percent, 1),
                "wind_kph": round(reading.wind_kph, 1),
            },
        )
        self._fan_out(reading, audience)
        return reading

    def _fan_out(self, reading: Reading, audience: Sequence[Subscriber]) -> None:
        for subscriber in audience:
            self._deliver(subscriber, reading)

    @staticmethod
    def _deliver(subscriber: Subscriber, reading: Reading) -> None:
        try:
            subscriber.update(reading)
        except Exception as exc:  # noqa: BLE001 - one sink must not break the round
            logger.exception(
                "Subscriber failed to process reading",
                extra={"subscriber_id": subscriber.subscriber_id, "reason": str(exc)},
            )


@lru_cache
def build_default_station() -> WeatherStation:
    """Factory that wires the station with the built-in strategies."""
    settings = get_settings()
    station = WeatherStation(build_default_strategies())
    if settings.default_strategy:
        station.select_strategy(settings.default_strategy)
    return station
