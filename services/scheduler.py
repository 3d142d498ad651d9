"""Background timer that polls the station while SCHEDULED is active."""

from __future__ import annotations

import logging
from functools import lru_cache
from threading import Event, Lock, Thread
from typing import Optional

from models.readings import Reading, StrategyName
from services.station import WeatherStation, build_default_station
from settings import get_settings

logger = logging.getLogger(__name__)


class ScheduledUpdater:
    """Fixed-delay trigger for the station.

    Each tick asks the station for a reading only when the updater is enabled
    and the active strategy is SCHEDULED. The next tick is scheduled
    ``interval_seconds`` after the previous one finished. Failures are logged
    and the timer keeps going.
    """

    def __init__(
        self,
        station: WeatherStation,
        interval_seconds: float = 30.0,
        initial_delay_seconds: float = 5.0,
        enabled: bool = True,
        strategy_name: str = StrategyName.scheduled.value,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive.")
        if initial_delay_seconds < 0:
            raise ValueError("initial_delay_seconds cannot be negative.")
        self.station = station
        self.interval_seconds = interval_seconds
        self.initial_delay_seconds = initial_delay_seconds
        self.strategy_name = strategy_name
        self._enabled = enabled
        self._stop = Event()
        self._thread: Optional[Thread] = None
        self._thread_lock = Lock()

    @property
    def enabled(self) -> bool:
        return self._enabled

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled
        logger.info("Scheduled updates %s", "enabled" if enabled else "disabled")

    @property
    def running(self) -> bool:
        thread = self._thread
        return thread is not None and thread.is_alive()

    def start(self) -> None:
        with self._thread_lock:
            if self.running:
                return
            self._stop.clear()
            self._thread = Thread(target=self._run, name="scheduled-updater", daemon=True)
            self._thread.start()

    def stop(self, timeout: Optional[float] = 5.0) -> None:
        with self._thread_lock:
            self._stop.set()
            thread = self._thread
            self._thread = None
        if thread is not None:
            thread.join(timeout=timeout)

    def run_once(self) -> Optional[Reading]:
        """Run a single tick; returns the reading when one was produced."""
        if not self._enabled:
            logger.debug("Scheduled tick skipped", extra={"reason": "disabled"})
            return None
        if not self.station.is_active(self.strategy_name):
            logger.debug(
                "Scheduled tick skipped",
                extra={"reason": "strategy inactive", "strategy": self.strategy_name},
            )
            return None
        logger.info("Scheduled batch update triggered", extra={"strategy": self.strategy_name})
        try:
            return self.station.trigger_update(None)
        except Exception as exc:  # noqa: BLE001 - the timer must survive any tick
            logger.exception("Scheduled update failed", extra={"reason": str(exc)})
            return None

    def _run(self) -> None:
        logger.info(
            "Scheduled updater started (interval=%ss, initial_delay=%ss)",
            self.interval_seconds,
            self.initial_delay_seconds,
        )
        if not self._stop.wait(self.initial_delay_seconds):
            while True:
                self.run_once()
                if self._stop.wait(self.interval_seconds):
                    break
        logger.info("Scheduled updater stopped")


@lru_cache
def build_default_updater() -> ScheduledUpdater:
    settings = get_settings()
    return ScheduledUpdater(
        station=build_default_station(),
        interval_seconds=settings.schedule_interval_seconds,
        initial_delay_seconds=settings.schedule_initial_delay_seconds,
        enabled=settings.schedule_enabled,
    )
