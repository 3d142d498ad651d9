"""Interactive text menu driving the station in-process."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from threading import Thread
from typing import Callable, Optional

import typer

from models.readings import Reading, StrategyName, SubscriberKind
from services.errors import StationError, StrategyNotFoundError
from services.scheduler import ScheduledUpdater
from services.station import WeatherStation

logger = logging.getLogger(__name__)

Prompt = Callable[[str], str]
Echo = Callable[[str], None]

_MENU = (
    "",
    "--- Menu ---",
    "1. Set Update Strategy",
    "2. Trigger Poll Update",
    "3. Manual Weather Update",
    "4. Subscribe Observer",
    "5. Unsubscribe Observer",
    "6. Show Status",
    "7. Exit Menu",
)
_EXIT_CHOICES = {"7", "q", "quit", "exit"}
_KIND_CHOICES = {
    "1": SubscriberKind.phone,
    "2": SubscriberKind.webapp,
    "3": SubscriberKind.outdoor,
}
_MANUAL = StrategyName.manual.value


def _typer_prompt(text: str) -> str:
    return typer.prompt(text, default="", show_default=False)


class InteractiveMenu:
    """Numbered menu over the public station operations.

    ``prompt`` and ``echo`` default to Typer so the loop can run on a
    terminal; tests inject scripted callables instead.
    """

    def __init__(
        self,
        station: WeatherStation,
        updater: Optional[ScheduledUpdater] = None,
        prompt: Prompt = _typer_prompt,
        echo: Echo = typer.echo,
    ) -> None:
        self.station = station
        self.updater = updater
        self._prompt = prompt
        self._echo = echo
        self._thread: Optional[Thread] = None

    def start_in_thread(self) -> Thread:
        """Run the loop on a daemon thread so the service is never blocked."""
        self._thread = Thread(target=self.run, name="interactive-menu", daemon=True)
        self._thread.start()
        return self._thread

    def run(self) -> None:
        self._echo("\n=== Weather Station Menu ===")
        actions = {
            "1": self.set_strategy,
            "2": self.trigger_poll,
            "3": self.manual_update,
            "4": self.subscribe,
            "5": self.unsubscribe,
            "6": self.show_status,
        }
        while True:
            for line in _MENU:
                self._echo(line)
            try:
                choice = self._prompt("Select option").strip().lower()
            except (EOFError, typer.Abort):
                break
            if choice in _EXIT_CHOICES:
                self._echo("Exiting menu. The service keeps running.")
                break
            action = actions.get(choice)
            if action is None:
                self._echo("Invalid option. Please try again.")
                continue
            try:
                action()
            except (EOFError, typer.Abort):
                break
            except StationError as exc:
                self._echo(f"Error: {exc}")
        logger.info("Interactive menu closed")

    def set_strategy(self) -> None:
        names = [strategy.name for strategy in self.station.available_strategies()]
        self._echo("Available strategies:")
        for name in names:
            self._echo(f"  - {name}")
        name = self._prompt("Enter strategy name")
        try:
            strategy = self.station.select_strategy(name)
        except StrategyNotFoundError:
            self._echo(f"Error: Unknown strategy: {name.strip().upper()}")
            return
        self._echo(f"Strategy set to: {strategy.name}")

    def trigger_poll(self) -> None:
        if self.station.is_active(_MANUAL):
            self._echo("Error: Cannot poll with MANUAL strategy. Use Manual Weather Update instead.")
            return
        reading = self.station.trigger_update(None)
        self._echo("Poll successful:")
        self._echo_reading(reading)

    def manual_update(self) -> None:
        if not self.station.is_active(_MANUAL):
            self._echo("Error: Current strategy is not MANUAL. Set strategy to MANUAL first.")
            return
        try:
            temperature = float(self._prompt("Temperature (°C)").strip())
            humidity = float(self._prompt("Humidity (%)").strip())
            wind = float(self._prompt("Wind (kph)").strip())
        except ValueError:
            self._echo("Error: Invalid number format")
            return
        reading = self.station.trigger_update(
            Reading(
                temperature_celsius=temperature,
                humidity_percent=humidity,
                wind_kph=wind,
                observed_at=datetime.now(timezone.utc),
            ),
            expected_strategy=_MANUAL,
        )
        self._echo("Manual update successful:")
        self._echo_reading(reading)

    def subscribe(self) -> None:
        self._echo("Observer types:")
        self._echo("  1. Phone")
        self._echo("  2. WebApp")
        self._echo("  3. Outdoor")
        kind = _KIND_CHOICES.get(self._prompt("Select type (1-3)").strip())
        subscriber_id = self._prompt("Enter observer ID").strip()
        if not subscriber_id:
            self._echo("Error: ID cannot be empty")
            return
        if kind is None:
            self._echo("Error: Invalid type selection")
            return
        label = f"{kind.value.lower()}/{subscriber_id}"
        if self.station.subscribe(kind, subscriber_id):
            self._echo(f"Observer subscribed: {label}")
        else:
            self._echo(f"Observer already exists: {label}")

    def unsubscribe(self) -> None:
        subscriber_id = self._prompt("Enter observer ID to unsubscribe").strip()
        if not subscriber_id:
            self._echo("Error: ID cannot be empty")
            return
        if self.station.unsubscribe(subscriber_id):
            self._echo(f"Observer unsubscribed: {subscriber_id}")
        else:
            self._echo(f"Observer not found: {subscriber_id}")

    def show_status(self) -> None:
        current = self.station.current_strategy()
        names = ", ".join(strategy.name for strategy in self.station.available_strategies())
        self._echo("--- Current Status ---")
        self._echo(f"Current Strategy: {current.name if current else '(none)'}")
        self._echo(f"Available Strategies: {names}")
        if self.updater is not None:
            state = "enabled" if self.updater.enabled else "disabled"
            self._echo(f"Scheduled Updates: {state} (every {self.updater.interval_seconds:g}s)")

        reading = self.station.last_reading()
        if reading is None:
            self._echo("Last Weather Data: (none)")
        else:
            self._echo("Last Weather Data:")
            self._echo_reading(reading)

        subscribers = self.station.list_subscribers()
        self._echo(f"Subscribed Observers: {len(subscribers)}")
        for subscriber in subscribers:
            self._echo(f"  - {subscriber.subscriber_id} ({subscriber.label})")

    def _echo_reading(self, reading: Reading) -> None:
        self._echo(f"  Temperature: {reading.temperature_celsius:.1f}°C")
        self._echo(f"  Humidity: {reading.humidity_percent:.1f}%")
        self._echo(f"  Wind: {reading.wind_kph:.1f} kph")
        self._echo(f"  Observed At: {reading.observed_at.isoformat()}")
