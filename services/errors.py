"""Exceptions raised by the weather station core."""

from __future__ import annotations


class StationError(Exception):
    """Base class for weather station failures."""


class InvalidArgumentError(StationError, ValueError):
    """Required input is missing or malformed."""


class NotFoundError(StationError, LookupError):
    """The referenced subscriber or strategy does not exist."""


class StrategyNotFoundError(NotFoundError):
    def __init__(self, name: str, available: tuple[str, ...]) -> None:
        super().__init__(f"Unknown strategy: {name}")
        self.name = name
        self.available = available


class IllegalStateError(StationError, RuntimeError):
    """The station is in a state that construction should have ruled out."""
