"""Subscriber sinks and the registry that orders them."""

from __future__ import annotations

import logging
from typing import Dict, Iterator, Optional, Union

from models.readings import Reading, SubscriberKind
from services.errors import InvalidArgumentError

logger = logging.getLogger(__name__)


class Subscriber:
    """Receives readings and remembers the most recent one."""

    kind: SubscriberKind
    label: str

    def __init__(self, subscriber_id: str) -> None:
        self.subscriber_id = subscriber_id
        self.last_seen: Optional[Reading] = None

    def update(self, reading: Reading) -> None:
        self.last_seen = reading
        logger.info(
            "%s [%s] received update: %s",
            self.label,
            self.subscriber_id,
            reading.describe(),
            extra={"subscriber_id": self.subscriber_id, "subscriber_kind": self.kind.value},
        )

    def __repr__(self) -> str:
        return f"{self.label}(subscriber_id={self.subscriber_id!r})"


class PhoneDisplay(Subscriber):
    kind = SubscriberKind.phone
    label = "PhoneDisplay"


class WebAppDisplay(Subscriber):
    kind = SubscriberKind.webapp
    label = "WebAppDisplay"


class OutdoorDisplay(Subscriber):
    kind = SubscriberKind.outdoor
    label = "OutdoorDisplay"


_DISPLAYS: Dict[SubscriberKind, type[Subscriber]] = {
    SubscriberKind.phone: PhoneDisplay,
    SubscriberKind.webapp: WebAppDisplay,
    SubscriberKind.outdoor: OutdoorDisplay,
}


def parse_kind(kind: Union[SubscriberKind, str]) -> SubscriberKind:
    if isinstance(kind, SubscriberKind):
        return kind
    candidate = (kind or "").strip().upper()
    try:
        return SubscriberKind(candidate)
    except ValueError as exc:
        choices = ", ".join(member.value for member in SubscriberKind)
        raise InvalidArgumentError(f"Invalid subscriber type {kind!r}. Use: {choices}") from exc


def create_subscriber(kind: Union[SubscriberKind, str], subscriber_id: str) -> Subscriber:
    """Build the display for ``kind`` after validating the id."""
    identifier = (subscriber_id or "").strip()
    if not identifier:
        raise InvalidArgumentError("Subscriber id cannot be empty.")
    return _DISPLAYS[parse_kind(kind)](identifier)


class SubscriberRegistry:
    """Insertion-ordered subscribers keyed by id.

    Not synchronized on its own; the owning station serializes access.
    """

    def __init__(self) -> None:
        self._subscribers: Dict[str, Subscriber] = {}

    def add(self, subscriber: Subscriber) -> bool:
        if subscriber.subscriber_id in self._subscribers:
            return False
        self._subscribers[subscriber.subscriber_id] = subscriber
        return True

    def remove(self, subscriber_id: str) -> Optional[Subscriber]:
        return self._subscribers.pop(subscriber_id, None)

    def get(self, subscriber_id: str) -> Optional[Subscriber]:
        return self._subscribers.get(subscriber_id)

    def snapshot(self) -> tuple[Subscriber, ...]:
        return tuple(self._subscribers.values())

    def __contains__(self, subscriber_id: object) -> bool:
        return subscriber_id in self._subscribers

    def __iter__(self) -> Iterator[Subscriber]:
        return iter(self.snapshot())

    def __len__(self) -> int:
        return len(self._subscribers)
