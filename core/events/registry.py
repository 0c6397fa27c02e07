"""
ChainTrace Event Bus — Subscriber Registry
============================================
Who hears about committed participants, products and transfers.

When built with the set of published event types, subscribing to any
other type fails at wiring time instead of silently never firing.
"""

import logging
from threading import Lock
from typing import Callable, Iterable

from core.events.errors import DuplicateSubscriberError, UnknownEventType

logger = logging.getLogger("chaintrace.events")

Subscriber = tuple[Callable, str]


class SubscriberRegistry:

    def __init__(self, event_types: Iterable[str] = ()):
        self._event_types = frozenset(event_types)
        self._subscribers: dict[str, tuple[Subscriber, ...]] = {}
        self._lock = Lock()

    def subscribe(self, event_type: str, handler: Callable, name: str) -> None:
        """
        Raises:
            UnknownEventType:         event_type is not published
            DuplicateSubscriberError: handler already subscribed
        """
        if self._event_types and event_type not in self._event_types:
            raise UnknownEventType(event_type)
        if not callable(handler):
            raise TypeError(f"Subscriber '{name}' is not callable.")

        with self._lock:
            current = self._subscribers.get(event_type, ())
            if any(existing == handler for existing, _ in current):
                raise DuplicateSubscriberError(event_type, name)
            self._subscribers[event_type] = current + ((handler, name),)

        logger.info(f"{name} subscribed to {event_type}")

    def subscribers_for(self, event_type: str) -> tuple[Subscriber, ...]:
        # Tuples are replaced, never mutated: no lock needed to read.
        return self._subscribers.get(event_type, ())
