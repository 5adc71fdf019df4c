"""A publish/subscribe bus that routes events by type."""

from __future__ import annotations

import threading
from typing import Callable, Iterable

from tower.events import Event, EventType

EventHandler = Callable[[Event], None]


class EventBus:
    """Keeps handlers per event type and calls them when an event is published."""

    def __init__(self) -> None:
        self._subscribers: dict[EventType, list[EventHandler]] = {}
        self._lock = threading.RLock()

    def subscribe(self, event_type: EventType, handler: EventHandler) -> None:
        """Add a handler for one event type."""
        with self._lock:
            self._subscribers.setdefault(event_type, []).append(handler)

    def publish(self, event: Event) -> None:
        """Call every handler subscribed to the event's type, in order."""
        with self._lock:
            handlers = list(self._subscribers.get(event.event_type, ()))
        for handler in handlers:
            handler(event)

    def publish_many(self, events: Iterable[Event]) -> None:
        """Publish several events in sequence."""
        for event in events:
            self.publish(event)

    def unsubscribe(self, event_type: EventType) -> None:
        """Remove every handler of one event type."""
        with self._lock:
            self._subscribers.pop(event_type, None)

    def subscriber_count(self, event_type: EventType) -> int:
        """Return how many handlers an event type has."""
        with self._lock:
            return len(self._subscribers.get(event_type, ()))