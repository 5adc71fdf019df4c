"""Keeps the message log shown to the player."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from tower.bus import EventBus
from tower.events import ClearMessagesEvent, EventType, MessageEvent

MAX_MESSAGES = 10
KEPT_ON_PARTIAL_CLEAR = 3


@dataclass(frozen=True)
class UIMessage:
    """A logged message with its kind and time."""

    text: str
    message_type: str
    timestamp: datetime


class UISystem:
    """Collects message events into a bounded log."""

    def __init__(self, world: Any, event_bus: EventBus, max_messages: int = MAX_MESSAGES) -> None:
        self.world = world
        self.event_bus = event_bus
        self.max_messages = max_messages
        self._messages: list[UIMessage] = []
        self._lock = threading.Lock()

    def register_handlers(self) -> None:
        """Subscribe to message and clear events."""
        self.event_bus.subscribe(EventType.MESSAGE, self.handle_message)
        self.event_bus.subscribe(EventType.CLEAR_MESSAGES, self.handle_clear_messages)

    def handle_message(self, event: MessageEvent) -> None:
        """Append a message, dropping the oldest when the log is full."""
        if not isinstance(event, MessageEvent):
            raise TypeError(f"expected MessageEvent, got {type(event).__name__}")
        message = UIMessage(event.message, event.message_type, event.timestamp)
        with self._lock:
            self._messages.append(message)
            if len(self._messages) > self.max_messages:
                del self._messages[0]

    def handle_clear_messages(self, event: ClearMessagesEvent) -> None:
        """Clear all messages, or keep only the most recent few."""
        if not isinstance(event, ClearMessagesEvent):
            raise TypeError(f"expected ClearMessagesEvent, got {type(event).__name__}")
        with self._lock:
            if event.clear_all:
                self._messages = []
            elif len(self._messages) > KEPT_ON_PARTIAL_CLEAR:
                self._messages = self._messages[-KEPT_ON_PARTIAL_CLEAR:]

    def current_messages(self) -> list[UIMessage]:
        """Return a copy of the log, oldest first."""
        with self._lock:
            return list(self._messages)

    def message_texts(self) -> list[str]:
        """Return the message texts, latest first."""
        with self._lock:
            return [message.text for message in reversed(self._messages)]

    def add_message(self, text: str, message_type: str) -> None:
        """Publish a message event."""
        self.event_bus.publish(MessageEvent(message=text, message_type=message_type))

    def clear_messages(self, clear_all: bool) -> None:
        """Publish a clear-messages event."""
        self.event_bus.publish(ClearMessagesEvent(clear_all=clear_all))

    def message_count(self) -> int:
        """Return how many messages the log holds."""
        with self._lock:
            return len(self._messages)