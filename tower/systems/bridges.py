"""Bridges that connect event handling to game state owned elsewhere."""

from __future__ import annotations

from typing import Any, Callable, Optional

from tower.bus import EventBus
from tower.events import DeathEvent, EventType


def _as_death_event(event: Any) -> DeathEvent:
    if not isinstance(event, DeathEvent):
        raise TypeError(f"expected DeathEvent, got {type(event).__name__}")
    return event


class GameBridge:
    """Listens for deaths on behalf of the game; holds a reference to it."""

    def __init__(self, event_bus: EventBus) -> None:
        self.event_bus = event_bus
        self.game: Any = None
        event_bus.subscribe(EventType.DEATH, self.handle_death)

    def set_game_reference(self, game: Any) -> None:
        """Remember the game this bridge serves."""
        self.game = game

    def handle_death(self, event: DeathEvent) -> None:
        """Accept a death event; game state changes are left to other systems."""
        _as_death_event(event)


class MapBridge:
    """Frees the tile of a monster when it dies."""

    def __init__(self, event_bus: EventBus) -> None:
        self.event_bus = event_bus
        self.unblock_tile: Optional[Callable[[int, int], None]] = None
        event_bus.subscribe(EventType.DEATH, self.handle_entity_death)

    def set_game_reference(self, unblock_tile: Optional[Callable[[int, int], None]]) -> None:
        """Set the function that unblocks the tile at (x, y)."""
        self.unblock_tile = unblock_tile

    def handle_entity_death(self, event: DeathEvent) -> None:
        """Unblock the dead monster's tile, if an unblocking function is set."""
        death = _as_death_event(event)
        if death.is_player or death.position is None:
            return
        if callable(self.unblock_tile):
            self.unblock_tile(death.position.x, death.position.y)