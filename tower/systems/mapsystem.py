"""Keeps tile blocking in step with deaths and movement."""

from __future__ import annotations

from typing import Any, Protocol, TypeVar

from tower.bus import EventBus
from tower.events import (
    DeathEvent,
    EventType,
    MoveEvent,
    TileBlockedEvent,
    TileUnblockedEvent,
)

E = TypeVar("E")


def _expect(event: Any, kind: type[E]) -> E:
    if not isinstance(event, kind):
        raise TypeError(f"expected {kind.__name__}, got {type(event).__name__}")
    return event


class MapManager(Protocol):
    """Operations on the blocking state of map tiles."""

    def unblock_tile(self, x: int, y: int) -> None:
        """Mark the tile at (x, y) as free."""
        ...

    def block_tile(self, x: int, y: int) -> None:
        """Mark the tile at (x, y) as blocked."""
        ...

    def is_blocked(self, x: int, y: int) -> bool:
        """Return True if the tile at (x, y) is blocked."""
        ...


class MapSystem:
    """Updates tiles when entities die or move."""

    def __init__(self, event_bus: EventBus, world: Any, map_manager: MapManager) -> None:
        self.event_bus = event_bus
        self.world = world
        self.map_manager = map_manager

    def register_handlers(self) -> None:
        """Subscribe to death, move and tile events."""
        self.event_bus.subscribe(EventType.DEATH, self.handle_entity_death)
        self.event_bus.subscribe(EventType.MOVE, self.handle_entity_move)
        self.event_bus.subscribe(EventType.TILE_BLOCKED, self.handle_tile_blocked)
        self.event_bus.subscribe(EventType.TILE_UNBLOCKED, self.handle_tile_unblocked)

    def handle_entity_death(self, event: DeathEvent) -> None:
        """Free a dead monster's tile and remove it from the world."""
        death = _expect(event, DeathEvent)
        if death.is_player:
            return
        self.map_manager.unblock_tile(death.position.x, death.position.y)
        self.world.dispose_entity(death.entity)
        self.event_bus.publish(
            TileUnblockedEvent(position=death.position, reason="monster_death")
        )

    def handle_entity_move(self, event: MoveEvent) -> None:
        """Free the tile left and block the tile entered."""
        move = _expect(event, MoveEvent)
        self.map_manager.unblock_tile(move.from_pos.x, move.from_pos.y)
        self.map_manager.block_tile(move.to_pos.x, move.to_pos.y)
        self.event_bus.publish(TileUnblockedEvent(position=move.from_pos, reason="entity_move"))
        self.event_bus.publish(TileBlockedEvent(position=move.to_pos, reason="entity_move"))

    def handle_tile_blocked(self, event: TileBlockedEvent) -> None:
        """Block the tile named by the event."""
        tile = _expect(event, TileBlockedEvent)
        self.map_manager.block_tile(tile.position.x, tile.position.y)

    def handle_tile_unblocked(self, event: TileUnblockedEvent) -> None:
        """Free the tile named by the event."""
        tile = _expect(event, TileUnblockedEvent)
        self.map_manager.unblock_tile(tile.position.x, tile.position.y)