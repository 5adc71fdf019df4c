"""Creates the event-driven systems and wires them to one event bus."""

from __future__ import annotations

from typing import Optional

from tower.bus import EventBus
from tower.systems.bridges import GameBridge, MapBridge
from tower.systems.combat import CombatSystem
from tower.systems.gamestate import GameStateSystem
from tower.systems.mapsystem import MapSystem
from tower.systems.ui import UISystem
from tower.world import World


class SystemRegistry:
    """Owns every system of a game and subscribes them to their events."""

    def __init__(self, world: World, event_bus: EventBus) -> None:
        self.world = world
        self.event_bus = event_bus
        self.combat = CombatSystem(world, event_bus)
        self.game_bridge = GameBridge(event_bus)
        self.map_bridge = MapBridge(event_bus)
        self.ui = UISystem(world, event_bus)
        self.game_state: Optional[GameStateSystem] = GameStateSystem(world, event_bus)
        self.map: Optional[MapSystem] = None

    def register_all_handlers(self) -> None:
        """Subscribe each system to the events it handles."""
        self.combat.register_handlers()
        self.ui.register_handlers()
        if self.game_state is not None:
            self.game_state.register_handlers()
        if self.map is not None:
            self.map.register_handlers()