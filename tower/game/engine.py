"""The game object: state, systems and the per-tick turn logic."""

from __future__ import annotations

from typing import Optional

from tower.bus import EventBus
from tower.config import GameData
from tower.game.gamemap import GameMap, new_game_map
from tower.game.monsters import update_monsters
from tower.game.player import AutoMoveState, PlayerInput, take_player_action
from tower.systems.registry import SystemRegistry
from tower.turnstate import TurnState
from tower.world import World, new_game_world


class Game:
    """Everything a running game needs, advanced one tick at a time."""

    def __init__(
        self,
        game_map: Optional[GameMap] = None,
        world: Optional[World] = None,
        game_data: Optional[GameData] = None,
    ) -> None:
        self.map = game_map if game_map is not None else new_game_map()
        self.game_data = game_data or GameData()
        self.world = world if world is not None else new_game_world(self.map.current_level)
        self.event_bus = EventBus()
        self.systems = SystemRegistry(self.world, self.event_bus)
        self.systems.register_all_handlers()
        self.auto_move_state: Optional[AutoMoveState] = None
        self.last_log: list[str] = []

        if self.systems.game_state is not None:
            self.systems.game_state.set_game_references(self._set_turn, self._set_turn_counter)
        if self.systems.map_bridge is not None:
            self.systems.map_bridge.set_game_reference(self._unblock_tile)

        self.turn = TurnState.WAITING_FOR_PLAYER_INPUT
        self.turn_counter = 0

    def _set_turn(self, state: TurnState) -> None:
        self.turn = TurnState(state)

    def _set_turn_counter(self, count: int) -> None:
        self.turn_counter = count

    def _unblock_tile(self, x: int, y: int) -> None:
        self.map.current_level.tile_at(x, y).blocked = False

    def update(self, player_input: Optional[PlayerInput] = None) -> None:
        """Advance the game by one tick."""
        game_state = self.systems.game_state
        if self.turn == TurnState.WAITING_FOR_PLAYER_INPUT:
            if take_player_action(self, player_input):
                if game_state is not None:
                    game_state.change_turn(TurnState.PROCESSING_MONSTER_TURN)
                    game_state.increment_turn()
                else:
                    self.turn = TurnState.PROCESSING_MONSTER_TURN
                    self.turn_counter += 1
        elif self.turn == TurnState.PROCESSING_MONSTER_TURN:
            update_monsters(self)
            if game_state is not None:
                game_state.change_turn(TurnState.WAITING_FOR_PLAYER_INPUT)
            else:
                self.turn = TurnState.WAITING_FOR_PLAYER_INPUT
        else:
            raise RuntimeError(f"unhandled turn state: {self.turn!r}")

    def layout(self, width: int, height: int) -> tuple[int, int]:
        """Return the screen size in pixels, whatever the window size."""
        gd = self.game_data
        return gd.tile_width * gd.screen_width, gd.tile_height * gd.screen_height