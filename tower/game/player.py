"""Player actions: single steps, attacks and timed auto-movement."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterable, Optional

from tower.components import Position
from tower.level import Level, TileType

VISION_RADIUS = 8
AUTO_MOVE_COOLDOWN = 0.12  # seconds, about eight moves per second


class Key(Enum):
    """Keys the game reacts to."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    PERIOD = "period"
    Q = "q"
    ESCAPE = "escape"


_DIRECTIONS = (
    (Key.UP, 0, -1),
    (Key.DOWN, 0, 1),
    (Key.LEFT, -1, 0),
    (Key.RIGHT, 1, 0),
)


@dataclass(frozen=True)
class PlayerInput:
    """The keys pressed this tick and the keys held down."""

    just_pressed: frozenset = frozenset()
    held: frozenset = frozenset()

    def __post_init__(self) -> None:
        object.__setattr__(self, "just_pressed", frozenset(self.just_pressed))
        object.__setattr__(self, "held", frozenset(self.held))

    @classmethod
    def of(cls, *pressed: Key, held: Iterable[Key] = ()) -> PlayerInput:
        """Build an input from pressed keys and, optionally, held keys."""
        return cls(just_pressed=frozenset(pressed), held=frozenset(held))

    def is_just_pressed(self, key: Key) -> bool:
        """Return True if the key went down this tick."""
        return key in self.just_pressed

    def is_held(self, key: Key) -> bool:
        """Return True if the key is down, whether pressed now or earlier."""
        return key in self.held or key in self.just_pressed


@dataclass
class AutoMoveState:
    """Progress of a repeated walk in one direction."""

    active: bool = False
    dx: int = 0
    dy: int = 0
    last_move_time: float = 0.0
    move_cooldown: float = AUTO_MOVE_COOLDOWN
    stop_requested: bool = False
    clock: Callable[[], float] = field(default=time.monotonic, repr=False)


def _auto_state(game: Any) -> AutoMoveState:
    if game.auto_move_state is None:
        game.auto_move_state = AutoMoveState()
    return game.auto_move_state


def _move_player(level: Level, pos: Position, dx: int, dy: int) -> None:
    level.tile_at(pos.x, pos.y).blocked = False
    pos.x += dx
    pos.y += dy
    level.tile_at(pos.x, pos.y).blocked = True
    level.player_visible.compute(level, pos.x, pos.y, VISION_RADIUS)


def take_player_action(game: Any, player_input: Optional[PlayerInput] = None) -> bool:
    """Act on the player's input; return True if the player used a turn."""
    player_input = player_input or PlayerInput()
    state = _auto_state(game)
    if state.active:
        return process_auto_movement(game)

    x = y = 0
    auto_move = player_input.is_held(Key.PERIOD)
    for key, kx, ky in _DIRECTIONS:
        if player_input.is_just_pressed(key):
            x = kx or x
            y = ky or y
            if auto_move:
                return start_auto_movement(game, kx, ky)

    turn_taken = player_input.is_just_pressed(Key.Q)
    level = game.map.current_level
    world = game.world
    for player in world.query_players():
        pos = world.get_position(player)
        target = level.tile_at(pos.x + x, pos.y + y)
        if not target.blocked:
            _move_player(level, pos, x, y)
        elif (x or y) and target.tile_type != TileType.WALL:
            game.systems.combat.process_attack(pos, Position(pos.x + x, pos.y + y))

    return bool(x or y or turn_taken)


def start_auto_movement(game: Any, dx: int, dy: int) -> bool:
    """Begin walking in a direction and make the first step at once."""
    state = _auto_state(game)
    state.active = True
    state.dx = dx
    state.dy = dy
    state.last_move_time = state.clock()
    state.stop_requested = False
    return execute_player_move(game, dx, dy)


def process_auto_movement(game: Any) -> bool:
    """Take the next auto-movement step once the cooldown has passed."""
    state = _auto_state(game)
    now = state.clock()
    if now - state.last_move_time < state.move_cooldown:
        return False

    level = game.map.current_level
    world = game.world
    for player in world.query_players():
        pos = world.get_position(player)
        next_x, next_y = pos.x + state.dx, pos.y + state.dy
        target = level.tile_at(next_x, next_y)

        if target.tile_type == TileType.WALL:
            state.active = False
            return False
        if target.blocked:
            state.active = False
            game.systems.combat.process_attack(pos, Position(next_x, next_y))
            return True
        if is_monster_visible(game, level) or is_at_junction_or_room(level, pos):
            state.active = False
            return False

        state.last_move_time = now
        return execute_player_move(game, state.dx, state.dy)

    state.active = False
    return False


def execute_player_move(game: Any, dx: int, dy: int) -> bool:
    """Step the player one tile, or attack what stands there; False at a wall."""
    level = game.map.current_level
    world = game.world
    for player in world.query_players():
        pos = world.get_position(player)
        target = level.tile_at(pos.x + dx, pos.y + dy)
        if not target.blocked:
            _move_player(level, pos, dx, dy)
            return True
        if target.tile_type != TileType.WALL:
            game.systems.combat.process_attack(pos, Position(pos.x + dx, pos.y + dy))
            return True
    return False


def is_monster_visible(game: Any, level: Level) -> bool:
    """Return True if any monster stands in the player's field of view."""
    world = game.world
    return any(
        level.player_visible.is_visible(pos.x, pos.y)
        for pos in map(world.get_position, world.query_monsters())
    )


def is_at_junction_or_room(level: Level, pos: Position) -> bool:
    """Return True if more than two neighbouring tiles are free floor."""
    walkable = 0
    for dx, dy in ((0, -1), (0, 1), (-1, 0), (1, 0)):
        x, y = pos.x + dx, pos.y + dy
        if not level.in_bounds(x, y):
            continue
        index = level.index_of(x, y)
        if not 0 <= index < len(level.tiles):
            continue
        tile = level.tiles[index]
        if tile.tile_type == TileType.FLOOR and not tile.blocked:
            walkable += 1
    return walkable > 2