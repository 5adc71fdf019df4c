from types import SimpleNamespace

import pytest

from tower.bus import EventBus
from tower.components import (
    Armor,
    Health,
    MeleeWeapon,
    Monster,
    Name,
    Player,
    Position,
    Renderable,
    UserMessage,
)
from tower.game.gamemap import GameMap
from tower.game.player import (
    AutoMoveState,
    Key,
    PlayerInput,
    execute_player_move,
    is_at_junction_or_room,
    is_monster_visible,
    process_auto_movement,
    start_auto_movement,
    take_player_action,
)
from tower.level import Level, MapTile, TileType
from tower.rect import Rect
from tower.systems.registry import SystemRegistry
from tower.world import Entity, World

CORRIDOR_START = 5
CORRIDOR_END = 15
CORRIDOR_ROW = 10


def make_level():
    level = Level()
    level.tiles = [
        MapTile(blocked=True, tile_type=TileType.WALL)
        for _ in range(level.width * level.height)
    ]
    return level


def room_level():
    level = make_level()
    level.create_room(Rect.from_size(5, 5, 10, 10))
    return level


def corridor_level():
    level = make_level()
    level.create_horizontal_tunnel(CORRIDOR_START, CORRIDOR_END, CORRIDOR_ROW)
    return level


def make_player(x, y):
    return Entity(
        Player(),
        Renderable(),
        Position(x, y),
        Health(max_health=30, current_health=30),
        MeleeWeapon(name="Axe", minimum_damage=50, maximum_damage=50, to_hit_bonus=100),
        Armor(name="Plate", defense=0, armor_class=0),
        Name(label="Player"),
        UserMessage(),
    )


def make_monster(x, y):
    return Entity(
        Monster(),
        Renderable(),
        Position(x, y),
        Health(max_health=10, current_health=10),
        MeleeWeapon(name="Short Sword", minimum_damage=1, maximum_damage=1, to_hit_bonus=0),
        Armor(name="Bone", defense=0, armor_class=0),
        Name(label="Skeleton"),
        UserMessage(),
    )


def make_game(level, *entities):
    world = World(entities)
    systems = SystemRegistry(world, EventBus())
    systems.register_all_handlers()
    return SimpleNamespace(
        map=GameMap(dungeons=[], current_level=level),
        world=world,
        systems=systems,
        auto_move_state=None,
    )


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


def test_step_onto_floor_moves_and_blocks():
    level = room_level()
    player = make_player(10, 10)
    game = make_game(level, player)
    assert take_player_action(game, PlayerInput.of(Key.RIGHT)) is True
    pos = player.get(Position)
    assert (pos.x, pos.y) == (11, 10)
    assert level.tile_at(11, 10).blocked is True
    assert level.tile_at(10, 10).blocked is False
    assert level.player_visible.is_visible(11, 10)


def test_step_into_wall_still_takes_turn_without_moving():
    level = corridor_level()
    player = make_player(CORRIDOR_START, CORRIDOR_ROW)
    game = make_game(level, player)
    assert take_player_action(game, PlayerInput.of(Key.UP)) is True
    pos = player.get(Position)
    assert (pos.x, pos.y) == (CORRIDOR_START, CORRIDOR_ROW)


def test_no_input_takes_no_turn_but_computes_view():
    level = room_level()
    player = make_player(10, 10)
    game = make_game(level, player)
    assert take_player_action(game, PlayerInput()) is False
    assert level.tile_at(10, 10).blocked is True
    assert level.player_visible.is_visible(10, 10)
    assert isinstance(game.auto_move_state, AutoMoveState)


def test_wait_key_takes_turn():
    level = room_level()
    player = make_player(10, 10)
    game = make_game(level, player)
    assert take_player_action(game, PlayerInput.of(Key.Q)) is True
    assert player.get(Position) == Position(10, 10)


def test_bumping_monster_attacks_it():
    level = room_level()
    player = make_player(10, 10)
    monster = make_monster(11, 10)
    level.tile_at(11, 10).blocked = True
    game = make_game(level, player, monster)
    assert take_player_action(game, PlayerInput.of(Key.RIGHT)) is True
    assert player.get(Position) == Position(10, 10)
    assert monster not in game.world.query_monsters()
    assert "Skeleton has died!\n" in game.systems.ui.message_texts()


def test_period_with_direction_starts_auto_movement():
    level = corridor_level()
    player = make_player(CORRIDOR_START, CORRIDOR_ROW)
    game = make_game(level, player)
    result = take_player_action(game, PlayerInput.of(Key.RIGHT, held={Key.PERIOD}))
    assert result is True
    state = game.auto_move_state
    assert state.active is True
    assert (state.dx, state.dy) == (1, 0)
    assert player.get(Position) == Position(CORRIDOR_START + 1, CORRIDOR_ROW)


def test_auto_movement_waits_for_cooldown():
    level = corridor_level()
    player = make_player(CORRIDOR_START, CORRIDOR_ROW)
    game = make_game(level, player)
    clock = FakeClock(100.0)
    game.auto_move_state = AutoMoveState(clock=clock)
    start_auto_movement(game, 1, 0)
    before = player.get(Position).x
    assert process_auto_movement(game) is False
    assert player.get(Position).x == before
    assert game.auto_move_state.active is True


def test_auto_movement_walks_corridor_until_wall():
    level = corridor_level()
    player = make_player(CORRIDOR_START, CORRIDOR_ROW)
    game = make_game(level, player)
    clock = FakeClock()
    game.auto_move_state = AutoMoveState(clock=clock)
    take_player_action(game, PlayerInput.of(Key.RIGHT, held={Key.PERIOD}))
    for _ in range(50):
        if not game.auto_move_state.active:
            break
        clock.now += 1.0
        take_player_action(game, PlayerInput())
    assert game.auto_move_state.active is False
    assert player.get(Position) == Position(CORRIDOR_END, CORRIDOR_ROW)


def test_auto_movement_attacks_blocking_monster():
    level = corridor_level()
    player = make_player(CORRIDOR_START, CORRIDOR_ROW)
    monster = make_monster(CORRIDOR_START + 1, CORRIDOR_ROW)
    level.tile_at(CORRIDOR_START + 1, CORRIDOR_ROW).blocked = True
    game = make_game(level, player, monster)
    game.auto_move_state = AutoMoveState(active=True, dx=1, clock=FakeClock(10.0))
    assert process_auto_movement(game) is True
    assert game.auto_move_state.active is False
    assert monster not in game.world.query_monsters()


def test_auto_movement_stops_when_monster_in_sight():
    level = corridor_level()
    player = make_player(CORRIDOR_START, CORRIDOR_ROW)
    monster = make_monster(CORRIDOR_START + 4, CORRIDOR_ROW)
    game = make_game(level, player, monster)
    level.player_visible.compute(level, CORRIDOR_START, CORRIDOR_ROW, 8)
    game.auto_move_state = AutoMoveState(active=True, dx=1, clock=FakeClock(10.0))
    assert process_auto_movement(game) is False
    assert game.auto_move_state.active is False
    assert player.get(Position) == Position(CORRIDOR_START, CORRIDOR_ROW)


def test_is_monster_visible():
    level = room_level()
    player = make_player(10, 10)
    monster = make_monster(12, 12)
    game = make_game(level, player, monster)
    level.player_visible.compute(level, 10, 10, 8)
    assert is_monster_visible(game, level) is True
    game.world.dispose_entity(monster)
    assert is_monster_visible(game, level) is False


def test_junction_detection():
    assert is_at_junction_or_room(room_level(), Position(10, 10)) is True
    assert is_at_junction_or_room(corridor_level(), Position(8, CORRIDOR_ROW)) is False


def test_execute_move_into_wall_returns_false():
    level = corridor_level()
    player = make_player(CORRIDOR_START, CORRIDOR_ROW)
    game = make_game(level, player)
    assert execute_player_move(game, 0, 1) is False
    assert player.get(Position) == Position(CORRIDOR_START, CORRIDOR_ROW)


def test_step_off_the_map_raises():
    level = make_level()
    player = make_player(0, level.height - 1)
    level.tile_at(0, level.height - 1).tile_type = TileType.FLOOR
    game = make_game(level, player)
    with pytest.raises(IndexError):
        take_player_action(game, PlayerInput.of(Key.DOWN))