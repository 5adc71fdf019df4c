from tower.astar import AStar
from tower.components import Position
from tower.config import GameData
from tower.level import Level, MapTile, TileType
from tower.rect import Rect

GD = GameData()
LEVEL_HEIGHT = GD.screen_height - GD.ui_height


def _wall_level():
    tiles = [
        MapTile(blocked=True, tile_type=TileType.WALL)
        for _ in range(LEVEL_HEIGHT * GD.screen_width)
    ]
    return Level(tiles=tiles)


def _assert_valid_path(level, path, start, end):
    assert path[0] == start
    assert path[-1] == end
    for a, b in zip(path, path[1:]):
        assert a.manhattan_distance(b) == 1
    for pos in path:
        assert level.tile_at(pos.x, pos.y).tile_type != TileType.WALL


def test_path_in_open_room_is_shortest():
    level = _wall_level()
    level.create_room(Rect.from_size(2, 2, 15, 15))
    start = Position(4, 4)
    end = Position(12, 9)
    path = AStar().get_path(level, start, end)
    _assert_valid_path(level, path, start, end)
    assert len(path) == start.manhattan_distance(end) + 1


def test_path_to_self():
    level = _wall_level()
    level.create_room(Rect.from_size(2, 2, 6, 6))
    start = Position(4, 4)
    path = AStar().get_path(level, start, Position(4, 4))
    assert path == [Position(4, 4)]


def test_path_follows_tunnel_between_rooms():
    level = _wall_level()
    first = Rect.from_size(2, 2, 8, 8)
    second = Rect.from_size(30, 20, 8, 8)
    level.create_room(first)
    level.create_room(second)
    (ax, ay), (bx, by) = first.center(), second.center()
    level.create_horizontal_tunnel(ax, bx, ay)
    level.create_vertical_tunnel(ay, by, bx)
    start, end = Position(ax, ay), Position(bx, by)
    path = AStar().get_path(level, start, end)
    _assert_valid_path(level, path, start, end)
    assert Position(bx, ay) in path


def test_path_goes_around_wall():
    level = _wall_level()
    level.create_room(Rect.from_size(2, 2, 12, 12))
    for y in range(3, 12):
        level.tile_at(8, y).tile_type = TileType.WALL
    start, end = Position(5, 6), Position(11, 6)
    path = AStar().get_path(level, start, end)
    _assert_valid_path(level, path, start, end)
    assert len(path) > start.manhattan_distance(end) + 1
    assert any(p.x == 8 for p in path)


def test_unreachable_goal_gives_empty_path():
    level = _wall_level()
    level.create_room(Rect.from_size(2, 2, 6, 6))
    level.create_room(Rect.from_size(20, 20, 6, 6))
    path = AStar().get_path(level, Position(4, 4), Position(22, 22))
    assert path == []


def test_path_does_not_alias_inputs():
    level = _wall_level()
    level.create_room(Rect.from_size(2, 2, 8, 8))
    start, end = Position(3, 3), Position(6, 6)
    path = AStar().get_path(level, start, end)
    path[0].x = 99
    assert start.x == 3