import pytest

from tower.config import GameData
from tower.level import (
    Dungeon,
    FieldOfView,
    Level,
    MapTile,
    TileType,
    new_level,
)
from tower.rect import Rect

GD = GameData()
LEVEL_HEIGHT = GD.screen_height - GD.ui_height


def _wall_level(blocked=True):
    tiles = [
        MapTile(blocked=blocked, tile_type=TileType.WALL)
        for _ in range(LEVEL_HEIGHT * GD.screen_width)
    ]
    return Level(tiles=tiles)


@pytest.mark.parametrize(
    "x, y, expected",
    [(0, 0, 0), (5, 0, 5), (0, 1, 80), (10, 5, 410)],
)
def test_index_of(x, y, expected):
    assert Level().index_of(x, y) == expected


@pytest.mark.parametrize(
    "x, y, expected",
    [
        (0, 0, True),
        (GD.screen_width - 1, LEVEL_HEIGHT - 1, True),
        (-1, 10, False),
        (10, -1, False),
        (GD.screen_width, 10, True),
        (10, LEVEL_HEIGHT, True),
        (GD.screen_width + 1, 10, False),
        (10, LEVEL_HEIGHT + 1, False),
    ],
)
def test_in_bounds(x, y, expected):
    assert Level().in_bounds(x, y) is expected


@pytest.mark.parametrize(
    "x, y, expected",
    [(0, 0, True), (5, 5, False), (10, 10, True)],
)
def test_is_opaque(x, y, expected):
    level = _wall_level()
    level.tiles[level.index_of(5, 5)].tile_type = TileType.FLOOR
    assert level.is_opaque(x, y) is expected


def test_is_opaque_outside_tiles_raises():
    level = _wall_level()
    with pytest.raises(IndexError):
        level.is_opaque(0, LEVEL_HEIGHT)


def test_create_room():
    level = _wall_level()
    room = Rect.from_size(5, 5, 3, 3)
    level.create_room(room)

    for y in range(room.y1 + 1, room.y2):
        for x in range(room.x1 + 1, room.x2):
            tile = level.tiles[level.index_of(x, y)]
            assert not tile.blocked
            assert tile.tile_type == TileType.FLOOR

    for x, y in [(room.x1, room.y1), (room.x1, room.y1 + 1), (room.x1 + 1, room.y1)]:
        tile = level.tiles[level.index_of(x, y)]
        assert tile.blocked
        assert tile.tile_type == TileType.WALL


def test_horizontal_tunnel_either_direction():
    forward = _wall_level()
    backward = _wall_level()
    forward.create_horizontal_tunnel(3, 9, 7)
    backward.create_horizontal_tunnel(9, 3, 7)
    for x in range(3, 10):
        assert forward.tile_at(x, 7).tile_type == TileType.FLOOR
        assert backward.tile_at(x, 7).tile_type == TileType.FLOOR
        assert not forward.tile_at(x, 7).blocked
    assert forward.tile_at(2, 7).tile_type == TileType.WALL
    assert forward.tile_at(10, 7).tile_type == TileType.WALL


def test_vertical_tunnel():
    level = _wall_level()
    level.create_vertical_tunnel(12, 4, 6)
    for y in range(4, 13):
        assert level.tile_at(6, y).tile_type == TileType.FLOOR
    assert level.tile_at(6, 3).tile_type == TileType.WALL
    assert level.tile_at(6, 13).tile_type == TileType.WALL


def test_tunnel_never_carves_first_tile():
    level = _wall_level()
    level.create_horizontal_tunnel(0, 2, 0)
    assert level.tile_at(0, 0).tile_type == TileType.WALL
    assert level.tile_at(1, 0).tile_type == TileType.FLOOR
    assert level.tile_at(2, 0).tile_type == TileType.FLOOR


def test_new_level_layout_invariants():
    level = new_level()
    assert len(level.tiles) == LEVEL_HEIGHT * GD.screen_width
    assert level.rooms
    for i, room in enumerate(level.rooms):
        for other in level.rooms[i + 1:]:
            assert not room.intersects(other)
        for y in range(room.y1 + 1, room.y2):
            for x in range(room.x1 + 1, room.x2):
                assert level.tile_at(x, y).tile_type == TileType.FLOOR
        cx, cy = room.center()
        assert not level.tile_at(cx, cy).blocked


def test_new_level_pixel_coordinates():
    level = new_level()
    tile = level.tile_at(7, 3)
    assert tile.pixel_x == 7 * GD.tile_width
    assert tile.pixel_y == 3 * GD.tile_height
    assert all(not t.is_revealed for t in level.tiles)


def test_new_level_rooms_are_connected():
    level = new_level()
    start = level.rooms[0].center()
    seen = {start}
    frontier = [start]
    while frontier:
        x, y = frontier.pop()
        for nx, ny in ((x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)):
            if (nx, ny) in seen or not (0 <= nx < level.width and 0 <= ny < level.height):
                continue
            if level.tile_at(nx, ny).tile_type == TileType.FLOOR:
                seen.add((nx, ny))
                frontier.append((nx, ny))
    for room in level.rooms:
        assert room.center() in seen


def _open_room_level():
    level = _wall_level()
    level.create_room(Rect.from_size(1, 1, 40, 40))
    return level


def test_field_of_view_starts_empty():
    fov = FieldOfView()
    assert fov.is_visible(0, 0) is False


def test_field_of_view_origin_and_neighbours():
    level = _open_room_level()
    fov = FieldOfView()
    fov.compute(level, 20, 20, 8)
    assert fov.is_visible(20, 20)
    assert fov.is_visible(21, 20)
    assert fov.is_visible(20, 27)
    assert not fov.is_visible(20, 29)


def test_field_of_view_walls_block_sight():
    level = _wall_level()
    level.create_room(Rect.from_size(10, 10, 10, 10))
    fov = FieldOfView()
    fov.compute(level, 15, 15, 8)
    assert fov.is_visible(10, 15)
    assert not fov.is_visible(9, 15)


def test_field_of_view_recompute_replaces_old_view():
    level = _open_room_level()
    fov = FieldOfView()
    fov.compute(level, 5, 5, 4)
    assert fov.is_visible(5, 5)
    fov.compute(level, 35, 35, 4)
    assert not fov.is_visible(5, 5)
    assert fov.is_visible(35, 35)


def test_dungeon_holds_levels():
    level = Level()
    dungeon = Dungeon(name="default", levels=[level])
    assert dungeon.name == "default"
    assert dungeon.levels[0] is level