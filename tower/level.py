"""Dungeon levels: tiles, room generation and field of view."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

from tower.config import GameData
from tower.dice import dice_roll, random_between
from tower.rect import Rect

MIN_ROOM_SIZE = 6
MAX_ROOM_SIZE = 10
MAX_ROOMS = 30

# Multipliers that map the first octant onto each of the eight octants.
_OCTANTS = (
    (1, 0, 0, 1),
    (0, 1, 1, 0),
    (0, -1, 1, 0),
    (-1, 0, 0, 1),
    (-1, 0, 0, -1),
    (0, -1, -1, 0),
    (0, 1, -1, 0),
    (1, 0, 0, -1),
)


class TileType(IntEnum):
    """What a map tile is made of."""

    WALL = 0
    FLOOR = 1


@dataclass
class MapTile:
    """A single tile of a level."""

    pixel_x: int = 0
    pixel_y: int = 0
    blocked: bool = False
    is_revealed: bool = False
    tile_type: TileType = TileType.WALL


class FieldOfView:
    """The set of tiles visible from a point, computed by shadowcasting."""

    def __init__(self) -> None:
        self._visible: set[tuple[int, int]] = set()

    def compute(self, level: Level, x: int, y: int, radius: int) -> None:
        """Recompute which tiles are visible from (x, y) within radius."""
        self._visible = {(x, y)}
        for xx, xy, yx, yy in _OCTANTS:
            self._cast_light(level, x, y, 1, 1.0, 0.0, radius, xx, xy, yx, yy)

    def is_visible(self, x: int, y: int) -> bool:
        """Return True if (x, y) was visible at the last computation."""
        return (x, y) in self._visible

    def _cast_light(
        self,
        level: Level,
        cx: int,
        cy: int,
        row: int,
        start: float,
        end: float,
        radius: int,
        xx: int,
        xy: int,
        yx: int,
        yy: int,
    ) -> None:
        if start < end:
            return
        radius_sq = radius * radius
        for distance in range(row, radius + 1):
            dx, dy = -distance - 1, -distance
            blocked = False
            new_start = start
            while dx <= 0:
                dx += 1
                map_x = cx + dx * xx + dy * xy
                map_y = cy + dx * yx + dy * yy
                left_slope = (dx - 0.5) / (dy + 0.5)
                right_slope = (dx + 0.5) / (dy - 0.5)
                if start < right_slope:
                    continue
                if end > left_slope:
                    break
                inside = (
                    level.in_bounds(map_x, map_y)
                    and 0 <= map_x < level.width
                    and 0 <= map_y < level.height
                    and 0 <= level.index_of(map_x, map_y) < len(level.tiles)
                )
                if inside and dx * dx + dy * dy < radius_sq:
                    self._visible.add((map_x, map_y))
                opaque = not inside or level.is_opaque(map_x, map_y)
                if blocked:
                    if opaque:
                        new_start = right_slope
                        continue
                    blocked = False
                    start = new_start
                elif opaque and distance < radius:
                    blocked = True
                    self._cast_light(
                        level, cx, cy, distance + 1, start, left_slope,
                        radius, xx, xy, yx, yy,
                    )
                    new_start = right_slope
            if blocked:
                break


@dataclass
class Level:
    """The tiles and rooms of one dungeon level."""

    tiles: list[MapTile] = field(default_factory=list)
    rooms: list[Rect] = field(default_factory=list)
    player_visible: FieldOfView = field(default_factory=FieldOfView)
    game_data: GameData = field(default_factory=GameData)

    @property
    def width(self) -> int:
        """Width of the level in tiles."""
        return self.game_data.screen_width

    @property
    def height(self) -> int:
        """Height of the level in tiles: the screen minus the UI panel."""
        return self.game_data.screen_height - self.game_data.ui_height

    def index_of(self, x: int, y: int) -> int:
        """Return the tile list index of the tile coordinate (x, y)."""
        return y * self.width + x

    def tile_at(self, x: int, y: int) -> MapTile:
        """Return the tile at (x, y)."""
        index = self.index_of(x, y)
        if not 0 <= index < len(self.tiles):
            raise IndexError(f"tile ({x}, {y}) is outside the level")
        return self.tiles[index]

    def in_bounds(self, x: int, y: int) -> bool:
        """Return True if (x, y) lies within the level's limits (edges included)."""
        return 0 <= x <= self.width and 0 <= y <= self.height

    def is_opaque(self, x: int, y: int) -> bool:
        """Return True if the tile at (x, y) blocks sight."""
        return self.tile_at(x, y).tile_type == TileType.WALL

    def generate_tiles(self) -> None:
        """Carve a fresh map of rooms joined by tunnels out of solid wall."""
        self.tiles = self._create_tiles()
        self.rooms = []
        for _ in range(MAX_ROOMS):
            w = random_between(MIN_ROOM_SIZE, MAX_ROOM_SIZE)
            h = random_between(MIN_ROOM_SIZE, MAX_ROOM_SIZE)
            x = dice_roll(self.width - w - 1)
            y = dice_roll(self.height - h - 1)
            new_room = Rect.from_size(x, y, w, h)
            if any(new_room.intersects(other) for other in self.rooms):
                continue
            self.create_room(new_room)
            if self.rooms:
                new_x, new_y = new_room.center()
                prev_x, prev_y = self.rooms[-1].center()
                if dice_roll(2) == 2:
                    self.create_horizontal_tunnel(prev_x, new_x, prev_y)
                    self.create_vertical_tunnel(prev_y, new_y, new_x)
                else:
                    self.create_horizontal_tunnel(prev_x, new_x, new_y)
                    self.create_vertical_tunnel(prev_y, new_y, prev_x)
            self.rooms.append(new_room)

    def _create_tiles(self) -> list[MapTile]:
        gd = self.game_data
        return [
            MapTile(
                pixel_x=x * gd.tile_width,
                pixel_y=y * gd.tile_height,
                blocked=True,
                is_revealed=False,
                tile_type=TileType.WALL,
            )
            for y in range(self.height)
            for x in range(self.width)
        ]

    def _carve(self, x: int, y: int) -> None:
        index = self.index_of(x, y)
        if 0 < index < self.width * self.height:
            tile = self.tiles[index]
            tile.blocked = False
            tile.tile_type = TileType.FLOOR

    def create_horizontal_tunnel(self, x1: int, x2: int, y: int) -> None:
        """Carve a floor corridor along row y between x1 and x2."""
        for x in range(min(x1, x2), max(x1, x2) + 1):
            self._carve(x, y)

    def create_vertical_tunnel(self, y1: int, y2: int, x: int) -> None:
        """Carve a floor corridor along column x between y1 and y2."""
        for y in range(min(y1, y2), max(y1, y2) + 1):
            self._carve(x, y)

    def create_room(self, room: Rect) -> None:
        """Turn the interior of a rectangle into open floor."""
        for y in range(room.y1 + 1, room.y2):
            for x in range(room.x1 + 1, room.x2):
                tile = self.tile_at(x, y)
                tile.blocked = False
                tile.tile_type = TileType.FLOOR


@dataclass
class Dungeon:
    """A named collection of levels."""

    name: str
    levels: list[Level] = field(default_factory=list)


def new_level() -> Level:
    """Create a level with freshly generated rooms and tunnels."""
    level = Level(game_data=GameData())
    level.generate_tiles()
    return level