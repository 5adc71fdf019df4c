"""The collection of dungeons making up the game world."""

from __future__ import annotations

from dataclasses import dataclass, field

from tower.level import Dungeon, Level, new_level


@dataclass
class GameMap:
    """All dungeons of the game and the level currently played."""

    dungeons: list[Dungeon] = field(default_factory=list)
    current_level: Level = field(default_factory=Level)


def new_game_map() -> GameMap:
    """Create a map holding one dungeon of a single freshly generated level."""
    level = new_level()
    dungeon = Dungeon(name="default", levels=[level])
    return GameMap(dungeons=[dungeon], current_level=level)