"""Plain data components attached to game entities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class Player:
    """Marks an entity as controlled by the player."""


@dataclass
class Position:
    """A tile coordinate on the map."""

    x: int = 0
    y: int = 0

    def manhattan_distance(self, other: Position) -> int:
        """Return the Manhattan distance between two positions."""
        return abs(self.x - other.x) + abs(self.y - other.y)


@dataclass
class Renderable:
    """Something that can be drawn; holds the image handle."""

    image: Any = None


@dataclass
class Movable:
    """Marks an entity as able to move."""


@dataclass
class Monster:
    """Marks an entity as a monster."""


@dataclass
class Name:
    """Display name of an entity."""

    label: str = ""


@dataclass
class Health:
    """Hit points of an entity."""

    max_health: int = 0
    current_health: int = 0


@dataclass
class MeleeWeapon:
    """A close-combat weapon."""

    name: str = ""
    minimum_damage: int = 0
    maximum_damage: int = 0
    to_hit_bonus: int = 0


@dataclass
class Armor:
    """Protective gear reducing damage and chance to be hit."""

    name: str = ""
    defense: int = 0
    armor_class: int = 0


@dataclass
class UserMessage:
    """Messages an entity produced for the player to read."""

    attack_message: str = ""
    dead_message: str = ""
    game_state_message: str = ""