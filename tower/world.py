"""The entity world: entities, their components and queries over them."""

from __future__ import annotations

import itertools
from typing import Any, Iterable, Iterator, Optional, TypeVar

from tower.components import (
    Armor,
    Health,
    MeleeWeapon,
    Monster,
    Movable,
    Name,
    Player,
    Position,
    Renderable,
    UserMessage,
)
from tower.dice import dice_roll
from tower.level import Level

PLAYER_IMAGE = "assets/player.png"
SKELETON_IMAGE = "assets/skelly.png"
ORC_IMAGE = "assets/orc.png"

_PLAYER_TAG = (Player, Position, Health, MeleeWeapon, Armor, Name, UserMessage)
_MONSTER_TAG = (Monster, Position, Health, MeleeWeapon, Armor, Name, UserMessage)
_RENDERABLE_TAG = (Renderable, Position)
_MESSENGER_TAG = (UserMessage,)

T = TypeVar("T")

_ids = itertools.count(1)


class Entity:
    """A game object made of components, at most one of each type."""

    def __init__(self, *components: Any) -> None:
        self.id = next(_ids)
        self._components: dict[type, Any] = {}
        for component in components:
            self.add(component)

    def add(self, component: Any) -> Entity:
        """Attach a component, replacing any of the same type; returns self."""
        self._components[type(component)] = component
        return self

    def get(self, kind: type[T]) -> T:
        """Return the component of the given type."""
        try:
            return self._components[kind]
        except KeyError:
            raise KeyError(f"entity {self.id} has no {kind.__name__} component") from None

    def has(self, *kinds: type) -> bool:
        """Return True if the entity carries every one of the given types."""
        return all(kind in self._components for kind in kinds)

    def __repr__(self) -> str:
        names = ", ".join(kind.__name__ for kind in self._components)
        return f"Entity(id={self.id}, components=[{names}])"


class World:
    """Holds the entities of a game and answers queries about them."""

    def __init__(self, entities: Optional[Iterable[Entity]] = None) -> None:
        self._entities: list[Entity] = list(entities or ())

    def __iter__(self) -> Iterator[Entity]:
        return iter(list(self._entities))

    def __len__(self) -> int:
        return len(self._entities)

    def add_entity(self, entity: Entity) -> Entity:
        """Add an entity to the world and return it."""
        self._entities.append(entity)
        return entity

    def _query(self, tag: tuple[type, ...]) -> list[Entity]:
        return [entity for entity in self._entities if entity.has(*tag)]

    def query_players(self) -> list[Entity]:
        """Return all player entities."""
        return self._query(_PLAYER_TAG)

    def query_monsters(self) -> list[Entity]:
        """Return all monster entities."""
        return self._query(_MONSTER_TAG)

    def query_renderables(self) -> list[Entity]:
        """Return all entities that can be drawn."""
        return self._query(_RENDERABLE_TAG)

    def query_messengers(self) -> list[Entity]:
        """Return all entities carrying user messages."""
        return self._query(_MESSENGER_TAG)

    def get_position(self, entity: Entity) -> Position:
        """Return the entity's position."""
        return entity.get(Position)

    def get_health(self, entity: Entity) -> Health:
        """Return the entity's health."""
        return entity.get(Health)

    def get_armor(self, entity: Entity) -> Armor:
        """Return the entity's armor."""
        return entity.get(Armor)

    def get_melee_weapon(self, entity: Entity) -> MeleeWeapon:
        """Return the entity's melee weapon."""
        return entity.get(MeleeWeapon)

    def get_name(self, entity: Entity) -> Name:
        """Return the entity's name."""
        return entity.get(Name)

    def get_user_message(self, entity: Entity) -> UserMessage:
        """Return the entity's user messages."""
        return entity.get(UserMessage)

    def get_renderable(self, entity: Entity) -> Renderable:
        """Return the entity's renderable."""
        return entity.get(Renderable)

    def dispose_entity(self, entity: Entity) -> None:
        """Remove an entity from the world; unknown entities are ignored."""
        self._entities = [e for e in self._entities if e is not entity]


def _new_player(x: int, y: int) -> Entity:
    return Entity(
        Player(),
        Renderable(image=PLAYER_IMAGE),
        Movable(),
        Position(x, y),
        Health(max_health=30, current_health=30),
        MeleeWeapon(name="Battle Axe", minimum_damage=10, maximum_damage=20, to_hit_bonus=3),
        Armor(name="Plate Armor", defense=15, armor_class=18),
        Name(label="Player"),
        UserMessage(),
    )


def _new_orc(x: int, y: int) -> Entity:
    return Entity(
        Monster(),
        Renderable(image=ORC_IMAGE),
        Position(x, y),
        Health(max_health=30, current_health=30),
        MeleeWeapon(name="Machete", minimum_damage=4, maximum_damage=8, to_hit_bonus=1),
        Armor(name="Leather", defense=5, armor_class=6),
        Name(label="Orc"),
        UserMessage(),
    )


def _new_skeleton(x: int, y: int) -> Entity:
    return Entity(
        Monster(),
        Renderable(image=SKELETON_IMAGE),
        Position(x, y),
        Health(max_health=10, current_health=10),
        MeleeWeapon(name="Short Sword", minimum_damage=2, maximum_damage=6, to_hit_bonus=0),
        Armor(name="Bone", defense=3, armor_class=4),
        Name(label="Skeleton"),
        UserMessage(),
    )


def new_game_world(starting_level: Level) -> World:
    """Populate a world: the player in the first room, a monster in each other room."""
    if not starting_level.rooms:
        raise ValueError("the starting level has no rooms")
    world = World()
    starting_room = starting_level.rooms[0]
    world.add_entity(_new_player(*starting_room.center()))

    for room in starting_level.rooms:
        if room.x1 == starting_room.x1:
            continue
        spawn = _new_orc if dice_roll(2) == 1 else _new_skeleton
        world.add_entity(spawn(*room.center()))
    return world