"""Events published on the game's event bus."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar, Optional

from tower.components import Position


class EventType(str, Enum):
    """Identifies the kind of an event."""

    ATTACK = "attack"
    DAMAGE = "damage"
    DEATH = "death"
    MOVE = "move"
    TURN_START = "turn_start"
    TURN_END = "turn_end"
    TURN_CHANGE = "turn_change"
    TURN_COUNTER = "turn_counter"
    GAME_OVER = "game_over"
    TILE_BLOCKED = "tile_blocked"
    TILE_UNBLOCKED = "tile_unblocked"
    MESSAGE = "message_event"
    CLEAR_MESSAGES = "clear_messages_event"
    UI_UPDATE = "ui_update_event"


@dataclass
class Event:
    """Something that happened in the game, stamped with its creation time."""

    event_type: ClassVar[EventType]
    timestamp: datetime = field(default_factory=datetime.now, kw_only=True)


@dataclass
class AttackEvent(Event):
    """An attack between two entities."""

    event_type: ClassVar[EventType] = EventType.ATTACK
    attacker: Any
    defender: Any
    attacker_pos: Optional[Position]
    defender_pos: Optional[Position]
    to_hit_roll: int
    hit: bool


@dataclass
class DamageEvent(Event):
    """Damage being dealt to an entity."""

    event_type: ClassVar[EventType] = EventType.DAMAGE
    target: Any
    damage_amount: int
    damage_source: str
    is_fatal: bool


@dataclass
class DeathEvent(Event):
    """An entity dying."""

    event_type: ClassVar[EventType] = EventType.DEATH
    entity: Any
    position: Optional[Position]
    is_player: bool


@dataclass
class MoveEvent(Event):
    """An entity moving from one tile to another."""

    event_type: ClassVar[EventType] = EventType.MOVE
    entity: Any
    from_pos: Position
    to_pos: Position
    is_player: bool


@dataclass
class TurnStartEvent(Event):
    """The start of a player or monster turn."""

    event_type: ClassVar[EventType] = EventType.TURN_START
    turn_type: str
    turn_counter: int


@dataclass
class TurnEndEvent(Event):
    """The end of a player or monster turn."""

    event_type: ClassVar[EventType] = EventType.TURN_END
    turn_type: str
    turn_counter: int


@dataclass
class GameOverEvent(Event):
    """The game ending."""

    event_type: ClassVar[EventType] = EventType.GAME_OVER
    reason: str
    final_turn: int


@dataclass
class TurnChangeEvent(Event):
    """A change of turn state, by state name."""

    event_type: ClassVar[EventType] = EventType.TURN_CHANGE
    from_state: str
    to_state: str
    turn_count: int


@dataclass
class TurnCounterEvent(Event):
    """An update of the turn counter."""

    event_type: ClassVar[EventType] = EventType.TURN_COUNTER
    turn_count: int
    increment: int


@dataclass
class TileBlockedEvent(Event):
    """A tile becoming blocked."""

    event_type: ClassVar[EventType] = EventType.TILE_BLOCKED
    position: Position
    reason: str


@dataclass
class TileUnblockedEvent(Event):
    """A tile becoming free."""

    event_type: ClassVar[EventType] = EventType.TILE_UNBLOCKED
    position: Position
    reason: str


@dataclass
class MessageEvent(Event):
    """A message for the UI log."""

    event_type: ClassVar[EventType] = EventType.MESSAGE
    message: str
    message_type: str


@dataclass
class ClearMessagesEvent(Event):
    """A request to clear all or old messages from the log."""

    event_type: ClassVar[EventType] = EventType.CLEAR_MESSAGES
    clear_all: bool


@dataclass
class UIUpdateEvent(Event):
    """A request to refresh part of the UI."""

    event_type: ClassVar[EventType] = EventType.UI_UPDATE
    update_type: str