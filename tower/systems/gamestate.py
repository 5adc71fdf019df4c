"""Turn state and turn counting driven by events."""

from __future__ import annotations

import threading
from typing import Any, Callable, Optional, TypeVar

from tower.bus import EventBus
from tower.events import (
    DeathEvent,
    EventType,
    GameOverEvent,
    TurnChangeEvent,
    TurnCounterEvent,
)
from tower.turnstate import TurnState

E = TypeVar("E")

_STATE_NAMES = {
    TurnState.WAITING_FOR_PLAYER_INPUT: "WaitingForPlayerInput",
    TurnState.PROCESSING_PLAYER_ACTION: "ProcessingPlayerAction",
    TurnState.PROCESSING_MONSTER_TURN: "ProcessingMonsterTurn",
    TurnState.GAME_OVER: "GameOver",
}
_STATES_BY_NAME = {name: state for state, name in _STATE_NAMES.items()}


def _state_name(state: int) -> str:
    return _STATE_NAMES.get(state, "Unknown")


def _state_from_name(name: str) -> TurnState:
    return _STATES_BY_NAME.get(name, TurnState.WAITING_FOR_PLAYER_INPUT)


def _expect(event: Any, kind: type[E]) -> E:
    if not isinstance(event, kind):
        raise TypeError(f"expected {kind.__name__}, got {type(event).__name__}")
    return event


class GameStateSystem:
    """Tracks whose turn it is and the turn count, and ends the game."""

    def __init__(self, world: Any, event_bus: EventBus) -> None:
        self.world = world
        self.event_bus = event_bus
        self._state = TurnState.WAITING_FOR_PLAYER_INPUT
        self._turn_counter = 0
        self._set_turn_state: Optional[Callable[[TurnState], None]] = None
        self._set_turn_counter: Optional[Callable[[int], None]] = None
        self._lock = threading.RLock()

    def set_game_references(
        self,
        set_turn_state: Optional[Callable[[TurnState], None]],
        set_turn_counter: Optional[Callable[[int], None]],
    ) -> None:
        """Set callbacks that mirror the turn state and counter into the game."""
        with self._lock:
            self._set_turn_state = set_turn_state
            self._set_turn_counter = set_turn_counter

    def register_handlers(self) -> None:
        """Subscribe to death, game over, turn change and turn counter events."""
        self.event_bus.subscribe(EventType.DEATH, self.handle_death)
        self.event_bus.subscribe(EventType.GAME_OVER, self.handle_game_over)
        self.event_bus.subscribe(EventType.TURN_CHANGE, self.handle_turn_change)
        self.event_bus.subscribe(EventType.TURN_COUNTER, self.handle_turn_counter)

    def handle_death(self, event: DeathEvent) -> None:
        """End the game when the player dies."""
        death = _expect(event, DeathEvent)
        if death.is_player:
            self.trigger_game_over("player_death")

    def handle_game_over(self, event: GameOverEvent) -> None:
        """Enter the game-over state and announce the turn change."""
        _expect(event, GameOverEvent)
        with self._lock:
            self._state = TurnState.GAME_OVER
            self._sync_state(TurnState.GAME_OVER)
            from_name = _state_name(self._state)
            count = self._turn_counter
        self.event_bus.publish(
            TurnChangeEvent(from_state=from_name, to_state="GameOver", turn_count=count)
        )

    def handle_turn_change(self, event: TurnChangeEvent) -> None:
        """Adopt the state named by the event; unknown names mean waiting for input."""
        change = _expect(event, TurnChangeEvent)
        new_state = _state_from_name(change.to_state)
        with self._lock:
            self._state = new_state
            self._sync_state(new_state)

    def handle_turn_counter(self, event: TurnCounterEvent) -> None:
        """Adopt the turn count carried by the event."""
        counter = _expect(event, TurnCounterEvent)
        with self._lock:
            self._turn_counter = counter.turn_count
            if self._set_turn_counter is not None:
                self._set_turn_counter(counter.turn_count)

    def trigger_game_over(self, reason: str) -> None:
        """Publish a game-over event for the current turn."""
        with self._lock:
            final_turn = self._turn_counter
        self.event_bus.publish(GameOverEvent(reason=reason, final_turn=final_turn))

    def change_turn(self, to_state: TurnState) -> None:
        """Publish a change from the current state to another."""
        with self._lock:
            from_state = self._state
            count = self._turn_counter
        self.event_bus.publish(
            TurnChangeEvent(
                from_state=_state_name(from_state),
                to_state=_state_name(to_state),
                turn_count=count,
            )
        )

    def increment_turn(self) -> None:
        """Advance the turn counter by one and publish the new count."""
        with self._lock:
            self._turn_counter += 1
            new_count = self._turn_counter
        self.event_bus.publish(TurnCounterEvent(turn_count=new_count, increment=1))

    def current_state(self) -> TurnState:
        """Return the current turn state."""
        with self._lock:
            return self._state

    def turn_counter(self) -> int:
        """Return the current turn count."""
        with self._lock:
            return self._turn_counter

    def _sync_state(self, state: TurnState) -> None:
        if self._set_turn_state is not None:
            self._set_turn_state(state)