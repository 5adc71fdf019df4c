"""Turn states of the game loop."""

from __future__ import annotations

from enum import IntEnum


class TurnState(IntEnum):
    """Whose turn it is, or whether the game has ended."""

    WAITING_FOR_PLAYER_INPUT = 0
    PROCESSING_PLAYER_ACTION = 1
    PROCESSING_MONSTER_TURN = 2
    GAME_OVER = 3


_NEXT = {
    TurnState.WAITING_FOR_PLAYER_INPUT: TurnState.PROCESSING_PLAYER_ACTION,
    TurnState.PROCESSING_PLAYER_ACTION: TurnState.PROCESSING_MONSTER_TURN,
    TurnState.PROCESSING_MONSTER_TURN: TurnState.WAITING_FOR_PLAYER_INPUT,
    TurnState.GAME_OVER: TurnState.GAME_OVER,
}


def next_state(state: int) -> TurnState:
    """Return the state that follows; unknown states lead to the player action."""
    return _NEXT.get(state, TurnState.PROCESSING_PLAYER_ACTION)