"""
End-of-game rules - victory, defeat, and scoring.

One place decides whether the game is over. The engine calls
check_game_end() after every health change and every room transition.
"""

from __future__ import annotations

from ..config import ROOM_SIZE, PLAYS_PER_ROOM
from .state import GameState, GameResult


def cards_needed_for_next_room(state: GameState) -> int:
    """New cards a room needs: 3 when a carry-over card fills slot 0."""
    return ROOM_SIZE - 1 if state.carry_over_card else ROOM_SIZE


def is_defeat(state: GameState) -> bool:
    return state.player_health <= 0


def is_victory(state: GameState) -> bool:
    """
    The dungeon is cleared: this room is done and not enough cards are
    left anywhere to build another one.
    """
    if state.cards_played_this_room != PLAYS_PER_ROOM:
        return False
    remaining = len(state.deck) + len(state.discard_pile)
    return remaining < cards_needed_for_next_room(state)


def compute_score(state: GameState, result: GameResult) -> int:
    """
    Victory scores remaining health, plus the value of an unused potion
    left as the carry-over card. Defeat scores health minus every
    monster still in the dungeon.
    """
    if result == GameResult.VICTORY:
        bonus = 0
        if state.carry_over_card and state.carry_over_card.is_potion:
            bonus = state.carry_over_card.value
        return state.player_health + bonus

    dungeon = list(state.deck) + list(state.room_cards)
    if state.carry_over_card:
        dungeon.append(state.carry_over_card)
    return state.player_health - sum(c.value for c in dungeon if c.is_monster)


def check_game_end(state: GameState, room_transition: bool = False) -> GameResult | None:
    """
    Mark the game over if it just ended. Returns the result, or None if
    play continues. A game that already ended is left alone.

    Victory is only considered at a room transition, once the leftover
    card has become the carry-over card.
    """
    if state.result is not None:
        return state.result

    if is_defeat(state):
        result = GameResult.DEFEAT
    elif room_transition and is_victory(state):
        result = GameResult.VICTORY
    else:
        return None

    state.game_active = False
    state.result = result
    state.score = compute_score(state, result)
    return result
