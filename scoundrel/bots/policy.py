"""
Bot Policy - Interface for automatic play, plus two baselines.

A policy looks at a state snapshot and the legal actions for it and
picks one. Every decision carries a plain-language explanation of the
move ("drink the 4 of hearts") for the autoplay log.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
import random

from ..engine_core.action import Action, ActionType
from ..engine_core.state import GameState


def describe_move(state: GameState, action: Action) -> str:
    """What ``action`` does in this position, in game terms."""
    if action.action_type == ActionType.SKIP_ROOM:
        return "run from the room"
    if action.action_type == ActionType.ADVANCE_ROOM:
        return "go to the next room"

    card = state.room_cards[action.slot_index]
    if action.action_type == ActionType.FIGHT_BARE_HANDED:
        return f"fight the {card} bare-handed"
    if card.is_weapon:
        return f"equip the {card}"
    if card.is_potion:
        if state.potion_used_this_room:
            return f"throw away the {card}"
        return f"drink the {card}"
    if state.current_weapon:
        return f"fight the {card} with the {state.current_weapon}"
    return f"fight the {card} bare-handed"


@dataclass
class BotDecision:
    """The chosen action and why. ``scores`` is filled by lookahead bots."""
    action: Action
    explanation: str = ""
    scores: dict[str, float] = field(default_factory=dict)


class BotPolicy(ABC):
    """Picks one of the legal actions for a state."""

    @abstractmethod
    def select_action(self, state: GameState, legal_actions: list[Action]) -> BotDecision:
        """
        Args:
            state: Snapshot of the game (safe to inspect, never applied to)
            legal_actions: Non-empty list from legal_actions()

        Raises ValueError when there is nothing to choose from.
        """

    def get_name(self) -> str:
        return self.__class__.__name__


class RandomPolicy(BotPolicy):
    """Uniform choice among legal actions. Seeded for repeatable games."""

    def __init__(self, seed: int | None = None):
        self.rng = random.Random(seed)

    def select_action(self, state: GameState, legal_actions: list[Action]) -> BotDecision:
        if not legal_actions:
            raise ValueError("No legal actions available")

        action = self.rng.choice(legal_actions)
        return BotDecision(action=action, explanation=f"Random: {describe_move(state, action)}")


class FirstLegalPolicy(BotPolicy):
    """
    Always the first legal action: the leftmost card, fought with the
    weapon when it can be. Deterministic; used by tests and the CLI.
    """

    def select_action(self, state: GameState, legal_actions: list[Action]) -> BotDecision:
        if not legal_actions:
            raise ValueError("No legal actions available")

        action = legal_actions[0]
        return BotDecision(action=action, explanation=f"First: {describe_move(state, action)}")
