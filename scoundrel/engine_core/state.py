"""
Game State - The single mutable aggregate for one Scoundrel game.

Design principles:
- Owned by the engine: callers only see clones
- Serializable: plain lists of immutable cards
- Closed system: the 44 cards move between zones, never appear or vanish
"""

from __future__ import annotations
from dataclasses import dataclass, field
from copy import deepcopy
from enum import Enum

from ..config import DEFAULT_MAX_HEALTH
from .deck import Card


class Zone(Enum):
    """Places a card can be."""
    DECK = "deck"
    ROOM = "room"
    DISCARD = "discard"
    WEAPON = "weapon"
    WEAPON_STACK = "weapon_stack"
    CARRY_OVER = "carry_over"


class GameResult(Enum):
    """How a finished game ended."""
    VICTORY = "victory"
    DEFEAT = "defeat"


@dataclass
class GameState:
    """
    Complete game state at a point in time.

    All mutation goes through the Engine.
    """
    player_health: int = DEFAULT_MAX_HEALTH
    max_health: int = DEFAULT_MAX_HEALTH
    current_weapon: Card | None = None

    # Zones (front of deck = next to draw, end of discard = top)
    deck: list[Card] = field(default_factory=list)
    discard_pile: list[Card] = field(default_factory=list)
    room_cards: list[Card] = field(default_factory=list)
    weapon_stack: list[Card] = field(default_factory=list)
    carry_over_card: Card | None = None

    current_round: int = 0
    game_active: bool = False
    score: int = 0
    result: GameResult | None = None

    # Per-room counters
    cards_played_this_room: int = 0
    potion_used_this_room: bool = False
    last_action_was_skip: bool = False

    @property
    def last_defeated_monster(self) -> Card | None:
        return self.weapon_stack[-1] if self.weapon_stack else None

    @property
    def is_over(self) -> bool:
        return self.result is not None

    def total_cards(self) -> int:
        """Count of every card in every zone."""
        return (
            len(self.deck)
            + len(self.room_cards)
            + len(self.discard_pile)
            + len(self.weapon_stack)
            + (1 if self.carry_over_card else 0)
            + (1 if self.current_weapon else 0)
        )

    def all_cards(self) -> list[Card]:
        cards = self.deck + self.room_cards + self.discard_pile + self.weapon_stack
        if self.carry_over_card:
            cards.append(self.carry_over_card)
        if self.current_weapon:
            cards.append(self.current_weapon)
        return cards

    def clone(self) -> GameState:
        """Deep copy the state."""
        return deepcopy(self)
