"""
Engine Core - Deterministic Scoundrel rules engine.

The engine:
1. Builds and shuffles the trimmed 44-card deck
2. Owns the GameState
3. Validates and applies player commands
4. Resolves potions, weapons and combat
5. Detects victory and defeat in one place
"""

from .deck import (
    Card,
    Suit,
    Rank,
    DeckError,
    InsufficientCardsError,
    InvalidDeckError,
    create_deck,
    trim_for_variant,
    shuffle,
    deal,
)
from .state import GameState, GameResult, Zone
from .action import Action, ActionType, ActionResult, CardMove, ErrorCode, Outcome, SkipReason
from .combat import can_attack, resolve_combat, check_weapon_stack
from .engine import Engine
from .action_generator import ActionGenerator, legal_actions

__all__ = [
    "Card",
    "Suit",
    "Rank",
    "DeckError",
    "InsufficientCardsError",
    "InvalidDeckError",
    "create_deck",
    "trim_for_variant",
    "shuffle",
    "deal",
    "GameState",
    "GameResult",
    "Zone",
    "Action",
    "ActionType",
    "ActionResult",
    "CardMove",
    "ErrorCode",
    "Outcome",
    "SkipReason",
    "can_attack",
    "resolve_combat",
    "check_weapon_stack",
    "Engine",
    "ActionGenerator",
    "legal_actions",
]
