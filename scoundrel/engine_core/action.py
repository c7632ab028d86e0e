"""
Action System - Actions, outcomes, and results.

Actions represent the five player commands. Every command returns an
ActionResult: either a failure with an ErrorCode, or a success carrying
an Outcome the presentation layer can render from.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .deck import Card
from .state import GameResult, Zone


class ActionType(Enum):
    """Types of player commands."""
    PLAY_CARD = "play_card"
    EQUIP_WEAPON = "equip_weapon"
    FIGHT_BARE_HANDED = "fight_bare_handed"
    SKIP_ROOM = "skip_room"
    ADVANCE_ROOM = "advance_room"


class ErrorCode(Enum):
    """Structured failure codes. All are recoverable."""
    GAME_NOT_ACTIVE = "GAME_NOT_ACTIVE"
    ROOM_ALREADY_FULL = "ROOM_ALREADY_FULL"
    ROOM_NOT_COMPLETE = "ROOM_NOT_COMPLETE"
    CANNOT_SKIP = "CANNOT_SKIP"
    INVALID_EQUIP = "INVALID_EQUIP"
    WEAPON_TOO_WEAK = "WEAPON_TOO_WEAK"
    INVALID_SLOT = "INVALID_SLOT"
    NOT_A_MONSTER = "NOT_A_MONSTER"


class SkipReason(Enum):
    """Why a room could not be skipped."""
    GAME_NOT_ACTIVE = "game_not_active"
    ALREADY_SKIPPED = "already_skipped"
    WRONG_CARD_COUNT = "wrong_card_count"
    CARDS_ALREADY_PLAYED = "cards_already_played"


@dataclass
class Action:
    """A player command, as a value."""
    action_type: ActionType
    slot_index: int | None = None

    @classmethod
    def play_card(cls, slot_index: int) -> Action:
        return cls(ActionType.PLAY_CARD, slot_index)

    @classmethod
    def equip_weapon(cls, slot_index: int) -> Action:
        return cls(ActionType.EQUIP_WEAPON, slot_index)

    @classmethod
    def fight_bare_handed(cls, slot_index: int) -> Action:
        return cls(ActionType.FIGHT_BARE_HANDED, slot_index)

    @classmethod
    def skip_room(cls) -> Action:
        return cls(ActionType.SKIP_ROOM)

    @classmethod
    def advance_room(cls) -> Action:
        return cls(ActionType.ADVANCE_ROOM)

    def describe(self) -> str:
        if self.slot_index is None:
            return self.action_type.value
        return f"{self.action_type.value}[{self.slot_index}]"


@dataclass(frozen=True)
class CardMove:
    """One card moving between zones."""
    card: Card
    source: Zone
    target: Zone


@dataclass
class Outcome:
    """
    What a successful command did.

    Contains:
    - Human-readable events (for a message feed)
    - Health delta actually applied
    - Card movements, in order
    - Room / game end flags
    """
    events: list[str] = field(default_factory=list)
    health_delta: int = 0
    moves: list[CardMove] = field(default_factory=list)
    room_complete: bool = False
    game_ended: bool = False
    result: GameResult | None = None
    room_cards: list[Card] = field(default_factory=list)

    def move(self, card: Card, source: Zone, target: Zone):
        self.moves.append(CardMove(card=card, source=source, target=target))

    def event(self, message: str):
        self.events.append(message)


@dataclass
class ActionResult:
    """
    Result of applying a command.

    On failure the game state is unchanged.
    """
    success: bool
    outcome: Outcome | None = None
    error: str | None = None
    error_code: ErrorCode | None = None
    reason: SkipReason | None = None

    # Snapshot after the command (success only)
    new_state: Any | None = None

    @classmethod
    def failure(
        cls,
        error: str,
        error_code: ErrorCode,
        reason: SkipReason | None = None,
    ) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code, reason=reason)

    @classmethod
    def success_with_outcome(cls, outcome: Outcome, state: Any = None) -> ActionResult:
        """Create a success result."""
        return cls(success=True, outcome=outcome, new_state=state)
