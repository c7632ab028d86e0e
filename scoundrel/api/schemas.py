"""
Pydantic Schemas - Response models for presentation layers.

These models are the serializable contract between the engine and any
front-end (terminal, web view, test harness). A front-end renders from
GameStateResponse and animates from OutcomeResponse.

Error Codes:
- Engine codes (GAME_NOT_ACTIVE, ROOM_ALREADY_FULL, ...) pass through unchanged
- SESSION_NOT_FOUND: Session does not exist or has ended
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from ..engine_core.action import ActionResult, Outcome
from ..engine_core.action import ErrorCode as EngineErrorCode
from ..engine_core.deck import Card
from ..engine_core.state import GameState


# =============================================================================
# Enums
# =============================================================================

class SessionStatus(str, Enum):
    """Session status values."""
    ACTIVE = "active"
    GAME_OVER = "game_over"
    ABANDONED = "abandoned"


# Every engine code, plus the one only the service can raise
ErrorCode = Enum(
    "ErrorCode",
    {**{code.name: code.value for code in EngineErrorCode}, "SESSION_NOT_FOUND": "SESSION_NOT_FOUND"},
    module=__name__,
    type=str,
)


# =============================================================================
# Shared Models
# =============================================================================

class CardInfo(BaseModel):
    """Card information for display."""
    card_id: str
    suit: str
    rank: str
    value: int
    role: str = Field(description="monster, weapon, or potion")

    model_config = {"from_attributes": True}

    @classmethod
    def from_card(cls, card: Card) -> "CardInfo":
        if card.is_monster:
            role = "monster"
        elif card.is_weapon:
            role = "weapon"
        else:
            role = "potion"
        return cls(
            card_id=card.id,
            suit=card.suit.value,
            rank=card.rank.label,
            value=card.value,
            role=role,
        )


class CardMoveInfo(BaseModel):
    """A card moving between zones, for animation."""
    card: CardInfo
    source: str
    target: str


# =============================================================================
# State and Outcome
# =============================================================================

class GameStateResponse(BaseModel):
    """Read-only view of the game for rendering."""
    player_health: int
    max_health: int
    current_weapon: Optional[CardInfo] = None
    weapon_stack: list[CardInfo] = Field(default_factory=list)
    room_cards: list[CardInfo] = Field(default_factory=list)
    carry_over_card: Optional[CardInfo] = None
    deck_count: int = 0
    discard_count: int = 0
    discard_top: Optional[CardInfo] = None
    current_round: int = 0
    game_active: bool = False
    score: int = 0
    result: Optional[str] = None
    cards_played_this_room: int = 0
    potion_used_this_room: bool = False
    last_action_was_skip: bool = False

    @classmethod
    def from_state(cls, state: GameState) -> "GameStateResponse":
        def info(card: Optional[Card]) -> Optional[CardInfo]:
            return CardInfo.from_card(card) if card else None

        return cls(
            player_health=state.player_health,
            max_health=state.max_health,
            current_weapon=info(state.current_weapon),
            weapon_stack=[CardInfo.from_card(c) for c in state.weapon_stack],
            room_cards=[CardInfo.from_card(c) for c in state.room_cards],
            carry_over_card=info(state.carry_over_card),
            deck_count=len(state.deck),
            discard_count=len(state.discard_pile),
            discard_top=info(state.discard_pile[-1] if state.discard_pile else None),
            current_round=state.current_round,
            game_active=state.game_active,
            score=state.score,
            result=state.result.value if state.result else None,
            cards_played_this_room=state.cards_played_this_room,
            potion_used_this_room=state.potion_used_this_room,
            last_action_was_skip=state.last_action_was_skip,
        )


class OutcomeResponse(BaseModel):
    """What a command did."""
    events: list[str] = Field(default_factory=list)
    health_delta: int = 0
    moves: list[CardMoveInfo] = Field(default_factory=list)
    room_complete: bool = False
    game_ended: bool = False
    result: Optional[str] = None

    @classmethod
    def from_outcome(cls, outcome: Outcome) -> "OutcomeResponse":
        return cls(
            events=list(outcome.events),
            health_delta=outcome.health_delta,
            moves=[
                CardMoveInfo(
                    card=CardInfo.from_card(m.card),
                    source=m.source.value,
                    target=m.target.value,
                )
                for m in outcome.moves
            ],
            room_complete=outcome.room_complete,
            game_ended=outcome.game_ended,
            result=outcome.result.value if outcome.result else None,
        )


class CommandResponse(BaseModel):
    """Response to a successful command."""
    success: bool = True
    outcome: OutcomeResponse
    state: GameStateResponse

    @classmethod
    def from_result(cls, result: ActionResult) -> "CommandResponse":
        return cls(
            outcome=OutcomeResponse.from_outcome(result.outcome),
            state=GameStateResponse.from_state(result.new_state),
        )


class ErrorResponse(BaseModel):
    """Standard error response."""
    success: bool = False
    error: str
    error_code: ErrorCode
    reason: Optional[str] = None

    @classmethod
    def from_result(cls, result: ActionResult) -> "ErrorResponse":
        return cls(
            error=result.error,
            error_code=ErrorCode(result.error_code.value),
            reason=result.reason.value if result.reason else None,
        )


# =============================================================================
# Session Models
# =============================================================================

class SessionResponse(BaseModel):
    """Session status with current state."""
    session_id: str
    status: SessionStatus
    seed: Optional[int] = None
    commands_applied: int = 0
    state: GameStateResponse


class ActionInfo(BaseModel):
    """A command a front-end can offer."""
    action_type: str
    slot_index: Optional[int] = None


class LegalActionsResponse(BaseModel):
    """Commands that would succeed right now."""
    session_id: str
    actions: list[ActionInfo] = Field(default_factory=list)


class SessionListResponse(BaseModel):
    """List of session IDs."""
    sessions: list[str]
    count: int
