"""
API Module - Presentation-layer interface.

Exposes the engine to front-ends in-process:
1. Create and end sessions
2. Issue commands by room slot
3. Read state snapshots and legal actions

Responses are pydantic models, ready to serialize.
"""

from .schemas import (
    SessionStatus,
    ErrorCode,
    CardInfo,
    CardMoveInfo,
    GameStateResponse,
    OutcomeResponse,
    CommandResponse,
    ErrorResponse,
    SessionResponse,
    ActionInfo,
    LegalActionsResponse,
    SessionListResponse,
)
from .service import GameService

__all__ = [
    "SessionStatus",
    "ErrorCode",
    "CardInfo",
    "CardMoveInfo",
    "GameStateResponse",
    "OutcomeResponse",
    "CommandResponse",
    "ErrorResponse",
    "SessionResponse",
    "ActionInfo",
    "LegalActionsResponse",
    "SessionListResponse",
    "GameService",
]
