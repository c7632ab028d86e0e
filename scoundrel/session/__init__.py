"""
Session Module - Manages ephemeral game sessions.

A session represents one play-through:
- Created when a front-end starts a game
- Holds the engine and serializes its commands
- Destroyed when ended

Sessions are in-memory only.
"""

from .manager import SessionManager, Session, SessionState
from .game_loop import GameLoop, LoopState, TurnResult, GameReport

__all__ = [
    "SessionManager",
    "Session",
    "SessionState",
    "GameLoop",
    "LoopState",
    "TurnResult",
    "GameReport",
]
