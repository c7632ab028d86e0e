"""
Session Manager - Creates and manages game sessions.

LIFECYCLE:
1. Front-end starts a session -> engine created, game started
2. During game: commands go through dispatch(), one at a time
3. Game ends -> session stays readable until ended or reset
4. end_session() destroys the session and its state

PERSISTENCE RULES:
- Sessions are in-memory only
- No state survives end_session()

CONCURRENCY:
- Each session owns a lock; dispatch() holds it for the whole command,
  so commands from an event-driven UI are applied strictly in order.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import logging
import random
import threading
import time
import uuid

from ..config import EngineConfig
from ..engine_core.action import Action, ActionResult
from ..engine_core.action_generator import legal_actions
from ..engine_core.engine import Engine
from ..engine_core.state import GameState

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State of a game session."""
    ACTIVE = "active"  # Game in progress
    GAME_OVER = "game_over"  # Victory or defeat reached
    ABANDONED = "abandoned"  # Ended before the game finished


@dataclass
class Session:
    """
    An ephemeral game session: one engine plus its bookkeeping.
    """
    session_id: str
    engine: Engine
    created_at: float
    seed: int | None = None

    state: SessionState = SessionState.ACTIVE
    commands_applied: int = 0

    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def is_active(self) -> bool:
        return self.state == SessionState.ACTIVE

    def dispatch(self, action: Action) -> ActionResult:
        """Apply one command while holding the session lock."""
        with self._lock:
            result = self.engine.apply(action)
            if result.success:
                self.commands_applied += 1
                if result.outcome.game_ended:
                    self.state = SessionState.GAME_OVER
            return result

    def restart(self, seed: int | None = None) -> GameState:
        """Reset the engine and start a fresh game in this session."""
        with self._lock:
            self.seed = seed
            self.engine.reset_game()
            self.commands_applied = 0
            self.state = SessionState.ACTIVE
            return self.engine.start_game(random.Random(seed))

    def snapshot(self) -> GameState:
        with self._lock:
            return self.engine.snapshot()

    def legal_actions(self) -> list[Action]:
        """Commands that would succeed now, read under the session lock."""
        with self._lock:
            return legal_actions(self.engine)


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions with a started game
    - Track active sessions
    - Clean up ended sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(self, config: EngineConfig | None = None):
        self.config = config or EngineConfig()
        self._sessions: dict[str, Session] = {}
        self._lock = threading.Lock()

    def create_session(self, seed: int | None = None) -> Session:
        """Create a session and start its game."""
        engine = Engine(self.config)
        engine.start_game(random.Random(seed))

        session = Session(
            session_id=str(uuid.uuid4()),
            engine=engine,
            created_at=time.time(),
            seed=seed,
        )
        with self._lock:
            self._sessions[session.session_id] = session
        logger.info("Session %s created (seed=%s)", session.session_id, seed)
        return session

    def get_session(self, session_id: str) -> Session | None:
        return self._sessions.get(session_id)

    def dispatch(self, session_id: str, action: Action) -> ActionResult:
        """
        Apply a command to a session.

        Raises KeyError if the session does not exist.
        """
        session = self._sessions.get(session_id)
        if session is None:
            raise KeyError(session_id)
        return session.dispatch(action)

    def end_session(self, session_id: str) -> bool:
        """End a session and drop its state. Returns False if unknown."""
        with self._lock:
            session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        if session.state == SessionState.ACTIVE:
            session.state = SessionState.ABANDONED
        session.engine.reset_game()
        logger.info("Session %s ended (%s)", session_id, session.state.value)
        return True

    def list_active_sessions(self) -> list[str]:
        return list(self._sessions.keys())
