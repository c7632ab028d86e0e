"""
Game Loop - Drives a game to the end with a bot policy.

The loop:
1. Enumerate legal actions
2. Ask the policy for a decision
3. Apply it through the session (or engine)
4. Record the turn
5. Repeat until the game ends or the turn limit is hit
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING
import logging

from ..engine_core.state import GameResult

if TYPE_CHECKING:
    from .manager import Session
    from ..bots.policy import BotPolicy

logger = logging.getLogger(__name__)

# Discard reshuffles can keep a game going for a long time
DEFAULT_MAX_TURNS = 2000


class LoopState(Enum):
    """State of the game loop."""
    RUNNING = "running"
    GAME_OVER = "game_over"
    TURN_LIMIT = "turn_limit"
    STUCK = "stuck"


@dataclass
class TurnResult:
    """One bot turn."""
    turn: int
    action: str
    events: list[str] = field(default_factory=list)
    health_after: int = 0
    explanation: str = ""


@dataclass
class GameReport:
    """
    Summary of an automatic game.
    """
    loop_state: LoopState
    result: GameResult | None = None
    score: int = 0
    rooms_entered: int = 0
    turns: list[TurnResult] = field(default_factory=list)

    @property
    def won(self) -> bool:
        return self.result == GameResult.VICTORY


class GameLoop:
    """
    The autoplay driver.

    Usage:
        loop = GameLoop(session, RandomPolicy(seed=1))
        report = loop.run()
    """

    def __init__(self, session: Session, policy: BotPolicy, max_turns: int = DEFAULT_MAX_TURNS):
        self.session = session
        self.policy = policy
        self.max_turns = max_turns
        self.loop_state = LoopState.RUNNING

    def step(self) -> TurnResult | None:
        """Play one bot turn. Returns None if no action was possible."""
        actions = self.session.legal_actions()
        if not actions:
            over = self.session.snapshot().is_over
            self.loop_state = LoopState.GAME_OVER if over else LoopState.STUCK
            return None

        decision = self.policy.select_action(self.session.snapshot(), actions)
        result = self.session.dispatch(decision.action)
        if not result.success:
            # Generated actions must always apply
            logger.error("Legal action %s was rejected: %s", decision.action.describe(), result.error)
            self.loop_state = LoopState.STUCK
            return None

        if result.outcome.game_ended:
            self.loop_state = LoopState.GAME_OVER

        return TurnResult(
            turn=self.session.commands_applied,
            action=decision.action.describe(),
            events=list(result.outcome.events),
            health_after=result.new_state.player_health,
            explanation=decision.explanation,
        )

    def run(self) -> GameReport:
        """Play until the game ends or the turn limit is reached."""
        turns: list[TurnResult] = []
        while self.loop_state == LoopState.RUNNING:
            if len(turns) >= self.max_turns:
                self.loop_state = LoopState.TURN_LIMIT
                logger.warning("Stopped after %d turns without a result", self.max_turns)
                break
            turn = self.step()
            if turn is not None:
                turns.append(turn)

        state = self.session.snapshot()
        return GameReport(
            loop_state=self.loop_state,
            result=state.result,
            score=state.score,
            rooms_entered=state.current_round + 1,
            turns=turns,
        )
