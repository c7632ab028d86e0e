"""
Heuristic Evaluator - Scores game states for bot decision-making.

The evaluator assigns a numeric score to a game state based on:
- Survival (health, game result)
- Equipment (weapon value, how much of the weapon stack is left)
- Potion availability this room

Weights can be adjusted to create different play styles.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import random

from ..engine_core.action import Action
from ..engine_core.engine import Engine
from ..engine_core.state import GameState, GameResult
from .policy import BotPolicy, BotDecision, describe_move

# A weapon with no defeated monsters can fight anything
OPEN_STACK_CEILING = 14


@dataclass
class EvaluationWeights:
    """
    Weights for the heuristic evaluator.

    Higher values = more importance.
    """
    health: float = 1.0
    weapon_value: float = 0.6
    stack_ceiling: float = 0.25
    potion_available: float = 1.5
    victory: float = 1000.0
    defeat: float = -1000.0


@dataclass
class StateEvaluation:
    """Result of evaluating a game state."""
    total_score: float
    feature_breakdown: dict[str, float] = field(default_factory=dict)


class HeuristicEvaluator:
    """
    Evaluates game states using weighted heuristics.

    Used by GreedyPolicy for 1-ply lookahead:
    1. Apply each legal action on a sandbox engine
    2. Evaluate the resulting states
    3. Select the action leading to the best state
    """

    def __init__(self, weights: EvaluationWeights | None = None):
        self.weights = weights or EvaluationWeights()

    def evaluate(self, state: GameState) -> StateEvaluation:
        w = self.weights
        features: dict[str, float] = {}

        if state.result == GameResult.VICTORY:
            features["victory"] = w.victory + state.score
        elif state.result == GameResult.DEFEAT:
            features["defeat"] = w.defeat + state.score

        features["health"] = w.health * state.player_health

        if state.current_weapon:
            features["weapon_value"] = w.weapon_value * state.current_weapon.value
            last = state.last_defeated_monster
            ceiling = last.value if last else OPEN_STACK_CEILING
            features["stack_ceiling"] = w.stack_ceiling * ceiling

        if not state.potion_used_this_room and any(c.is_potion for c in state.room_cards):
            features["potion_available"] = w.potion_available

        return StateEvaluation(
            total_score=sum(features.values()),
            feature_breakdown=features,
        )


class GreedyPolicy(BotPolicy):
    """
    One-ply lookahead: pick the action whose resulting state scores best.

    Ties go to the earliest action in legal order.
    """

    def __init__(self, evaluator: HeuristicEvaluator | None = None, seed: int | None = None):
        self.evaluator = evaluator or HeuristicEvaluator()
        self.seed = seed

    def select_action(self, state: GameState, legal_actions: list[Action]) -> BotDecision:
        if not legal_actions:
            raise ValueError("No legal actions available")

        best_action = None
        best_score = float("-inf")
        scores: dict[str, float] = {}

        for action in legal_actions:
            sandbox = Engine.from_state(state, rng=random.Random(self.seed))
            result = sandbox.apply(action)
            if not result.success:
                continue
            score = self.evaluator.evaluate(sandbox.state).total_score
            scores[action.describe()] = score
            if score > best_score:
                best_action, best_score = action, score

        if best_action is None:
            raise ValueError("No legal action could be applied")

        return BotDecision(
            action=best_action,
            explanation=f"{describe_move(state, best_action)} (score {best_score:.1f})",
            scores=scores,
        )
