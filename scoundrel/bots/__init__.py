"""
Bots module - Automatic players.

Provides:
- BotPolicy: Interface for bot decision-making
- RandomPolicy / FirstLegalPolicy: Baselines
- HeuristicEvaluator + GreedyPolicy: 1-ply lookahead
"""

from __future__ import annotations

from .policy import BotPolicy, BotDecision, RandomPolicy, FirstLegalPolicy, describe_move
from .evaluator import HeuristicEvaluator, EvaluationWeights, GreedyPolicy

POLICY_NAMES = ("random", "first", "greedy")


def create_policy(name: str, seed: int | None = None) -> BotPolicy:
    """Build a policy by name."""
    if name == "random":
        return RandomPolicy(seed)
    if name == "first":
        return FirstLegalPolicy()
    if name == "greedy":
        return GreedyPolicy(seed=seed)
    raise ValueError(f"Unknown policy: {name}")


__all__ = [
    "BotPolicy",
    "BotDecision",
    "describe_move",
    "RandomPolicy",
    "FirstLegalPolicy",
    "HeuristicEvaluator",
    "EvaluationWeights",
    "GreedyPolicy",
    "POLICY_NAMES",
    "create_policy",
]
