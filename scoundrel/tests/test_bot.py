"""
Tests for bot action selection.

Tests:
- Bots select legal actions
- Evaluator features
- Greedy lookahead avoids obvious blunders
"""

import pytest

from ..bots import (
    POLICY_NAMES,
    EvaluationWeights,
    FirstLegalPolicy,
    GreedyPolicy,
    HeuristicEvaluator,
    RandomPolicy,
    create_policy,
    describe_move,
)
from ..engine_core.action import Action
from ..engine_core.action_generator import legal_actions
from ..engine_core.state import GameResult, GameState
from .helpers import card, cards


class TestBotActionLegality:
    """Tests that bots only select legal actions."""

    def test_random_bot_selects_legal(self, engine):
        """Random bot selects legal actions."""
        legal = legal_actions(engine)
        bot = RandomPolicy(seed=42)

        for _ in range(10):
            decision = bot.select_action(engine.snapshot(), legal)
            assert decision.action in legal

    def test_random_bot_seeded(self, engine):
        """Same seed, same choices."""
        legal = legal_actions(engine)
        a = [RandomPolicy(seed=3).select_action(engine.state, legal).action for _ in range(5)]
        b = [RandomPolicy(seed=3).select_action(engine.state, legal).action for _ in range(5)]
        assert a == b

    def test_first_legal(self, engine):
        legal = legal_actions(engine)
        assert FirstLegalPolicy().select_action(engine.state, legal).action == legal[0]

    def test_no_actions_raises(self, engine):
        """Bots need something to choose from."""
        for bot in (RandomPolicy(1), FirstLegalPolicy(), GreedyPolicy()):
            with pytest.raises(ValueError):
                bot.select_action(engine.state, [])

    def test_greedy_selects_legal(self, engine):
        legal = legal_actions(engine)
        decision = GreedyPolicy(seed=0).select_action(engine.snapshot(), legal)
        assert decision.action in legal
        assert len(decision.scores) == len(legal)
        assert decision.scores[decision.action.describe()] == max(decision.scores.values())

    def test_greedy_does_not_touch_state(self, engine):
        """Lookahead runs on copies."""
        before = engine.snapshot()
        GreedyPolicy(seed=0).select_action(engine.state, legal_actions(engine))
        assert engine.state == before


class TestCreatePolicy:
    """Tests for building policies by name."""

    def test_all_names(self):
        for name in POLICY_NAMES:
            assert create_policy(name, seed=1).get_name().endswith("Policy")

    def test_unknown_name(self):
        with pytest.raises(ValueError):
            create_policy("clairvoyant")


class TestEvaluator:
    """Tests for the heuristic evaluator."""

    def test_health_counts(self):
        evaluator = HeuristicEvaluator()
        low = evaluator.evaluate(GameState(player_health=5))
        high = evaluator.evaluate(GameState(player_health=15))
        assert high.total_score > low.total_score

    def test_result_dominates(self):
        evaluator = HeuristicEvaluator()
        won = evaluator.evaluate(GameState(player_health=1, result=GameResult.VICTORY, score=1))
        lost = evaluator.evaluate(GameState(player_health=0, result=GameResult.DEFEAT, score=-30))
        alive = evaluator.evaluate(GameState(player_health=20))
        assert won.total_score > alive.total_score > lost.total_score

    def test_weapon_features(self):
        state = GameState(current_weapon=card("8_of_diamonds"))
        features = HeuristicEvaluator().evaluate(state).feature_breakdown
        assert features["weapon_value"] == pytest.approx(0.6 * 8)
        assert features["stack_ceiling"] == pytest.approx(0.25 * 14)

        state.weapon_stack = cards("5_of_clubs")
        features = HeuristicEvaluator().evaluate(state).feature_breakdown
        assert features["stack_ceiling"] == pytest.approx(0.25 * 5)

    def test_potion_available(self):
        state = GameState(room_cards=cards("4_of_hearts"))
        assert "potion_available" in HeuristicEvaluator().evaluate(state).feature_breakdown
        state.potion_used_this_room = True
        assert "potion_available" not in HeuristicEvaluator().evaluate(state).feature_breakdown

    def test_custom_weights(self):
        evaluator = HeuristicEvaluator(EvaluationWeights(health=2.0))
        assert evaluator.evaluate(GameState(player_health=10)).feature_breakdown["health"] == 20.0


class TestGreedyChoices:
    """Greedy lookahead on arranged positions."""

    def test_uses_weapon_over_bare_hands(self, make_engine):
        engine = make_engine(
            room=["9_of_spades", "2_of_clubs", "3_of_clubs", "4_of_clubs"],
            weapon="8_of_diamonds",
            played=2,
        )
        decision = GreedyPolicy(seed=0).select_action(engine.state, legal_actions(engine))
        assert decision.action.describe() != "fight_bare_handed[0]"

    def test_avoids_lethal_monster(self, make_engine):
        """With one play left, take the potion rather than die."""
        engine = make_engine(room=["king_of_spades", "5_of_hearts"], played=2, health=4)
        decision = GreedyPolicy(seed=0).select_action(engine.state, legal_actions(engine))
        assert decision.action.describe() == "play_card[1]"


class TestDescribeMove:
    """Explanations name the card and what happens to it."""

    def test_card_moves(self, make_engine):
        engine = make_engine(
            room=["4_of_hearts", "7_of_diamonds", "9_of_spades", "2_of_clubs"],
            weapon="5_of_diamonds",
        )
        state = engine.state
        assert describe_move(state, Action.play_card(0)) == "drink the 4 of hearts"
        assert describe_move(state, Action.equip_weapon(1)) == "equip the 7 of diamonds"
        assert describe_move(state, Action.play_card(2)) == "fight the 9 of spades with the 5 of diamonds"
        assert describe_move(state, Action.fight_bare_handed(3)) == "fight the 2 of clubs bare-handed"

    def test_room_moves(self, engine):
        assert describe_move(engine.state, Action.skip_room()) == "run from the room"
        assert describe_move(engine.state, Action.advance_room()) == "go to the next room"

    def test_second_potion(self, make_engine):
        engine = make_engine(room=["6_of_hearts"], potion_used=True, played=2)
        assert describe_move(engine.state, Action.play_card(0)) == "throw away the 6 of hearts"

    def test_no_weapon_fight(self, make_engine):
        engine = make_engine(room=["jack_of_clubs"], played=2)
        assert describe_move(engine.state, Action.play_card(0)) == "fight the jack of clubs bare-handed"

    def test_decisions_explain_the_move(self, make_engine):
        engine = make_engine(room=["4_of_hearts"], played=2, health=10)
        legal = legal_actions(engine)
        assert FirstLegalPolicy().select_action(engine.state, legal).explanation == "First: drink the 4 of hearts"
        assert RandomPolicy(0).select_action(engine.state, legal).explanation == "Random: drink the 4 of hearts"
        greedy = GreedyPolicy(seed=0).select_action(engine.state, legal)
        assert greedy.explanation.startswith("drink the 4 of hearts (score ")
