"""
Tests for the end of the game.

Tests:
- Victory when the dungeon runs out
- Defeat at zero health
- Scoring
- Commands after the game ends
"""

from ..engine_core.action import ErrorCode
from ..engine_core.rules import check_game_end, compute_score, is_victory
from ..engine_core.state import GameResult, GameState
from .helpers import card, cards


class TestVictory:
    """Tests for winning."""

    def test_victory_on_advance_with_empty_dungeon(self, make_engine):
        """Three played, nothing left to deal: advancing wins."""
        engine = make_engine(room=["7_of_spades"], played=3, health=12)
        result = engine.advance_room()

        assert result.success
        assert result.outcome.game_ended
        assert result.outcome.result == GameResult.VICTORY
        state = engine.state
        assert state.result == GameResult.VICTORY
        assert not state.game_active
        assert state.carry_over_card == card("7_of_spades")
        assert state.score == 12

    def test_victory_with_carry_over_already_set(self, make_engine):
        """An empty dungeon with a card waiting to carry over is a win."""
        engine = make_engine(carry="9_of_clubs", played=3, health=5)
        result = engine.advance_room()

        assert result.success
        assert not engine.state.game_active
        assert engine.state.result == GameResult.VICTORY
        assert engine.state.player_health > 0
        assert engine.state.score == 5

    def test_victory_with_leftover_potion_scores_bonus(self, make_engine):
        """An unused potion carried over adds its value."""
        engine = make_engine(room=["6_of_hearts"], played=3, health=20)
        engine.advance_room()
        assert engine.state.result == GameResult.VICTORY
        assert engine.state.score == 26

    def test_victory_when_too_few_cards_remain(self, make_engine):
        """Two cards left cannot make a room of three new cards."""
        engine = make_engine(
            room=["7_of_spades"], deck=["2_of_clubs"], discard=["3_of_clubs"], played=3
        )
        engine.advance_room()
        assert engine.state.result == GameResult.VICTORY
        assert engine.state.deck == cards("2_of_clubs")

    def test_no_victory_before_advance(self, make_engine):
        """Clearing the last room still needs an advance."""
        engine = make_engine(room=["2_of_hearts", "7_of_spades"], played=2)
        result = engine.play_card(0)
        assert result.outcome.room_complete
        assert not result.outcome.game_ended
        assert engine.state.game_active
        assert engine.state.result is None

    def test_enough_cards_is_not_victory(self, make_engine):
        """Exactly three cards for the next room continues play."""
        engine = make_engine(
            room=["7_of_spades"], deck=["2_of_clubs", "3_of_clubs", "4_of_clubs"], played=3
        )
        engine.advance_room()
        assert engine.state.game_active
        assert engine.state.result is None

    def test_is_victory_needs_complete_room(self):
        """A room in progress is never a win."""
        state = GameState(game_active=True, cards_played_this_room=2)
        assert not is_victory(state)
        state.cards_played_this_room = 3
        assert is_victory(state)


class TestDefeat:
    """Tests for losing."""

    def test_defeat_at_zero_health(self, make_engine):
        """A monster that takes the last health ends the game."""
        engine = make_engine(
            room=["king_of_spades", "2_of_clubs", "3_of_clubs", "4_of_clubs"],
            deck=["5_of_spades", "2_of_hearts"],
            health=13,
        )
        result = engine.play_card(0)

        assert result.success
        assert result.outcome.game_ended
        assert result.outcome.result == GameResult.DEFEAT
        state = engine.state
        assert state.player_health == 0
        assert not state.game_active
        assert state.result == GameResult.DEFEAT
        # 0 - (2 + 3 + 4 in the room + 5 in the deck)
        assert state.score == -14

    def test_defeat_counts_carry_over_monster(self):
        """A monster waiting as carry-over counts against the score."""
        state = GameState(
            player_health=0,
            deck=cards("2_of_hearts"),
            carry_over_card=card("9_of_clubs"),
        )
        assert compute_score(state, GameResult.DEFEAT) == -9

    def test_update_health_to_zero_ends_game(self, engine):
        """Direct health changes also end the game."""
        applied = engine.update_health(-100)
        assert applied == -20
        assert engine.state.result == GameResult.DEFEAT
        assert not engine.state.game_active

    def test_update_health_clamps(self, engine):
        """Health stays within bounds."""
        assert engine.update_health(5) == 0
        assert engine.update_health(-3) == -3
        assert engine.update_health(10) == 3
        assert engine.state.player_health == 20


class TestAfterGameEnd:
    """Tests for a finished game."""

    def test_commands_rejected(self, make_engine):
        """Every command fails once the game is over."""
        engine = make_engine(room=["7_of_spades"], played=3)
        engine.advance_room()
        before = engine.snapshot()

        for result in (
            engine.play_card(0),
            engine.equip_weapon(0),
            engine.fight_bare_handed(0),
            engine.advance_room(),
        ):
            assert result.error_code == ErrorCode.GAME_NOT_ACTIVE
        assert engine.skip_room().error_code == ErrorCode.CANNOT_SKIP
        assert engine.state == before

    def test_update_health_no_effect(self, make_engine):
        """Health is frozen after the game ends."""
        engine = make_engine(room=["7_of_spades"], played=3, health=9)
        engine.advance_room()
        assert engine.update_health(5) == 0
        assert engine.state.player_health == 9
        assert engine.state.score == 9

    def test_result_is_sticky(self):
        """A decided game stays decided."""
        state = GameState(player_health=0, game_active=True)
        assert check_game_end(state) == GameResult.DEFEAT
        state.player_health = 5
        assert check_game_end(state) == GameResult.DEFEAT
