"""
Tests for sessions and the game loop.
"""

from dataclasses import fields
import threading

import pytest

from ..bots import FirstLegalPolicy
from ..config import EngineConfig
from ..engine_core.action import Action, ErrorCode
from ..engine_core.action_generator import legal_actions
from ..session import GameLoop, LoopState, Session, SessionManager, SessionState


@pytest.fixture
def manager():
    return SessionManager()


class TestSessionManager:
    """Tests for session lifecycle."""

    def test_create_starts_game(self, manager):
        session = manager.create_session(seed=3)
        assert session.is_active()
        assert session.seed == 3
        assert session.engine.state.game_active
        assert len(session.engine.state.room_cards) == 4
        assert session.session_id in manager.list_active_sessions()

    def test_same_seed_same_game(self, manager):
        a = manager.create_session(seed=11)
        b = manager.create_session(seed=11)
        assert a.session_id != b.session_id
        assert a.snapshot() == b.snapshot()

    def test_config_applies(self):
        manager = SessionManager(EngineConfig(max_health=7))
        session = manager.create_session(seed=1)
        assert session.engine.state.player_health == 7

    def test_dispatch_counts_successes(self, manager):
        session = manager.create_session(seed=3)
        manager.dispatch(session.session_id, Action.advance_room())
        assert session.commands_applied == 0
        result = manager.dispatch(session.session_id, Action.skip_room())
        assert result.success
        assert session.commands_applied == 1

    def test_dispatch_unknown_session(self, manager):
        with pytest.raises(KeyError):
            manager.dispatch("missing", Action.skip_room())

    def test_end_session(self, manager):
        session = manager.create_session(seed=3)
        assert manager.end_session(session.session_id)
        assert manager.get_session(session.session_id) is None
        assert session.state == SessionState.ABANDONED
        assert not session.engine.state.game_active
        assert session.engine.state.deck == []
        assert not manager.end_session(session.session_id)

    def test_game_over_state(self, manager):
        session = manager.create_session(seed=3)
        GameLoop(session, FirstLegalPolicy(), max_turns=500).run()
        if session.engine.state.is_over:
            assert session.state == SessionState.GAME_OVER
            manager.end_session(session.session_id)
            assert session.state == SessionState.GAME_OVER

    def test_restart(self, manager):
        session = manager.create_session(seed=3)
        manager.dispatch(session.session_id, Action.skip_room())
        state = session.restart(seed=4)
        assert session.seed == 4
        assert session.commands_applied == 0
        assert session.is_active()
        assert session.engine.action_history == []
        assert state.total_cards() == 44

    def test_commands_serialized(self, manager):
        """Concurrent skips: exactly one succeeds."""
        session = manager.create_session(seed=3)
        results = []

        def skip():
            results.append(session.dispatch(Action.skip_room()))

        threads = [threading.Thread(target=skip) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sum(r.success for r in results) == 1
        assert all(
            r.error_code == ErrorCode.CANNOT_SKIP for r in results if not r.success
        )
        assert session.engine.state.total_cards() == 44

    def test_legal_actions_wait_for_lock(self, manager):
        """Reading legal actions waits for a command in progress."""
        session = manager.create_session(seed=3)
        results = []
        reader = threading.Thread(target=lambda: results.append(session.legal_actions()))

        with session._lock:
            reader.start()
            reader.join(timeout=0.1)
            assert reader.is_alive()
        reader.join()

        assert results == [legal_actions(session.engine)]

    def test_session_fields(self):
        """A session holds only its engine and bookkeeping."""
        assert {f.name for f in fields(Session)} == {
            "session_id", "engine", "created_at", "seed",
            "state", "commands_applied", "_lock",
        }


class TestGameLoop:
    """Tests for the autoplay driver."""

    def test_run_reports(self, manager):
        session = manager.create_session(seed=8)
        report = GameLoop(session, FirstLegalPolicy(), max_turns=500).run()

        assert report.loop_state in (LoopState.GAME_OVER, LoopState.TURN_LIMIT)
        assert report.turns
        assert report.turns[0].turn == 1
        assert report.rooms_entered == session.engine.state.current_round + 1
        assert report.score == session.engine.state.score
        assert report.won == (report.result is not None and report.result.value == "victory")

    def test_turn_limit(self, manager):
        session = manager.create_session(seed=8)
        report = GameLoop(session, FirstLegalPolicy(), max_turns=1).run()
        assert report.loop_state == LoopState.TURN_LIMIT
        assert len(report.turns) == 1

    def test_step_on_finished_game(self, manager):
        session = manager.create_session(seed=8)
        session.engine.update_health(-100)
        loop = GameLoop(session, FirstLegalPolicy())
        assert loop.step() is None
        assert loop.loop_state == LoopState.GAME_OVER
