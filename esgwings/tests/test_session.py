"""
Tests for session management.
"""

import pytest

from ..engine_core.action import Action, ErrorCode
from ..engine_core.state import GameMode, GamePhase
from ..session import SessionManager


@pytest.fixture
def manager(catalog):
    return SessionManager(catalog=catalog)


class TestSessionManager:
    """Tests for SessionManager."""

    def test_create_and_get(self, manager):
        session = manager.create_session(player_count=3, max_rounds=4, seed=1)
        assert manager.get_session(session.session_id) is session
        assert session.game_state.num_players == 3
        assert session.game_state.max_rounds == 4
        assert session.is_active()

    def test_sessions_are_independent(self, manager):
        a = manager.create_session(2, 5, seed=1)
        b = manager.create_session(2, 5, seed=1)
        assert a.session_id != b.session_id
        a.apply(Action.process_event())
        assert b.game_state.phase == GamePhase.EVENT

    def test_invalid_parameters_raise(self, manager):
        with pytest.raises(ValueError):
            manager.create_session(player_count=7, max_rounds=5)

    def test_end_session_drops_state(self, manager):
        session = manager.create_session(2, 5)
        assert manager.end_session(session.session_id)
        assert manager.get_session(session.session_id) is None
        assert not manager.end_session(session.session_id)

    def test_list_active_sessions(self, manager):
        live = manager.create_session(2, 5)
        done = manager.create_session(2, 5)
        done.game_state = done.game_state._copy_with(winner_id="P1")
        assert manager.list_active_sessions() == [live.session_id]
        assert len(manager.list_sessions()) == 2

    def test_cleanup_stale_sessions(self, manager):
        stale = manager.create_session(2, 5)
        stale.game_state = stale.game_state._copy_with(last_interaction_at=0.0)
        fresh = manager.create_session(2, 5)

        assert manager.cleanup_stale_sessions(max_age_seconds=60) == 1
        assert manager.get_session(stale.session_id) is None
        assert manager.get_session(fresh.session_id) is fresh


class TestSessionApply:
    """Tests for Session.apply."""

    def test_applied_action_updates_state(self, manager):
        session = manager.create_session(2, 5, seed=3)
        result = session.apply(Action.process_event())
        assert result.success
        assert session.game_state is result.new_state
        assert session.game_state.phase == GamePhase.ACTION

    def test_rejected_action_keeps_state(self, manager):
        session = manager.create_session(2, 5, seed=3)
        before = session.game_state
        result = session.apply(Action.end_turn())
        assert result.error_code == ErrorCode.WRONG_PHASE
        assert session.game_state is before

    def test_demo_mode_session(self, manager):
        session = manager.create_session(2, 5, mode=GameMode.DEMO)
        assert session.game_state.game_mode == GameMode.DEMO
