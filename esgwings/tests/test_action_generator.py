"""
Tests for legal action generation and the autoplay heuristic.
"""

from ..engine_core.action import ActionType
from ..engine_core.action_generator import AutoMoveKind, get_auto_move, legal_actions
from ..engine_core.state import GamePhase
from .conftest import make_player, make_state


class TestAutoMove:
    """Tests for get_auto_move."""

    def test_first_affordable_in_hand_order(self, tiny_catalog):
        state = make_state([make_player("P1", budget=1, hand=("A_BIG", "A_CHEAP", "A_DRAIN"))])
        move = get_auto_move(tiny_catalog, state)
        assert move.action == AutoMoveKind.PLAY
        assert move.card_id == "A_CHEAP"

    def test_end_when_nothing_affordable(self, tiny_catalog):
        state = make_state([make_player("P1", budget=0, hand=("A_BIG", "A_CHEAP"))])
        move = get_auto_move(tiny_catalog, state)
        assert move.action == AutoMoveKind.END
        assert move.card_id is None
        assert move.to_action().action_type == ActionType.END_TURN

    def test_empty_hand_ends(self, tiny_catalog):
        state = make_state([make_player("P1", hand=())])
        assert get_auto_move(tiny_catalog, state).action == AutoMoveKind.END

    def test_to_action_plays_card(self, tiny_catalog):
        state = make_state([make_player("P1", budget=3, hand=("A_BIG",))])
        action = get_auto_move(tiny_catalog, state).to_action()
        assert action.action_type == ActionType.PLAY_CARD
        assert action.card_id == "A_BIG"


class TestLegalActions:
    """Tests for legal_actions."""

    def test_action_phase_options(self, tiny_catalog):
        state = make_state([make_player("P1", budget=1, hand=("A_CHEAP", "A_CHEAP", "A_BIG"))])
        actions = legal_actions(tiny_catalog, state)
        types = [a.action_type for a in actions]
        assert types == [ActionType.PLAY_CARD, ActionType.REFRESH_HAND, ActionType.END_TURN]
        assert actions[0].card_id == "A_CHEAP"

    def test_no_refresh_without_budget(self, tiny_catalog):
        state = make_state([make_player("P1", budget=0, hand=("A_DRAIN",))])
        types = [a.action_type for a in legal_actions(tiny_catalog, state)]
        assert types == [ActionType.PLAY_CARD, ActionType.END_TURN]

    def test_event_phase(self, tiny_catalog):
        state = make_state([make_player("P1")], phase=GamePhase.EVENT)
        assert [a.action_type for a in legal_actions(tiny_catalog, state)] == [ActionType.PROCESS_EVENT]

    def test_resolution_phase(self, tiny_catalog):
        state = make_state([make_player("P1")], phase=GamePhase.RESOLUTION)
        actions = legal_actions(tiny_catalog, state)
        assert [a.action_type for a in actions] == [ActionType.PROCESS_RESOLUTION]

    def test_none_after_game_over(self, tiny_catalog):
        state = make_state([make_player("P1")])._copy_with(winner_id="P1")
        assert legal_actions(tiny_catalog, state) == []
