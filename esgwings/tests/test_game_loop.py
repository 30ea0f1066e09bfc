"""
Tests for the demo loop driver.

Tests:
- Single ticks per phase
- Manual mode and finished games are left alone
- Full demo games terminate and conserve cards
"""

from collections import Counter

from ..bots import RandomPolicy
from ..engine_core.deck import card_counts
from ..engine_core.setup import initialize_game
from ..engine_core.state import GameMode, GamePhase
from ..games.esg_wings import EVENT_DECK_IDS, MAIN_DECK_IDS
from ..session import DemoLoop


class TestDemoStep:
    """Tests for DemoLoop.step."""

    def test_event_tick_opens_action_phase(self, catalog, demo_game):
        new_state = DemoLoop(catalog).step(demo_game)
        assert new_state.phase == GamePhase.ACTION
        assert len(new_state.players[0].hand) == 6

    def test_action_tick_follows_auto_move(self, catalog, demo_game):
        loop = DemoLoop(catalog)
        state = loop.step(demo_game)
        before = state.current_player

        state = loop.step(state)

        after = state.players[0]
        played = len(after.hand) == len(before.hand) - 1
        ended = state.current_player_idx == 1
        assert played or ended

    def test_manual_game_untouched(self, catalog, new_game):
        assert DemoLoop(catalog).step(new_game) is new_game

    def test_finished_game_untouched(self, catalog, demo_game):
        finished = demo_game._copy_with(winner_id="DRAW")
        assert DemoLoop(catalog).step(finished) is finished


class TestRunToCompletion:
    """Tests for whole demo games."""

    def test_demo_game_finishes(self, catalog, demo_game):
        final = DemoLoop(catalog).run_to_completion(demo_game)
        assert final.is_over
        assert final.end_reason is not None
        assert final.winner_id in {"P1", "P2", "P3", "DRAW"}

    def test_cards_conserved_at_every_step(self, catalog, demo_game):
        expected = Counter(EVENT_DECK_IDS * 3) + Counter(MAIN_DECK_IDS * 2)
        loop = DemoLoop(catalog)
        state = demo_game
        for _ in range(5000):
            assert card_counts(state) == expected
            if state.is_over:
                break
            state = loop.step(state)
        assert state.is_over

    def test_metrics_and_budgets_stay_in_bounds(self, catalog):
        state = initialize_game(catalog, 4, 8, GameMode.DEMO, seed=2024)
        loop = DemoLoop(catalog)
        for _ in range(5000):
            for player in state.players:
                assert player.budget >= 0
                assert all(0 <= v <= 10 for v in player.metrics.as_dict().values())
            if state.is_over:
                break
            state = loop.step(state)
        assert state.is_over

    def test_same_seed_same_outcome(self, catalog):
        a = DemoLoop(catalog).run_to_completion(initialize_game(catalog, 3, 4, GameMode.DEMO, seed=5))
        b = DemoLoop(catalog).run_to_completion(initialize_game(catalog, 3, 4, GameMode.DEMO, seed=5))
        assert a.winner_id == b.winner_id
        assert a.players == b.players
        assert [(e.action, e.card_id) for e in a.logs] == [(e.action, e.card_id) for e in b.logs]

    def test_step_limit_respected(self, catalog, demo_game):
        state = DemoLoop(catalog).run_to_completion(demo_game, max_steps=1)
        assert state.phase == GamePhase.ACTION
        assert not state.is_over

    def test_random_policy_also_finishes(self, catalog, demo_game):
        loop = DemoLoop(catalog, policy=RandomPolicy(seed=1))
        assert loop.run_to_completion(demo_game).is_over
