"""
Tests for the effect resolver.

Tests:
- Target resolution
- Clamping and the budget floor
- Logging only real changes
- Reserved effect kinds
"""

import pytest

from ..engine_core.effect_resolver import EFFECT_APPLIED, apply_effect, apply_effects, resolve_targets
from ..engine_core.state import SYSTEM_ACTOR
from ..spec_schema.effect_dsl import (
    AddFlag,
    Draw,
    Metric,
    ModifyMetric,
    TargetType,
    all_players,
    modify_budget,
    modify_metric,
)
from .conftest import make_player, make_state


@pytest.fixture
def state():
    return make_state([make_player("P1"), make_player("P2"), make_player("P3")], current_player_idx=1)


class TestTargets:
    """Tests for resolve_targets."""

    def test_self_targets_actor(self, state):
        assert resolve_targets(state, modify_metric(Metric.RISK, 1), "P3") == [2]

    def test_self_from_system_targets_nobody(self, state):
        assert resolve_targets(state, modify_metric(Metric.RISK, 1), SYSTEM_ACTOR) == []

    def test_all_targets_everyone(self, state):
        assert resolve_targets(state, all_players(Metric.RISK, 1), SYSTEM_ACTOR) == [0, 1, 2]

    def test_player_id_falls_back_to_current_player(self, state):
        effect = ModifyMetric(Metric.RISK, 1, target=TargetType.PLAYER_ID, player_id="P3")
        assert resolve_targets(state, effect, "P1") == [1]


class TestApplyEffect:
    """Tests for apply_effect."""

    @pytest.mark.parametrize("delta", [-1000, -11, -3, 3, 11, 1000])
    def test_metric_always_within_bounds(self, state, delta):
        for metric in Metric:
            new_state = apply_effect(state, modify_metric(metric, delta), "X", "P1")
            value = new_state.players[0].metrics.get(metric)
            assert 0 <= value <= 10

    def test_metric_delta_applied(self, state):
        new_state = apply_effect(state, modify_metric(Metric.CARBON, -2), "ACT_E_001", "P1")
        assert new_state.players[0].metrics.carbon == 6
        entry = new_state.logs[-1]
        assert entry.action == EFFECT_APPLIED
        assert entry.actor == "P1"
        assert entry.card_id == "ACT_E_001"
        assert entry.diff == {"Carbon": {"before": 8, "after": 6}}

    @pytest.mark.parametrize("delta", [-100, -4, -3])
    def test_budget_never_negative(self, state, delta):
        new_state = apply_effect(state, modify_budget(delta), "X", "P1")
        assert new_state.players[0].budget == 0

    def test_budget_has_no_ceiling(self, state):
        new_state = apply_effect(state, modify_budget(50), "X", "P1")
        assert new_state.players[0].budget == 53

    def test_no_change_no_log(self, state):
        """A delta swallowed by clamping produces no entry."""
        capped = state.with_player_at(0, make_player("P1", carbon=0))
        new_state = apply_effect(capped, modify_metric(Metric.CARBON, -2), "X", "P1")
        assert new_state.logs == capped.logs
        assert new_state.players == capped.players

    def test_all_logs_one_entry_per_changed_target(self, state):
        capped = state.with_player_at(2, make_player("P3", cost=10))
        new_state = apply_effect(capped, all_players(Metric.COST, 2), "EVT_001", SYSTEM_ACTOR)
        assert [e.actor for e in new_state.logs] == ["P1", "P2"]
        assert all(p.metrics.cost == 4 for p in new_state.players[:2])
        assert new_state.players[2].metrics.cost == 10

    def test_reserved_effects_are_no_ops(self, state):
        new_state = apply_effects(state, (Draw(count=2), AddFlag(flag="audited")), "X", "P1")
        assert new_state == state

    def test_unknown_effect_type_raises(self, state):
        class Mystery:
            target = TargetType.SELF
            player_id = None

        with pytest.raises(TypeError):
            apply_effect(state, Mystery(), "X", "P1")

    def test_effects_resolve_in_order(self, state):
        effects = (modify_metric(Metric.RISK, 10), modify_metric(Metric.RISK, -3))
        new_state = apply_effects(state, effects, "X", "P1")
        # 5 + 10 clamps to 10 before the -3 applies
        assert new_state.players[0].metrics.risk == 7
