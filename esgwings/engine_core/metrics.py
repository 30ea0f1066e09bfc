"""
Metrics Model - Clamping, scoring and win determination.

All functions are pure.
"""

from __future__ import annotations
from collections.abc import Sequence

from .rules import DEFAULT_RULES, RulesConfig
from .state import DRAW_RESULT, Metrics, PlayerState


def clamp_metric(value: int, rules: RulesConfig = DEFAULT_RULES) -> int:
    """Clamp a metric value to the closed range [metric_min, metric_max]."""
    return max(rules.metric_min, min(rules.metric_max, value))


def calculate_score(metrics: Metrics, rules: RulesConfig = DEFAULT_RULES) -> int:
    """
    Final score for a set of metrics.

    score = 2*Compliance + 2*Reputation + (10 - Carbon) + (10 - Risk) - Cost,
    minus the compliance penalty when Compliance is below the threshold.
    """
    top = rules.metric_max
    score = (
        metrics.compliance * 2
        + metrics.reputation * 2
        + (top - metrics.carbon)
        + (top - metrics.risk)
        - metrics.cost
    )
    if metrics.compliance < rules.compliance_penalty_threshold:
        score -= rules.compliance_penalty
    return score


def is_eliminated(player: PlayerState, rules: RulesConfig = DEFAULT_RULES) -> bool:
    """A player at or below the forced-loss compliance can never win."""
    return player.metrics.compliance <= rules.forced_loss_compliance


def determine_winner(
    players: Sequence[PlayerState],
    rules: RulesConfig = DEFAULT_RULES,
) -> str:
    """
    Pick the winner among eligible players.

    Highest score wins. A tie on score is broken against the current leader
    by higher Compliance, then higher Reputation; a full tie becomes "DRAW".
    The comparison is pairwise in seat order: once the result is "DRAW" there
    is no leader left, so a later player on the same score cannot break it.
    """
    best_score: int | None = None
    winner = DRAW_RESULT

    for player in players:
        if is_eliminated(player, rules):
            continue

        score = calculate_score(player.metrics, rules)
        if best_score is None or score > best_score:
            best_score = score
            winner = player.player_id
        elif score == best_score:
            leader = next((p for p in players if p.player_id == winner), None)
            if leader is None:
                # Already a draw at this score
                continue
            challenger = (player.metrics.compliance, player.metrics.reputation)
            held = (leader.metrics.compliance, leader.metrics.reputation)
            if challenger > held:
                winner = player.player_id
            elif challenger == held:
                winner = DRAW_RESULT

    return winner
