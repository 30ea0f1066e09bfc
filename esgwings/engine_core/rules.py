"""
Rules Configuration - The numeric constants of the ruleset.

One frozen RulesConfig is threaded through setup and resolution so a host
can run variants without touching engine code. DEFAULT_RULES is ruleset 1.0.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .state import Metrics


def _initial_metrics() -> Metrics:
    return Metrics(carbon=8, cost=2, compliance=3, reputation=5, risk=5)


@dataclass(frozen=True)
class RulesConfig:
    """Constants for setup, actions, resolution and scoring."""
    ruleset_version: str = "1.0"

    # Setup
    min_players: int = 2
    max_players: int = 4
    initial_budget: int = 3
    initial_hand_size: int = 5
    initial_metrics: Metrics = field(default_factory=_initial_metrics)
    event_deck_copies: int = 3
    main_deck_copies: int = 2

    # Metric bounds
    metric_min: int = 0
    metric_max: int = 10

    # Actions
    refresh_cost: int = 1

    # Resolution rules
    cost_pressure_threshold: int = 8        # R-RES-01: Cost >= 8 -> Reputation -1
    risk_pressure_threshold: int = 8        # R-RES-02: Risk >= 8 -> Compliance -1
    forced_loss_compliance: int = 1         # R-RES-03: Compliance <= 1 -> forced loss

    # Scoring
    compliance_penalty_threshold: int = 5   # Compliance below this costs a penalty
    compliance_penalty: int = 5

    # Hint for hosts driving the demo loop; the engine never sleeps
    demo_step_interval_ms: int = 5000


DEFAULT_RULES = RulesConfig()
