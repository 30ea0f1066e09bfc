"""
Effect Resolver - Applies a card's effects to the game state.

This module handles:
- Target resolution (Self, All, PlayerId)
- Metric deltas with clamping
- Budget deltas with a zero floor
- One log entry per target whose values actually changed

The resolver never draws from a deck and never consults randomness.
Reserved effect kinds are matched explicitly and resolve to no change.
"""

from __future__ import annotations
from collections.abc import Iterable
import logging
import time
from typing import Any

from ..spec_schema.effect_dsl import (
    AddFlag,
    DiscardRandom,
    Draw,
    Effect,
    ModifyBudget,
    ModifyMetric,
    RemoveFlag,
    TargetType,
)
from .metrics import clamp_metric
from .rules import DEFAULT_RULES, RulesConfig
from .state import GameState, LogEntry, PlayerState

logger = logging.getLogger(__name__)

EFFECT_APPLIED = "effect applied"


def resolve_targets(state: GameState, effect: Effect, actor_id: str) -> list[int]:
    """
    Resolve the seat indices an effect applies to.

    Self targets only the acting player, so a "System" actor hits nobody.
    PlayerId falls back to the current player; the effect's player_id is
    not consulted yet.
    """
    if effect.target == TargetType.SELF:
        idx = state.player_index(actor_id)
        return [idx] if idx is not None else []
    if effect.target == TargetType.ALL:
        return list(range(state.num_players))
    if effect.target == TargetType.PLAYER_ID:
        return [state.current_player_idx]
    return []


def _apply_to_player(
    player: PlayerState,
    effect: Effect,
    rules: RulesConfig,
) -> tuple[PlayerState, dict[str, Any]]:
    """Apply one effect to one player. Returns (new player, diff)."""
    diff: dict[str, Any] = {}

    if isinstance(effect, ModifyMetric):
        old = player.metrics.get(effect.metric)
        new = clamp_metric(old + effect.delta, rules)
        if new != old:
            diff[effect.metric.value] = {"before": old, "after": new}
            player = player.with_metrics(player.metrics.with_value(effect.metric, new))
    elif isinstance(effect, ModifyBudget):
        old = player.budget
        new = max(0, old + effect.delta)
        if new != old:
            diff["Budget"] = {"before": old, "after": new}
            player = player.with_budget(new)
    elif isinstance(effect, (Draw, DiscardRandom, AddFlag, RemoveFlag)):
        logger.debug("Reserved effect %s has no behaviour yet", effect.kind.value)
    else:
        raise TypeError(f"Unknown effect type: {type(effect).__name__}")

    return player, diff


def apply_effect(
    state: GameState,
    effect: Effect,
    source_card_id: str,
    actor_id: str,
    rules: RulesConfig = DEFAULT_RULES,
) -> GameState:
    """
    Apply a single effect and return the new state.

    Appends one "effect applied" log entry per targeted player whose diff
    is non-empty; untouched targets produce no entry.
    """
    new_state = state
    for idx in resolve_targets(state, effect, actor_id):
        player, diff = _apply_to_player(new_state.players[idx], effect, rules)
        if not diff:
            continue

        new_state = new_state.with_player_at(idx, player)
        new_state = new_state.with_log(LogEntry(
            ts=time.time(),
            round=new_state.round,
            phase=new_state.phase,
            actor=player.player_id,
            action=EFFECT_APPLIED,
            card_id=source_card_id,
            diff=diff,
        ))
        logger.debug("%s on %s: %s", source_card_id, player.player_id, diff)

    return new_state


def apply_effects(
    state: GameState,
    effects: Iterable[Effect],
    source_card_id: str,
    actor_id: str,
    rules: RulesConfig = DEFAULT_RULES,
) -> GameState:
    """Apply effects in declaration order."""
    for effect in effects:
        state = apply_effect(state, effect, source_card_id, actor_id, rules)
    return state
