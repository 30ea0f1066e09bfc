"""
Effect DSL - Tagged effect variants attached to cards.

Each effect kind is its own frozen dataclass so the resolver can match
on the concrete type exhaustively. Effects are:
- Declarative: cards carry them, the engine interprets them
- Immutable: never mutated at runtime
- Targeted: every effect names a TargetType

Only ModifyMetric and ModifyBudget change state today. Draw, DiscardRandom,
AddFlag and RemoveFlag are declared so catalogs can reference them, and the
resolver treats them as reserved no-ops.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Union


class Metric(Enum):
    """The five sustainability gauges tracked per player."""
    CARBON = "Carbon"
    COST = "Cost"
    COMPLIANCE = "Compliance"
    REPUTATION = "Reputation"
    RISK = "Risk"

    @property
    def lower_is_better(self) -> bool:
        """Polarity used for scoring and display, never for clamping."""
        return self in {Metric.CARBON, Metric.COST, Metric.RISK}


class CardType(Enum):
    """Card categories in the catalog."""
    EVENT = "Event"
    POLICY = "Policy"
    ENVIRONMENTAL = "E"
    SOCIAL = "S"
    GOVERNANCE = "G"
    INVESTMENT = "Investment"


class TargetType(Enum):
    """Who an effect applies to."""
    SELF = "Self"
    ALL = "All"
    PLAYER_ID = "PlayerId"  # Falls back to the current player for now


class EffectKind(Enum):
    """Discriminator values, mirrored by each variant's `kind`."""
    MODIFY_METRIC = "ModifyMetric"
    MODIFY_BUDGET = "ModifyBudget"
    DRAW = "Draw"
    DISCARD_RANDOM = "DiscardRandom"
    ADD_FLAG = "AddFlag"
    REMOVE_FLAG = "RemoveFlag"


@dataclass(frozen=True)
class ModifyMetric:
    """Add `delta` to one metric, clamped to the metric bounds."""
    metric: Metric
    delta: int
    target: TargetType = TargetType.SELF
    player_id: str | None = None

    @property
    def kind(self) -> EffectKind:
        return EffectKind.MODIFY_METRIC


@dataclass(frozen=True)
class ModifyBudget:
    """Add `delta` to the budget, floored at zero."""
    delta: int
    target: TargetType = TargetType.SELF
    player_id: str | None = None

    @property
    def kind(self) -> EffectKind:
        return EffectKind.MODIFY_BUDGET


@dataclass(frozen=True)
class Draw:
    """Reserved: draw `count` cards."""
    count: int = 1
    target: TargetType = TargetType.SELF
    player_id: str | None = None

    @property
    def kind(self) -> EffectKind:
        return EffectKind.DRAW


@dataclass(frozen=True)
class DiscardRandom:
    """Reserved: discard `count` random cards from hand."""
    count: int = 1
    target: TargetType = TargetType.SELF
    player_id: str | None = None

    @property
    def kind(self) -> EffectKind:
        return EffectKind.DISCARD_RANDOM


@dataclass(frozen=True)
class AddFlag:
    """Reserved: add a flag to the player."""
    flag: str
    target: TargetType = TargetType.SELF
    player_id: str | None = None

    @property
    def kind(self) -> EffectKind:
        return EffectKind.ADD_FLAG


@dataclass(frozen=True)
class RemoveFlag:
    """Reserved: remove a flag from the player."""
    flag: str
    target: TargetType = TargetType.SELF
    player_id: str | None = None

    @property
    def kind(self) -> EffectKind:
        return EffectKind.REMOVE_FLAG


Effect = Union[ModifyMetric, ModifyBudget, Draw, DiscardRandom, AddFlag, RemoveFlag]

RESERVED_EFFECTS = (Draw, DiscardRandom, AddFlag, RemoveFlag)


# ============================================================================
# Helper constructors for common effects
# ============================================================================

def modify_metric(metric: Metric, delta: int, target: TargetType = TargetType.SELF) -> ModifyMetric:
    """Create a metric modification effect."""
    return ModifyMetric(metric=metric, delta=delta, target=target)


def modify_budget(delta: int, target: TargetType = TargetType.SELF) -> ModifyBudget:
    """Create a budget modification effect."""
    return ModifyBudget(delta=delta, target=target)


def all_players(metric: Metric, delta: int) -> ModifyMetric:
    """Create a metric modification that hits every player."""
    return ModifyMetric(metric=metric, delta=delta, target=TargetType.ALL)


def describe_effect(effect: Effect) -> str:
    """Short human-readable form, e.g. 'Carbon -2' or 'All: Cost +1'."""
    if isinstance(effect, ModifyMetric):
        text = f"{effect.metric.value} {effect.delta:+d}"
    elif isinstance(effect, ModifyBudget):
        text = f"Budget {effect.delta:+d}"
    elif isinstance(effect, (Draw, DiscardRandom)):
        text = f"{effect.kind.value} {effect.count}"
    else:
        text = f"{effect.kind.value} {effect.flag}"

    if effect.target == TargetType.ALL:
        return f"All: {text}"
    if effect.target == TargetType.PLAYER_ID:
        return f"{effect.player_id or 'Player'}: {text}"
    return text
