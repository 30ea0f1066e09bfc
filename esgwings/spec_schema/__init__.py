"""Card catalog schema - effect DSL, card definitions and validation."""

from .catalog import CardCatalog, CardDefinition
from .effect_dsl import (
    AddFlag,
    CardType,
    DiscardRandom,
    Draw,
    Effect,
    EffectKind,
    Metric,
    ModifyBudget,
    ModifyMetric,
    RemoveFlag,
    TargetType,
    describe_effect,
)
from .validation import CatalogValidationError, ValidationResult, validate_catalog

__all__ = [
    "CardCatalog",
    "CardDefinition",
    "Effect",
    "EffectKind",
    "ModifyMetric",
    "ModifyBudget",
    "Draw",
    "DiscardRandom",
    "AddFlag",
    "RemoveFlag",
    "Metric",
    "CardType",
    "TargetType",
    "describe_effect",
    "validate_catalog",
    "ValidationResult",
    "CatalogValidationError",
]
