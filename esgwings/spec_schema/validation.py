"""
Catalog Validation - Sanity checks for card catalogs.

Validates that:
1. Required fields are present
2. Deck compositions reference known cards
3. Effects are well-formed (known metric, sane counts)
4. Invariants hold (non-negative cost, event decks hold event cards)
"""

from __future__ import annotations
from dataclasses import dataclass

from .catalog import CardCatalog, CardDefinition
from .effect_dsl import (
    AddFlag,
    DiscardRandom,
    Draw,
    Effect,
    Metric,
    ModifyBudget,
    ModifyMetric,
    RemoveFlag,
    TargetType,
)


class CatalogValidationError(Exception):
    """Raised when catalog validation fails."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"Catalog validation failed with {len(errors)} error(s)")


@dataclass
class ValidationResult:
    """Result of validation, with errors and warnings."""
    valid: bool
    errors: list[str]
    warnings: list[str]


def validate_catalog(catalog: CardCatalog, raise_on_error: bool = False) -> ValidationResult:
    """
    Validate a complete card catalog.

    Returns ValidationResult with errors and warnings.
    Raises CatalogValidationError if raise_on_error=True and errors exist.
    """
    errors: list[str] = []
    warnings: list[str] = []

    if not catalog.catalog_id:
        errors.append("catalog_id is required")

    for card_id, card in catalog.cards.items():
        if card_id != card.id:
            errors.append(f"Card registered as '{card_id}' has id '{card.id}'")
        errors.extend(_validate_card(card))

    # Deck references
    for card_id in catalog.event_deck_ids:
        card = catalog.get_card(card_id)
        if card is None:
            errors.append(f"Event deck references unknown card '{card_id}'")
        elif not card.is_event:
            warnings.append(f"Event deck holds non-event card '{card_id}'")

    for card_id in catalog.main_deck_ids:
        card = catalog.get_card(card_id)
        if card is None:
            errors.append(f"Main deck references unknown card '{card_id}'")
        elif card.is_event:
            warnings.append(f"Main deck holds event card '{card_id}'")

    if not catalog.event_deck_ids:
        warnings.append("Event deck is empty - event phases will apply nothing")
    if not catalog.main_deck_ids:
        warnings.append("Main deck is empty - players will never draw")

    if errors and raise_on_error:
        raise CatalogValidationError(errors)

    return ValidationResult(
        valid=len(errors) == 0,
        errors=errors,
        warnings=warnings,
    )


def _validate_card(card: CardDefinition) -> list[str]:
    """Validate a single card definition."""
    errors = []
    if not card.id:
        errors.append("Card has empty ID")
    if not card.name:
        errors.append(f"Card '{card.id}' has empty name")
    if card.cost < 0:
        errors.append(f"Card '{card.id}' has negative cost {card.cost}")

    for effect in card.effects:
        effect_errors = _validate_effect(effect)
        errors.extend([f"Card '{card.id}': {e}" for e in effect_errors])

    return errors


def _validate_effect(effect: Effect) -> list[str]:
    """Validate the structure of a single effect."""
    errors = []

    if not isinstance(effect.target, TargetType):
        errors.append(f"{type(effect).__name__} has invalid target {effect.target!r}")

    if isinstance(effect, ModifyMetric):
        if not isinstance(effect.metric, Metric):
            errors.append(f"ModifyMetric has unknown metric {effect.metric!r}")
    elif isinstance(effect, ModifyBudget):
        pass
    elif isinstance(effect, (Draw, DiscardRandom)):
        if effect.count < 0:
            errors.append(f"{type(effect).__name__} has negative count {effect.count}")
    elif isinstance(effect, (AddFlag, RemoveFlag)):
        if not effect.flag:
            errors.append(f"{type(effect).__name__} has empty flag")
    else:
        errors.append(f"Unknown effect type: {type(effect).__name__}")

    return errors
