"""
Card Catalog - Read-only card definitions supplied by the host.

The catalog is injected into every engine entry point. The engine never
looks cards up through a module-level global, which keeps the rules
testable against small hand-built catalogs.
"""

from __future__ import annotations
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field

from .effect_dsl import CardType, Effect


@dataclass(frozen=True)
class CardDefinition:
    """
    An immutable catalog entry.

    Runtime zones hold only card ids; the definition is looked up here.
    """
    id: str
    name: str
    card_type: CardType
    cost: int = 0
    effects: tuple[Effect, ...] = ()
    tags: tuple[str, ...] = ()
    description: str = ""
    source_note: str = ""

    @property
    def is_event(self) -> bool:
        """Event and Policy cards are drawn by the system, not played."""
        return self.card_type in {CardType.EVENT, CardType.POLICY}


@dataclass(frozen=True)
class CardCatalog(Mapping[str, CardDefinition]):
    """
    Mapping of card id -> CardDefinition plus the deck compositions.

    `event_deck_ids` and `main_deck_ids` list one copy of each deck;
    setup multiplies them by the configured copy counts.
    """
    catalog_id: str
    cards: Mapping[str, CardDefinition] = field(default_factory=dict)
    event_deck_ids: tuple[str, ...] = ()
    main_deck_ids: tuple[str, ...] = ()

    @classmethod
    def from_cards(
        cls,
        catalog_id: str,
        cards: list[CardDefinition],
        event_deck_ids: list[str] | tuple[str, ...] = (),
        main_deck_ids: list[str] | tuple[str, ...] = (),
    ) -> CardCatalog:
        """Build a catalog from a list of definitions."""
        return cls(
            catalog_id=catalog_id,
            cards={card.id: card for card in cards},
            event_deck_ids=tuple(event_deck_ids),
            main_deck_ids=tuple(main_deck_ids),
        )

    def __getitem__(self, card_id: str) -> CardDefinition:
        return self.cards[card_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self.cards)

    def __len__(self) -> int:
        return len(self.cards)

    def get_card(self, card_id: str) -> CardDefinition | None:
        """Get a card definition by ID."""
        return self.cards.get(card_id)
