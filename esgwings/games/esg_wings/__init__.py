"""
ESG Wings - The base game.

Airlines compete over a fixed number of rounds to balance five metrics:
- Carbon, Cost and Risk (lower is better)
- Compliance and Reputation (higher is better)

Event cards hit every airline each round; action cards are bought with a
per-round budget.
"""

from .cards import (
    CATALOG_ID,
    ESG_WINGS_CARDS,
    EVENT_DECK_IDS,
    MAIN_DECK_IDS,
    create_esg_wings_catalog,
)

__all__ = [
    "CATALOG_ID",
    "ESG_WINGS_CARDS",
    "EVENT_DECK_IDS",
    "MAIN_DECK_IDS",
    "create_esg_wings_catalog",
]
