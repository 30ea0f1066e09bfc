"""
ESG Wings Cards - The built-in card catalog.

Card structure:
- Type (Event, Policy, E, S, G, Investment)
- Cost (budget points)
- Effects (metric and budget deltas)
- Source note citing the real-world data the card is based on

Event and Policy cards form the event deck; the rest form the main deck.
"""

from ...spec_schema.catalog import CardCatalog, CardDefinition
from ...spec_schema.effect_dsl import (
    CardType,
    Metric,
    all_players,
    modify_budget,
    modify_metric,
)


CATALOG_ID = "esg_wings_base"


# ============================================================================
# Events
# ============================================================================

FUEL_PRICE_SURGE = CardDefinition(
    id="EVT_001",
    name="Fuel Price Surge",
    card_type=CardType.EVENT,
    description="Global fuel prices climb and every airline's operating costs rise.",
    tags=("market volatility",),
    effects=(all_players(Metric.COST, 2),),
    source_note="[Industry data] IATA jet fuel price monitor 2024",
)

CARBON_TAX_POLICY = CardDefinition(
    id="EVT_002",
    name="New Carbon Tax",
    card_type=CardType.POLICY,
    description="New regional regulation demands higher compliance or fines follow.",
    tags=("regulation",),
    effects=(
        all_players(Metric.COST, 1),
        all_players(Metric.COMPLIANCE, -1),
    ),
    source_note="[Policy] EU ETS directive, 2024 revision",
)

EXTREME_WEATHER = CardDefinition(
    id="EVT_003",
    name="Extreme Weather",
    card_type=CardType.EVENT,
    description="Storms delay flights and operational risk jumps.",
    tags=("climate",),
    effects=(all_players(Metric.RISK, 2),),
    source_note="[Science] IPCC AR6, aviation impacts",
)

POSITIVE_PRESS = CardDefinition(
    id="EVT_004",
    name="Positive Press Coverage",
    card_type=CardType.EVENT,
    description="The industry praises green transition efforts.",
    tags=("public relations",),
    effects=(all_players(Metric.REPUTATION, 1),),
    source_note="[Media] Global Aviation Sustainability Awards 2023",
)


# ============================================================================
# Environmental actions
# ============================================================================

ROUTE_OPTIMIZATION = CardDefinition(
    id="ACT_E_001",
    name="Route Optimization",
    card_type=CardType.ENVIRONMENTAL,
    cost=2,
    description="AI flight planning trims fuel burn.",
    tags=("efficiency",),
    effects=(
        modify_metric(Metric.CARBON, -2),
        modify_metric(Metric.COST, 1),
    ),
    source_note="[Company] EVA Air sustainability report 2024, p. 45",
)

SAF_PROCUREMENT = CardDefinition(
    id="ACT_E_002",
    name="Sustainable Aviation Fuel Procurement",
    card_type=CardType.ENVIRONMENTAL,
    cost=3,
    description="Buy sustainable aviation fuel to cut emissions sharply.",
    tags=("fuel", "SAF"),
    effects=(
        modify_metric(Metric.CARBON, -3),
        modify_metric(Metric.COST, 2),
        modify_metric(Metric.REPUTATION, 1),
    ),
    source_note="[Industry] SAF challenge roadmap",
)


# ============================================================================
# Social actions
# ============================================================================

SAFETY_TRAINING = CardDefinition(
    id="ACT_S_001",
    name="Enhanced Safety Training",
    card_type=CardType.SOCIAL,
    cost=1,
    description="Drill crews harder on emergency procedures.",
    tags=("safety",),
    effects=(
        modify_metric(Metric.RISK, -2),
        modify_metric(Metric.REPUTATION, 1),
    ),
    source_note="[Company] EVA Air flight safety report 2023",
)

COMMUNITY_PROGRAM = CardDefinition(
    id="ACT_S_002",
    name="Community Outreach Program",
    card_type=CardType.SOCIAL,
    cost=1,
    description="Sponsor local education and conservation projects.",
    tags=("CSR",),
    effects=(modify_metric(Metric.REPUTATION, 2),),
    source_note="[Company] Corporate social responsibility report 2023",
)


# ============================================================================
# Governance actions
# ============================================================================

SUPPLY_CHAIN_AUDIT = CardDefinition(
    id="ACT_G_001",
    name="Supply Chain ESG Audit",
    card_type=CardType.GOVERNANCE,
    cost=2,
    description="Run strict ESG audits across every supplier.",
    tags=("governance",),
    effects=(
        modify_metric(Metric.COMPLIANCE, 2),
        modify_metric(Metric.RISK, -1),
    ),
    source_note="[Company] Supplier code of conduct 2024",
)

SUSTAINABILITY_REPORT = CardDefinition(
    id="ACT_G_002",
    name="Publish Sustainability Report",
    card_type=CardType.GOVERNANCE,
    cost=1,
    description="Publish transparent TCFD climate disclosures.",
    tags=("reporting",),
    effects=(
        modify_metric(Metric.COMPLIANCE, 1),
        modify_metric(Metric.REPUTATION, 1),
    ),
    source_note="[Policy] TCFD recommendations",
)


# ============================================================================
# Investments
# ============================================================================

DIGITAL_TRANSFORMATION = CardDefinition(
    id="ACT_I_001",
    name="Digital Transformation",
    card_type=CardType.INVESTMENT,
    cost=3,
    description="Upgrade legacy systems for better data tracking.",
    tags=("technology",),
    effects=(
        modify_metric(Metric.COMPLIANCE, 2),
        modify_metric(Metric.RISK, -2),
    ),
    source_note="[Industry] Digital aviation trends 2025",
)

BUDGET_REALLOCATION = CardDefinition(
    id="ACT_I_002",
    name="Budget Reallocation",
    card_type=CardType.INVESTMENT,
    cost=0,
    description="Move emergency reserves into the operating budget.",
    tags=("finance",),
    effects=(
        modify_budget(2),
        modify_metric(Metric.RISK, 1),
    ),
    source_note="[Internal] Financial planning strategy",
)


ESG_WINGS_CARDS = [
    FUEL_PRICE_SURGE,
    CARBON_TAX_POLICY,
    EXTREME_WEATHER,
    POSITIVE_PRESS,
    ROUTE_OPTIMIZATION,
    SAF_PROCUREMENT,
    SAFETY_TRAINING,
    COMMUNITY_PROGRAM,
    SUPPLY_CHAIN_AUDIT,
    SUSTAINABILITY_REPORT,
    DIGITAL_TRANSFORMATION,
    BUDGET_REALLOCATION,
]

EVENT_DECK_IDS = ["EVT_001", "EVT_002", "EVT_003", "EVT_004"]

# One copy of the main deck; setup doubles it
MAIN_DECK_IDS = [
    "ACT_E_001", "ACT_E_001", "ACT_E_001",
    "ACT_E_002", "ACT_E_002",
    "ACT_S_001", "ACT_S_001", "ACT_S_001",
    "ACT_S_002", "ACT_S_002",
    "ACT_G_001", "ACT_G_001", "ACT_G_001",
    "ACT_G_002", "ACT_G_002",
    "ACT_I_001", "ACT_I_001",
    "ACT_I_002", "ACT_I_002", "ACT_I_002",
]


def create_esg_wings_catalog() -> CardCatalog:
    """Build the base-game catalog."""
    return CardCatalog.from_cards(
        CATALOG_ID,
        ESG_WINGS_CARDS,
        event_deck_ids=EVENT_DECK_IDS,
        main_deck_ids=MAIN_DECK_IDS,
    )
