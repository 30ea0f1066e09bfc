"""
Pytest fixtures for ESG Wings tests.
"""

import pytest

from ..engine_core.rules import DEFAULT_RULES
from ..engine_core.setup import initialize_game
from ..engine_core.state import (
    Decks,
    GameMode,
    GamePhase,
    GameState,
    Metrics,
    PlayerState,
)
from ..games.esg_wings import create_esg_wings_catalog
from ..spec_schema.catalog import CardCatalog, CardDefinition
from ..spec_schema.effect_dsl import CardType, Metric, all_players, modify_budget, modify_metric


def make_player(player_id: str = "P1", budget: int = 3, hand=(), **metric_overrides) -> PlayerState:
    """Build a player with the initial metrics, overriding single gauges by name."""
    metrics = DEFAULT_RULES.initial_metrics
    for name, value in metric_overrides.items():
        metrics = metrics.with_value(Metric[name.upper()], value)
    return PlayerState(
        player_id=player_id,
        name=f"Player {player_id[1:]}",
        is_human=True,
        budget=budget,
        metrics=metrics,
        hand=tuple(hand),
    )


def make_state(
    players,
    phase: GamePhase = GamePhase.ACTION,
    decks: Decks | None = None,
    round: int = 1,
    max_rounds: int = 5,
    current_player_idx: int = 0,
    mode: GameMode = GameMode.MANUAL,
) -> GameState:
    """Build a hand-crafted state for targeted rule tests."""
    return GameState(
        game_id="test_game",
        round=round,
        max_rounds=max_rounds,
        phase=phase,
        current_player_idx=current_player_idx,
        players=tuple(players),
        decks=decks or Decks(),
        game_mode=mode,
        demo_seed=1234,
    )


@pytest.fixture
def catalog() -> CardCatalog:
    """The built-in ESG Wings catalog."""
    return create_esg_wings_catalog()


@pytest.fixture
def tiny_catalog() -> CardCatalog:
    """A small catalog with predictable effects."""
    cards = [
        CardDefinition(
            id="EV_COST",
            name="Cost Shock",
            card_type=CardType.EVENT,
            effects=(all_players(Metric.COST, 2),),
        ),
        CardDefinition(
            id="A_CHEAP",
            name="Cheap Fix",
            card_type=CardType.ENVIRONMENTAL,
            cost=1,
            effects=(modify_metric(Metric.CARBON, -1),),
        ),
        CardDefinition(
            id="A_BIG",
            name="Big Cut",
            card_type=CardType.ENVIRONMENTAL,
            cost=3,
            effects=(modify_metric(Metric.CARBON, -20),),
        ),
        CardDefinition(
            id="A_DRAIN",
            name="Budget Drain",
            card_type=CardType.INVESTMENT,
            cost=0,
            effects=(modify_budget(-10),),
        ),
    ]
    return CardCatalog.from_cards(
        "tiny",
        cards,
        event_deck_ids=["EV_COST"],
        main_deck_ids=["A_CHEAP", "A_BIG", "A_DRAIN"],
    )


@pytest.fixture
def new_game(catalog) -> GameState:
    """A seeded 2-player, 5-round manual game in round 1, Event phase."""
    return initialize_game(catalog, 2, 5, seed=42)


@pytest.fixture
def demo_game(catalog) -> GameState:
    """A seeded 3-player, 3-round demo game."""
    return initialize_game(catalog, 3, 3, GameMode.DEMO, seed=7)


@pytest.fixture
def initial_metrics() -> Metrics:
    return DEFAULT_RULES.initial_metrics
