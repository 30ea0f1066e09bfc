"""
Game Setup - Creates the initial game state.

This module handles:
- Creating players with the starting budget and metrics
- Building both decks from the catalog's deck compositions
- Shuffling with a recorded seed
- Dealing the opening hands
"""

from __future__ import annotations
from datetime import datetime
import logging
import time

from ..spec_schema.catalog import CardCatalog
from .deck import new_seed, rng_for_shuffle, shuffle
from .rules import DEFAULT_RULES, RulesConfig
from .state import (
    SYSTEM_ACTOR,
    Decks,
    GameMode,
    GamePhase,
    GameState,
    LogEntry,
    PlayerState,
)

logger = logging.getLogger(__name__)

GAME_STARTED = "game started"


def initialize_game(
    catalog: CardCatalog,
    player_count: int,
    max_rounds: int,
    mode: GameMode = GameMode.MANUAL,
    *,
    rules: RulesConfig = DEFAULT_RULES,
    seed: int | None = None,
    game_id: str | None = None,
) -> GameState:
    """
    Set up a new game.

    Args:
        catalog: Card catalog supplying deck compositions
        player_count: Number of players (2-4)
        max_rounds: Rounds before the game ends on score
        mode: Manual or Demo
        rules: Ruleset constants
        seed: Seed for deterministic shuffling (fresh entropy if omitted)
        game_id: Explicit game id (generated if omitted)

    Returns:
        Initial GameState in round 1, Event phase
    """
    if not rules.min_players <= player_count <= rules.max_players:
        raise ValueError(
            f"player_count must be between {rules.min_players} and {rules.max_players}"
        )
    if max_rounds < 1:
        raise ValueError("max_rounds must be a positive integer")

    demo_seed = seed if seed is not None else new_seed()
    timestamp = time.time()

    players = _create_players(player_count, mode, rules)
    decks = Decks(
        event_deck=shuffle(
            catalog.event_deck_ids * rules.event_deck_copies,
            rng_for_shuffle(demo_seed, 0),
        ),
        main_deck=shuffle(
            catalog.main_deck_ids * rules.main_deck_copies,
            rng_for_shuffle(demo_seed, 1),
        ),
    )
    players, decks = _deal_initial_hands(players, decks, rules)

    initial_log = LogEntry(
        ts=timestamp,
        round=0,
        phase=GamePhase.EVENT,
        actor=SYSTEM_ACTOR,
        action=GAME_STARTED,
        diff={"player_count": player_count, "max_rounds": max_rounds, "mode": mode.value},
    )

    state = GameState(
        game_id=game_id or _make_game_id(demo_seed),
        round=1,
        max_rounds=max_rounds,
        phase=GamePhase.EVENT,
        current_player_idx=0,
        players=players,
        decks=decks,
        game_mode=mode,
        logs=(initial_log,),
        demo_seed=demo_seed,
        shuffle_count=2,
        ruleset_version=rules.ruleset_version,
        last_interaction_at=timestamp,
    )
    logger.info(
        "Game %s started: %d players, %d rounds, %s mode",
        state.game_id, player_count, max_rounds, mode.value,
    )
    return state


def _create_players(
    player_count: int,
    mode: GameMode,
    rules: RulesConfig,
) -> tuple[PlayerState, ...]:
    """Create player states. Seat 0 is always human; in Manual mode everyone is."""
    return tuple(
        PlayerState(
            player_id=f"P{i + 1}",
            name=f"Player {i + 1}",
            is_human=i == 0 or mode == GameMode.MANUAL,
            budget=rules.initial_budget,
            metrics=rules.initial_metrics,
        )
        for i in range(player_count)
    )


def _deal_initial_hands(
    players: tuple[PlayerState, ...],
    decks: Decks,
    rules: RulesConfig,
) -> tuple[tuple[PlayerState, ...], Decks]:
    """Deal opening hands from the end of the main deck, one player at a time."""
    pile = decks.main_deck
    dealt = []
    for player in players:
        take = min(rules.initial_hand_size, len(pile))
        # Popping from the end one by one gives the reversed tail
        hand = tuple(reversed(pile[len(pile) - take:]))
        pile = pile[:len(pile) - take]
        dealt.append(player.with_hand(hand))
    return tuple(dealt), decks._copy_with(main_deck=pile)


def _make_game_id(seed: int) -> str:
    """Game ids look like G_20240131_042."""
    return f"G_{datetime.now().strftime('%Y%m%d')}_{seed % 1000:03d}"
