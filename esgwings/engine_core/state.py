"""
Game State - Immutable state container for one game.

Design principles:
- Immutable: every transition returns a new state, nothing is edited in place
- Serializable: plain values only, so the log can be replayed or exported
- Observable: every state-changing event lands in the append-only log
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from ..spec_schema.effect_dsl import Metric


SYSTEM_ACTOR = "System"
DRAW_RESULT = "DRAW"


class GamePhase(Enum):
    """The three-part round structure."""
    EVENT = "Event"
    ACTION = "Action"
    RESOLUTION = "Resolution"


class GameMode(Enum):
    """Who drives the game."""
    MANUAL = "Manual"
    DEMO = "Demo"


@dataclass(frozen=True)
class Metrics:
    """Five bounded gauges. Clamping happens where deltas are applied."""
    carbon: int
    cost: int
    compliance: int
    reputation: int
    risk: int

    def get(self, metric: Metric) -> int:
        """Read a metric by enum."""
        return getattr(self, metric.name.lower())

    def with_value(self, metric: Metric, value: int) -> Metrics:
        """Return new metrics with one gauge replaced."""
        return replace(self, **{metric.name.lower(): value})

    def as_dict(self) -> dict[str, int]:
        return {metric.value: self.get(metric) for metric in Metric}

    @classmethod
    def from_dict(cls, values: dict[str, int]) -> Metrics:
        """Build from {"Carbon": 8, ...} keyed by display name."""
        return cls(**{metric.name.lower(): values[metric.value] for metric in Metric})


@dataclass(frozen=True)
class PlayerState:
    """
    State for a single player.

    Budget resets every round; metrics accumulate for the whole game.
    The hand is an ordered tuple of card ids and may hold duplicates.
    """
    player_id: str
    name: str
    is_human: bool
    budget: int
    metrics: Metrics
    hand: tuple[str, ...] = ()
    discard: tuple[str, ...] = ()
    flags: frozenset[str] = frozenset()

    def with_hand(self, hand: tuple[str, ...]) -> PlayerState:
        """Return new player state with a different hand."""
        return replace(self, hand=hand)

    def with_budget(self, budget: int) -> PlayerState:
        """Return new player state with a different budget."""
        return replace(self, budget=budget)

    def with_metrics(self, metrics: Metrics) -> PlayerState:
        """Return new player state with different metrics."""
        return replace(self, metrics=metrics)

    def without_card(self, card_id: str) -> PlayerState:
        """Return new player state with exactly one instance of card_id removed from hand."""
        hand = list(self.hand)
        hand.remove(card_id)
        return replace(self, hand=tuple(hand))


@dataclass(frozen=True)
class Decks:
    """
    The two draw/discard pairs.

    Draw piles are popped from the end.
    """
    event_deck: tuple[str, ...] = ()
    event_discard: tuple[str, ...] = ()
    main_deck: tuple[str, ...] = ()
    main_discard: tuple[str, ...] = ()

    def _copy_with(self, **kwargs) -> Decks:
        return replace(self, **kwargs)


@dataclass(frozen=True)
class LogEntry:
    """
    One append-only audit record.

    `actor` is a player id, "System", or "Player" for a demo takeover.
    `diff` maps a changed field to {"before": ..., "after": ...} or holds
    action details such as {"cost": 2}.

    Entries are shared between successive states, so `diff` is read-only
    once the entry is built. Copy it before editing.
    """
    ts: float
    round: int
    phase: GamePhase
    actor: str
    action: str
    card_id: str | None = None
    diff: dict[str, Any] | None = None


@dataclass(frozen=True)
class GameState:
    """
    Complete game state at a point in time.

    This is the canonical state that the engine operates on.
    All state changes go through the reducer and return a new GameState.
    """
    game_id: str
    round: int
    max_rounds: int
    phase: GamePhase
    current_player_idx: int
    players: tuple[PlayerState, ...]
    decks: Decks
    game_mode: GameMode = GameMode.MANUAL
    logs: tuple[LogEntry, ...] = ()

    # Terminal fields: both unset while in progress
    winner_id: str | None = None
    end_reason: str | None = None

    # Seed for deterministic shuffles; shuffle_count keeps each shuffle distinct
    demo_seed: int = 0
    shuffle_count: int = 0

    ruleset_version: str = "1.0"
    last_interaction_at: float = 0.0

    @property
    def current_player(self) -> PlayerState:
        """Get the current player."""
        return self.players[self.current_player_idx]

    @property
    def num_players(self) -> int:
        return len(self.players)

    @property
    def is_over(self) -> bool:
        """The game ends once a winner (or DRAW) is recorded."""
        return self.winner_id is not None

    def get_player(self, player_id: str) -> PlayerState | None:
        """Get player by ID."""
        for p in self.players:
            if p.player_id == player_id:
                return p
        return None

    def player_index(self, player_id: str) -> int | None:
        """Get a player's seat index by ID."""
        for idx, p in enumerate(self.players):
            if p.player_id == player_id:
                return idx
        return None

    def with_player_at(self, idx: int, player: PlayerState) -> GameState:
        """Return new state with the player at idx replaced."""
        new_players = list(self.players)
        new_players[idx] = player
        return self._copy_with(players=tuple(new_players))

    def with_decks(self, decks: Decks) -> GameState:
        """Return new state with updated decks."""
        return self._copy_with(decks=decks)

    def with_log(self, entry: LogEntry) -> GameState:
        """Return new state with one log entry appended."""
        return self._copy_with(logs=self.logs + (entry,))

    def _copy_with(self, **kwargs) -> GameState:
        """Create a copy with some fields replaced."""
        return replace(self, **kwargs)
