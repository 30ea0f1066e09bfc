"""
Engine Core - Deterministic game state management and effect resolution.

The engine is the runtime that:
1. Builds the initial GameState from a card catalog
2. Applies actions via the reducer (Event -> Action -> Resolution)
3. Resolves card effects against player metrics and budgets
4. Scores players and determines the winner
5. Generates legal actions and the autoplay move
"""

from .state import (
    GameState,
    PlayerState,
    Metrics,
    Decks,
    LogEntry,
    GamePhase,
    GameMode,
)
from .rules import RulesConfig, DEFAULT_RULES
from .action import Action, ActionType, ActionResult, ErrorCode
from .metrics import calculate_score, clamp_metric, determine_winner
from .deck import card_counts
from .effect_resolver import apply_effect
from .setup import initialize_game
from .reducer import (
    Reducer,
    apply_action,
    process_event_phase,
    play_card,
    refresh_hand,
    end_player_turn,
    process_resolution_phase,
    take_control,
)
from .action_generator import ActionGenerator, AutoMove, AutoMoveKind, legal_actions, get_auto_move

__all__ = [
    "GameState",
    "PlayerState",
    "Metrics",
    "Decks",
    "LogEntry",
    "GamePhase",
    "GameMode",
    "RulesConfig",
    "DEFAULT_RULES",
    "Action",
    "ActionType",
    "ActionResult",
    "ErrorCode",
    "calculate_score",
    "clamp_metric",
    "determine_winner",
    "card_counts",
    "apply_effect",
    "initialize_game",
    "Reducer",
    "apply_action",
    "process_event_phase",
    "play_card",
    "refresh_hand",
    "end_player_turn",
    "process_resolution_phase",
    "take_control",
    "ActionGenerator",
    "AutoMove",
    "AutoMoveKind",
    "legal_actions",
    "get_auto_move",
]
