"""
Action System - Actions, payloads, and results.

Actions represent:
1. Player actions (play card, refresh hand, end turn)
2. System actions (event phase, resolution phase)
3. Host actions (taking control of a demo game)

All state changes flow through actions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ActionType(Enum):
    """Types of actions in the system."""
    # Player actions
    PLAY_CARD = "play_card"
    REFRESH_HAND = "refresh_hand"
    END_TURN = "end_turn"

    # System actions
    PROCESS_EVENT = "process_event"
    PROCESS_RESOLUTION = "process_resolution"

    # Host actions
    TAKE_CONTROL = "take_control"


class ErrorCode(Enum):
    """Why an action was rejected."""
    GAME_OVER = "GAME_OVER"
    WRONG_PHASE = "WRONG_PHASE"
    UNKNOWN_CARD = "UNKNOWN_CARD"
    CARD_NOT_IN_HAND = "CARD_NOT_IN_HAND"
    INSUFFICIENT_BUDGET = "INSUFFICIENT_BUDGET"
    INVALID_MODE = "INVALID_MODE"


@dataclass(frozen=True)
class Action:
    """
    A complete action to be applied to the game state.

    Player actions always act for the current player; card_id is only
    used by PLAY_CARD.
    """
    action_type: ActionType
    card_id: str | None = None

    @classmethod
    def play_card(cls, card_id: str) -> Action:
        """Factory for play card action."""
        return cls(action_type=ActionType.PLAY_CARD, card_id=card_id)

    @classmethod
    def refresh_hand(cls) -> Action:
        """Factory for refresh hand action."""
        return cls(action_type=ActionType.REFRESH_HAND)

    @classmethod
    def end_turn(cls) -> Action:
        """Factory for end turn action."""
        return cls(action_type=ActionType.END_TURN)

    @classmethod
    def process_event(cls) -> Action:
        """Factory for the event phase."""
        return cls(action_type=ActionType.PROCESS_EVENT)

    @classmethod
    def process_resolution(cls) -> Action:
        """Factory for the resolution phase."""
        return cls(action_type=ActionType.PROCESS_RESOLUTION)

    @classmethod
    def take_control(cls) -> Action:
        """Factory for switching a demo game to manual play."""
        return cls(action_type=ActionType.TAKE_CONTROL)


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether the action was applied
    - New state (if applied)
    - Rejection reason and code (if rejected)
    - Human-readable changes for the UI
    """
    success: bool
    new_state: Any | None = None  # GameState
    error: str | None = None
    error_code: ErrorCode | None = None

    # For UI/presentation
    state_changes: list[str] = field(default_factory=list)

    @property
    def rejected(self) -> bool:
        return not self.success

    @classmethod
    def failure(cls, error: str, error_code: ErrorCode | None = None) -> ActionResult:
        """Create a rejection result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        changes: list[str] | None = None,
    ) -> ActionResult:
        """Create a success result with new state."""
        return cls(
            success=True,
            new_state=state,
            state_changes=changes or [],
        )
