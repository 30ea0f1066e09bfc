"""
Bot Policy - Interface for bot decision-making.

A BotPolicy takes a game state and the legal actions and returns a decision.
The demo driver uses FirstAffordablePolicy; RandomPolicy is a seeded
baseline for tests and simulations.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
import random
from typing import TYPE_CHECKING

from ..engine_core.action import ActionType
from ..engine_core.action_generator import AutoMoveKind, get_auto_move

if TYPE_CHECKING:
    from ..engine_core.action import Action
    from ..engine_core.state import GameState
    from ..spec_schema.catalog import CardCatalog


@dataclass
class BotDecision:
    """
    A decision made by a bot.

    Contains:
    - The action to take
    - Explanation (for logging)
    """
    action: Action
    explanation: str = ""


class BotPolicy(ABC):
    """
    Abstract base class for bot policies.

    A policy defines how a bot selects actions.
    """

    @abstractmethod
    def select_action(
        self,
        state: GameState,
        catalog: CardCatalog,
        legal_actions: list[Action],
    ) -> BotDecision:
        """
        Select an action from the legal actions.

        Args:
            state: Current game state
            catalog: Card catalog
            legal_actions: List of legal actions to choose from

        Returns:
            BotDecision with the selected action
        """
        pass

    def get_name(self) -> str:
        """Get the bot's name/identifier."""
        return self.__class__.__name__


class RandomPolicy(BotPolicy):
    """
    Random policy - selects actions uniformly at random.

    Seeded so simulations can be replayed.
    """

    def __init__(self, seed: int | None = None):
        self.rng = random.Random(seed)

    def select_action(
        self,
        state: GameState,
        catalog: CardCatalog,
        legal_actions: list[Action],
    ) -> BotDecision:
        if not legal_actions:
            raise ValueError("No legal actions available")

        action = self.rng.choice(legal_actions)
        return BotDecision(
            action=action,
            explanation="Selected randomly",
        )


class FirstAffordablePolicy(BotPolicy):
    """
    The autoplay heuristic as a policy.

    Plays the first affordable card in hand order, otherwise ends the turn.
    Outside the Action phase it takes the single phase-advancing action.
    """

    def select_action(
        self,
        state: GameState,
        catalog: CardCatalog,
        legal_actions: list[Action],
    ) -> BotDecision:
        if not legal_actions:
            raise ValueError("No legal actions available")

        phase_actions = [
            a for a in legal_actions
            if a.action_type in (ActionType.PROCESS_EVENT, ActionType.PROCESS_RESOLUTION)
        ]
        if phase_actions:
            return BotDecision(
                action=phase_actions[0],
                explanation="Advance phase",
            )

        move = get_auto_move(catalog, state)
        if move.action == AutoMoveKind.PLAY:
            explanation = f"Play first affordable card {move.card_id}"
        else:
            explanation = "Nothing affordable; end turn"
        return BotDecision(
            action=move.to_action(),
            explanation=explanation,
        )
