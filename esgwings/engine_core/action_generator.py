"""
Action Generator - Generates legal actions and the autoplay move.

The action generator is used by:
1. Bots to enumerate possible moves
2. UI to show which cards are playable
3. The demo driver, through get_auto_move

Design: Generates Action objects, not just action types.
This ensures all generated actions are fully specified.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

from ..spec_schema.catalog import CardCatalog
from .action import Action
from .rules import DEFAULT_RULES, RulesConfig
from .state import GamePhase, GameState


class AutoMoveKind(Enum):
    PLAY = "PLAY"
    END = "END"


@dataclass(frozen=True)
class AutoMove:
    """The autoplay decision: play a card, or end the turn."""
    action: AutoMoveKind
    card_id: str | None = None

    def to_action(self) -> Action:
        """Convert to the reducer action it stands for."""
        if self.action == AutoMoveKind.PLAY and self.card_id is not None:
            return Action.play_card(self.card_id)
        return Action.end_turn()


def affordable_cards(catalog: CardCatalog, state: GameState) -> list[str]:
    """Card ids in the current player's hand they can pay for, in hand order."""
    player = state.current_player
    playable = []
    for card_id in player.hand:
        card = catalog.get_card(card_id)
        if card is not None and card.cost <= player.budget:
            playable.append(card_id)
    return playable


@dataclass
class ActionGenerator:
    """
    Generates legal actions for the current game state.

    Uses the catalog to check card costs.
    """
    catalog: CardCatalog
    rules: RulesConfig = DEFAULT_RULES

    def generate(self, state: GameState) -> list[Action]:
        """
        Generate all legal actions for the current player.

        Returns a list of fully-specified Action objects.
        """
        if state.is_over:
            return []

        if state.phase == GamePhase.EVENT:
            return [Action.process_event()]
        if state.phase == GamePhase.RESOLUTION:
            return [Action.process_resolution()]

        actions = []
        seen = set()
        for card_id in affordable_cards(self.catalog, state):
            if card_id not in seen:
                seen.add(card_id)
                actions.append(Action.play_card(card_id))

        if state.current_player.budget >= self.rules.refresh_cost:
            actions.append(Action.refresh_hand())

        # End turn is always available
        actions.append(Action.end_turn())
        return actions


def legal_actions(
    catalog: CardCatalog,
    state: GameState,
    rules: RulesConfig = DEFAULT_RULES,
) -> list[Action]:
    """Convenience function to generate legal actions."""
    return ActionGenerator(catalog=catalog, rules=rules).generate(state)


def get_auto_move(catalog: CardCatalog, state: GameState) -> AutoMove:
    """
    The demo heuristic: play the first affordable card in hand order.

    No scoring or lookahead; deterministic given the hand order.
    """
    playable = affordable_cards(catalog, state)
    if not playable:
        return AutoMove(action=AutoMoveKind.END)
    return AutoMove(action=AutoMoveKind.PLAY, card_id=playable[0])
