"""
Game Loop - The demo driver.

Each tick advances a Demo-mode game by one step:
1. Event phase -> draw and apply an event
2. Action phase -> the policy plays a card or ends the turn
3. Resolution phase -> apply end-of-round rules

The loop owns no timers. The host decides when to call step();
RulesConfig.demo_step_interval_ms is the suggested cadence.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging

from ..bots.policy import BotPolicy, FirstAffordablePolicy
from ..engine_core.action_generator import legal_actions
from ..engine_core.reducer import Reducer
from ..engine_core.rules import DEFAULT_RULES, RulesConfig
from ..engine_core.state import GameMode, GameState
from ..spec_schema.catalog import CardCatalog

logger = logging.getLogger(__name__)


@dataclass
class DemoLoop:
    """
    Drives a Demo-mode game one tick at a time.

    Usage:
        loop = DemoLoop(catalog)
        state = loop.step(state)          # one tick, from a host timer
        state = loop.run_to_completion(state)
    """
    catalog: CardCatalog
    rules: RulesConfig = DEFAULT_RULES
    policy: BotPolicy = field(default_factory=FirstAffordablePolicy)

    def step(self, state: GameState) -> GameState:
        """
        Perform one demo tick.

        No-op once the game is over or when the game is in Manual mode.
        """
        if state.is_over or state.game_mode != GameMode.DEMO:
            return state

        legal = legal_actions(self.catalog, state, self.rules)
        if not legal:
            return state

        decision = self.policy.select_action(state, self.catalog, legal)
        result = Reducer(catalog=self.catalog, rules=self.rules).apply(state, decision.action)
        if not result.success:
            logger.warning(
                "Demo step rejected (%s): %s", decision.action.action_type.value, result.error
            )
            return state

        logger.debug("Demo step: %s", decision.explanation)
        return result.new_state

    def run_to_completion(self, state: GameState, max_steps: int = 10_000) -> GameState:
        """
        Step until the game has a winner, leaves Demo mode or max_steps is hit.
        """
        for _ in range(max_steps):
            if state.is_over or state.game_mode != GameMode.DEMO:
                break
            next_state = self.step(state)
            if next_state is state:
                break
            state = next_state
        return state
