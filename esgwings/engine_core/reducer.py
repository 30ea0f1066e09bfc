"""
Reducer - Applies actions to game state.

The reducer is the phase state machine: Event -> Action -> Resolution ->
(next round Event | game over). All state changes go through apply().

Design principles:
- Pure function: (state, action) -> new state, the input is never modified
- Validates before applying
- Returns ActionResult that tells Applied apart from Rejected(reason)
- Delegates card effects to the effect resolver

The module-level helpers (play_card, end_player_turn, ...) keep the
silent no-op contract the UI relies on: a rejected action returns the
input state unchanged.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import time
from typing import Callable

from ..spec_schema.catalog import CardCatalog
from ..spec_schema.effect_dsl import Metric
from .action import Action, ActionResult, ActionType, ErrorCode
from .deck import draw_card_for_player, draw_event
from .effect_resolver import apply_effects
from .metrics import clamp_metric, determine_winner, is_eliminated
from .rules import DEFAULT_RULES, RulesConfig
from .state import (
    SYSTEM_ACTOR,
    GameMode,
    GamePhase,
    GameState,
    LogEntry,
    PlayerState,
)

logger = logging.getLogger(__name__)

# Log action labels
EVENT_DRAWN = "event drawn"
CARD_PLAYED = "play card"
HAND_REFRESHED = "refresh hand"
RULE_TRIGGERED = "rule triggered"
NEW_ROUND = "new round"
GAME_OVER = "game over"
TAKE_CONTROL = "take control"

HOST_ACTOR = "Player"
MAX_ROUNDS_REACHED = "max rounds reached"

PLAYER_ACTIONS = {ActionType.PLAY_CARD, ActionType.REFRESH_HAND, ActionType.END_TURN}


@dataclass
class Reducer:
    """
    Reducer applies actions to game state.

    Stateless - all state is in GameState.
    The catalog and rules provide card definitions and constants.
    """
    catalog: CardCatalog
    rules: RulesConfig = field(default=DEFAULT_RULES)

    def apply(self, state: GameState, action: Action) -> ActionResult:
        """
        Apply an action to the game state.

        Returns ActionResult with new state or the rejection reason.
        """
        if state.is_over:
            return ActionResult.failure("Game is over - no actions allowed", ErrorCode.GAME_OVER)

        handler = self._get_handler(action.action_type)
        result = handler(state, action)
        if result.success and action.action_type in PLAYER_ACTIONS | {ActionType.TAKE_CONTROL}:
            result.new_state = result.new_state._copy_with(last_interaction_at=time.time())
        if result.rejected:
            logger.debug("Rejected %s: %s", action.action_type.value, result.error)
        return result

    def _get_handler(self, action_type: ActionType) -> Callable[[GameState, Action], ActionResult]:
        """Get the handler function for an action type."""
        handlers = {
            ActionType.PROCESS_EVENT: self._handle_process_event,
            ActionType.PLAY_CARD: self._handle_play_card,
            ActionType.REFRESH_HAND: self._handle_refresh_hand,
            ActionType.END_TURN: self._handle_end_turn,
            ActionType.PROCESS_RESOLUTION: self._handle_process_resolution,
            ActionType.TAKE_CONTROL: self._handle_take_control,
        }
        return handlers[action_type]

    # =========================================================================
    # Event phase
    # =========================================================================

    def _handle_process_event(self, state: GameState, action: Action) -> ActionResult:
        """
        Draw and apply one event card, then open the Action phase.

        An exhausted event deck still advances the phase with no event.
        """
        if state.phase != GamePhase.EVENT:
            return _wrong_phase(state, GamePhase.EVENT)

        changes = []
        card_id, new_state = draw_event(state)

        if card_id is not None:
            decks = new_state.decks
            new_state = new_state.with_decks(
                decks._copy_with(event_discard=decks.event_discard + (card_id,))
            )
            card = self.catalog.get_card(card_id)
            new_state = new_state.with_log(LogEntry(
                ts=time.time(),
                round=new_state.round,
                phase=GamePhase.EVENT,
                actor=SYSTEM_ACTOR,
                action=EVENT_DRAWN,
                card_id=card_id,
                diff={"name": card.name if card else card_id},
            ))
            if card is None:
                logger.warning("Event card %s is missing from catalog %s",
                               card_id, self.catalog.catalog_id)
            else:
                new_state = apply_effects(new_state, card.effects, card_id, SYSTEM_ACTOR, self.rules)
                changes.append(f"Event: {card.name}")
        else:
            logger.info("Event deck exhausted in round %d; no event applied", state.round)

        new_state = new_state._copy_with(phase=GamePhase.ACTION, current_player_idx=0)
        new_state = draw_card_for_player(new_state, 0)
        logger.info("Round %d: Action phase begins", new_state.round)

        return ActionResult.success_with_state(new_state, changes=changes)

    # =========================================================================
    # Action phase
    # =========================================================================

    def _handle_play_card(self, state: GameState, action: Action) -> ActionResult:
        """Pay the cost, discard the card and resolve its effects."""
        if state.phase != GamePhase.ACTION:
            return _wrong_phase(state, GamePhase.ACTION)

        card_id = action.card_id
        card = self.catalog.get_card(card_id) if card_id else None
        if not card:
            return ActionResult.failure(f"Card {card_id} not in catalog", ErrorCode.UNKNOWN_CARD)

        idx = state.current_player_idx
        player = state.players[idx]
        if card_id not in player.hand:
            return ActionResult.failure(f"Card {card_id} not in hand", ErrorCode.CARD_NOT_IN_HAND)
        if player.budget < card.cost:
            return ActionResult.failure(
                f"Budget {player.budget} cannot cover cost {card.cost}",
                ErrorCode.INSUFFICIENT_BUDGET,
            )

        new_player = player.without_card(card_id).with_budget(player.budget - card.cost)
        new_state = state.with_player_at(idx, new_player)
        decks = new_state.decks
        new_state = new_state.with_decks(decks._copy_with(main_discard=decks.main_discard + (card_id,)))
        new_state = new_state.with_log(LogEntry(
            ts=time.time(),
            round=new_state.round,
            phase=GamePhase.ACTION,
            actor=player.player_id,
            action=CARD_PLAYED,
            card_id=card_id,
            diff={"cost": card.cost},
        ))
        new_state = apply_effects(new_state, card.effects, card_id, player.player_id, self.rules)

        return ActionResult.success_with_state(
            new_state,
            changes=[f"{player.name} played {card.name}"],
        )

    def _handle_refresh_hand(self, state: GameState, action: Action) -> ActionResult:
        """Pay the refresh cost, discard the whole hand and draw a fresh one."""
        if state.phase != GamePhase.ACTION:
            return _wrong_phase(state, GamePhase.ACTION)

        cost = self.rules.refresh_cost
        idx = state.current_player_idx
        player = state.players[idx]
        if player.budget < cost:
            return ActionResult.failure(
                f"Budget {player.budget} cannot cover refresh cost {cost}",
                ErrorCode.INSUFFICIENT_BUDGET,
            )

        decks = state.decks
        new_state = state.with_decks(decks._copy_with(main_discard=decks.main_discard + player.hand))
        new_state = new_state.with_player_at(idx, player.with_hand(()).with_budget(player.budget - cost))

        for _ in range(self.rules.initial_hand_size):
            new_state = draw_card_for_player(new_state, idx)

        new_state = new_state.with_log(LogEntry(
            ts=time.time(),
            round=new_state.round,
            phase=GamePhase.ACTION,
            actor=player.player_id,
            action=HAND_REFRESHED,
            diff={"cost": cost},
        ))

        return ActionResult.success_with_state(
            new_state,
            changes=[f"{player.name} refreshed their hand"],
        )

    def _handle_end_turn(self, state: GameState, action: Action) -> ActionResult:
        """
        Pass to the next player, or resolve the round after the last one.

        Each player after the first draws one card as their turn begins.
        """
        if state.phase != GamePhase.ACTION:
            return _wrong_phase(state, GamePhase.ACTION)

        if state.current_player_idx < state.num_players - 1:
            next_idx = state.current_player_idx + 1
            new_state = state._copy_with(current_player_idx=next_idx)
            new_state = draw_card_for_player(new_state, next_idx)
            return ActionResult.success_with_state(
                new_state,
                changes=[f"Turn ended. Next player: {new_state.current_player.name}"],
            )

        new_state = state._copy_with(phase=GamePhase.RESOLUTION)
        return self._handle_process_resolution(new_state, Action.process_resolution())

    def _handle_take_control(self, state: GameState, action: Action) -> ActionResult:
        """Hand a demo game over to manual play."""
        if state.game_mode != GameMode.DEMO:
            return ActionResult.failure("Game is not in Demo mode", ErrorCode.INVALID_MODE)

        new_state = state._copy_with(game_mode=GameMode.MANUAL).with_log(LogEntry(
            ts=time.time(),
            round=state.round,
            phase=state.phase,
            actor=HOST_ACTOR,
            action=TAKE_CONTROL,
        ))
        return ActionResult.success_with_state(new_state, changes=["Demo interrupted"])

    # =========================================================================
    # Resolution phase
    # =========================================================================

    def _handle_process_resolution(self, state: GameState, action: Action) -> ActionResult:
        """
        Apply end-of-round rules and check end conditions.

        R-RES-01: Cost at or above threshold -> Reputation -1
        R-RES-02: Risk at or above threshold -> Compliance -1
        R-RES-03: Compliance at or below the forced-loss line ends the game
        """
        if state.phase != GamePhase.RESOLUTION:
            return _wrong_phase(state, GamePhase.RESOLUTION)

        new_state = state
        end_reason = None
        for idx in range(new_state.num_players):
            player, diff = self._apply_round_rules(new_state.players[idx])
            new_state = new_state.with_player_at(idx, player)

            if diff:
                new_state = new_state.with_log(LogEntry(
                    ts=time.time(),
                    round=new_state.round,
                    phase=GamePhase.RESOLUTION,
                    actor=player.player_id,
                    action=RULE_TRIGGERED,
                    diff=diff,
                ))

            if is_eliminated(player, self.rules) and end_reason is None:
                end_reason = (
                    f"{player.name} compliance fell to {player.metrics.compliance} "
                    f"(<= {self.rules.forced_loss_compliance}); operations suspended"
                )

        if end_reason is None and new_state.round >= new_state.max_rounds:
            end_reason = MAX_ROUNDS_REACHED

        if end_reason is not None:
            return ActionResult.success_with_state(
                self._finish(new_state, end_reason),
                changes=[f"Game over: {end_reason}"],
            )

        next_round = new_state.round + 1
        new_state = new_state._copy_with(
            round=next_round,
            phase=GamePhase.EVENT,
            current_player_idx=0,
            players=tuple(p.with_budget(self.rules.initial_budget) for p in new_state.players),
        ).with_log(LogEntry(
            ts=time.time(),
            round=next_round,
            phase=GamePhase.EVENT,
            actor=SYSTEM_ACTOR,
            action=NEW_ROUND,
        ))
        logger.info("Round %d begins", next_round)

        return ActionResult.success_with_state(new_state, changes=[f"Round {next_round} begins"])

    def _apply_round_rules(self, player: PlayerState) -> tuple[PlayerState, dict]:
        """Apply R-RES-01 and R-RES-02 to one player. Returns (new player, diff)."""
        diff = {}
        metrics = player.metrics

        if metrics.cost >= self.rules.cost_pressure_threshold:
            old = metrics.reputation
            metrics = metrics.with_value(Metric.REPUTATION, clamp_metric(old - 1, self.rules))
            if metrics.reputation != old:
                diff["Reputation"] = {"rule": "R-RES-01", "before": old, "after": metrics.reputation}

        if metrics.risk >= self.rules.risk_pressure_threshold:
            old = metrics.compliance
            metrics = metrics.with_value(Metric.COMPLIANCE, clamp_metric(old - 1, self.rules))
            if metrics.compliance != old:
                diff["Compliance"] = {"rule": "R-RES-02", "before": old, "after": metrics.compliance}

        return player.with_metrics(metrics), diff

    def _finish(self, state: GameState, end_reason: str) -> GameState:
        """Record the winner and end reason."""
        winner_id = determine_winner(state.players, self.rules)
        logger.info("Game %s over (%s); winner %s", state.game_id, end_reason, winner_id)
        return state._copy_with(winner_id=winner_id, end_reason=end_reason).with_log(LogEntry(
            ts=time.time(),
            round=state.round,
            phase=GamePhase.RESOLUTION,
            actor=SYSTEM_ACTOR,
            action=GAME_OVER,
            diff={"winner_id": winner_id, "end_reason": end_reason},
        ))


def _wrong_phase(state: GameState, expected: GamePhase) -> ActionResult:
    return ActionResult.failure(
        f"Action requires {expected.value} phase, game is in {state.phase.value}",
        ErrorCode.WRONG_PHASE,
    )


# =============================================================================
# Convenience entry points (silent no-op on rejection)
# =============================================================================

def apply_action(
    catalog: CardCatalog,
    state: GameState,
    action: Action,
    rules: RulesConfig = DEFAULT_RULES,
) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    reducer = Reducer(catalog=catalog, rules=rules)
    return reducer.apply(state, action)


def _apply_or_keep(
    catalog: CardCatalog,
    state: GameState,
    action: Action,
    rules: RulesConfig,
) -> GameState:
    result = apply_action(catalog, state, action, rules)
    return result.new_state if result.success else state


def process_event_phase(
    catalog: CardCatalog, state: GameState, rules: RulesConfig = DEFAULT_RULES
) -> GameState:
    """Run the Event phase. Returns the input state when rejected."""
    return _apply_or_keep(catalog, state, Action.process_event(), rules)


def play_card(
    catalog: CardCatalog, state: GameState, card_id: str, rules: RulesConfig = DEFAULT_RULES
) -> GameState:
    """Play a card for the current player. Returns the input state when rejected."""
    return _apply_or_keep(catalog, state, Action.play_card(card_id), rules)


def refresh_hand(
    catalog: CardCatalog, state: GameState, rules: RulesConfig = DEFAULT_RULES
) -> GameState:
    """Refresh the current player's hand. Returns the input state when rejected."""
    return _apply_or_keep(catalog, state, Action.refresh_hand(), rules)


def end_player_turn(
    catalog: CardCatalog, state: GameState, rules: RulesConfig = DEFAULT_RULES
) -> GameState:
    """End the current player's turn. Returns the input state when rejected."""
    return _apply_or_keep(catalog, state, Action.end_turn(), rules)


def process_resolution_phase(
    catalog: CardCatalog, state: GameState, rules: RulesConfig = DEFAULT_RULES
) -> GameState:
    """Run the Resolution phase. Returns the input state when rejected."""
    return _apply_or_keep(catalog, state, Action.process_resolution(), rules)


def take_control(
    catalog: CardCatalog, state: GameState, rules: RulesConfig = DEFAULT_RULES
) -> GameState:
    """Switch a demo game to manual play. Returns the input state when rejected."""
    return _apply_or_keep(catalog, state, Action.take_control(), rules)
