"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to engine calls
2. Manages sessions
3. Runs demo ticks on request
4. Formats responses for the presentation layer

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging

from .schemas import (
    # Requests
    CreateGameRequest,
    # Responses
    AutoMoveResponse,
    CatalogResponse,
    EndGameResponse,
    ErrorResponse,
    GameListResponse,
    GameStateResponse,
    GameSummary,
    LogResponse,
    # Shared
    CardInfo,
    LogEntryInfo,
    MetricsInfo,
    PlayerInfo,
    # Enums
    ErrorCode,
)
from ..engine_core.action import Action, ActionResult
from ..engine_core.action_generator import get_auto_move
from ..engine_core.metrics import calculate_score, is_eliminated
from ..engine_core.state import GameMode, GameState
from ..games.esg_wings import create_esg_wings_catalog
from ..session import DemoLoop, Session, SessionManager
from ..spec_schema.effect_dsl import describe_effect

logger = logging.getLogger(__name__)


def _default_session_manager() -> SessionManager:
    return SessionManager(catalog=create_esg_wings_catalog())


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()

        # Start a game
        game = service.create_game(CreateGameRequest(player_count=3))

        # Play
        game = service.process_event(game.session_id)
        game = service.play_card(game.session_id, "ACT_S_001")

    Every method returns either its response model or an ErrorResponse.
    """
    session_manager: SessionManager = field(default_factory=_default_session_manager)

    # =========================================================================
    # Games
    # =========================================================================

    def create_game(self, request: CreateGameRequest) -> GameStateResponse | ErrorResponse:
        """Start a new game in its own session."""
        try:
            session = self.session_manager.create_session(
                player_count=request.player_count,
                max_rounds=request.max_rounds,
                mode=GameMode(request.mode.value),
                seed=request.seed,
            )
        except ValueError as e:
            return ErrorResponse(error=str(e), error_code=ErrorCode.VALIDATION_ERROR)
        return self._game_to_response(session)

    def get_game(self, session_id: str) -> GameStateResponse | ErrorResponse:
        """Get the current view of a game."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return _not_found(session_id)
        return self._game_to_response(session)

    def list_games(self) -> GameListResponse:
        """List every game held in memory."""
        games = [
            GameSummary(
                session_id=s.session_id,
                game_id=s.game_state.game_id,
                round=s.game_state.round,
                phase=s.game_state.phase.value,
                mode=s.game_state.game_mode.value,
                is_over=s.game_state.is_over,
            )
            for s in self.session_manager.list_sessions()
        ]
        return GameListResponse(games=games, count=len(games))

    def end_game(self, session_id: str) -> EndGameResponse:
        """End a game and drop its state."""
        success = self.session_manager.end_session(session_id)
        return EndGameResponse(success=success, session_id=session_id)

    # =========================================================================
    # Turn actions
    # =========================================================================

    def process_event(self, session_id: str) -> GameStateResponse | ErrorResponse:
        return self._apply(session_id, Action.process_event())

    def play_card(self, session_id: str, card_id: str) -> GameStateResponse | ErrorResponse:
        return self._apply(session_id, Action.play_card(card_id))

    def refresh_hand(self, session_id: str) -> GameStateResponse | ErrorResponse:
        return self._apply(session_id, Action.refresh_hand())

    def end_turn(self, session_id: str) -> GameStateResponse | ErrorResponse:
        return self._apply(session_id, Action.end_turn())

    def take_control(self, session_id: str) -> GameStateResponse | ErrorResponse:
        """Interrupt a demo game; it continues in Manual mode."""
        return self._apply(session_id, Action.take_control())

    def demo_step(self, session_id: str) -> GameStateResponse | ErrorResponse:
        """
        Advance a Demo-mode game by one tick.

        The host calls this on its own timer.
        """
        session = self.session_manager.get_session(session_id)
        if not session:
            return _not_found(session_id)

        state = session.game_state
        if state.is_over:
            return ErrorResponse(error="Game is over", error_code=ErrorCode.GAME_OVER)
        if state.game_mode != GameMode.DEMO:
            return ErrorResponse(error="Game is not in Demo mode", error_code=ErrorCode.INVALID_MODE)

        session.game_state = DemoLoop(catalog=session.catalog, rules=session.rules).step(state)
        return self._game_to_response(session)

    def auto_move(self, session_id: str) -> AutoMoveResponse | ErrorResponse:
        """What the autoplay heuristic would do for the current player."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return _not_found(session_id)
        move = get_auto_move(session.catalog, session.game_state)
        return AutoMoveResponse(action=move.action.value, card_id=move.card_id)

    def get_log(self, session_id: str) -> LogResponse | ErrorResponse:
        """The in-game audit log, oldest first."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return _not_found(session_id)
        entries = [
            LogEntryInfo(
                ts=entry.ts,
                round=entry.round,
                phase=entry.phase.value,
                actor=entry.actor,
                action=entry.action,
                card_id=entry.card_id,
                diff=entry.diff,
            )
            for entry in session.game_state.logs
        ]
        return LogResponse(session_id=session_id, entries=entries, count=len(entries))

    # =========================================================================
    # Catalog
    # =========================================================================

    def get_catalog(self) -> CatalogResponse:
        """The catalog new games are built from."""
        catalog = self.session_manager.catalog
        return CatalogResponse(
            catalog_id=catalog.catalog_id,
            cards=[
                CardInfo(
                    card_id=card.id,
                    name=card.name,
                    card_type=card.card_type.value,
                    cost=card.cost,
                    description=card.description,
                    tags=list(card.tags),
                    effects=[describe_effect(e) for e in card.effects],
                    source_note=card.source_note,
                )
                for card in catalog.values()
            ],
            event_deck_ids=list(catalog.event_deck_ids),
            main_deck_ids=list(catalog.main_deck_ids),
        )

    # =========================================================================
    # Helpers
    # =========================================================================

    def _apply(self, session_id: str, action: Action) -> GameStateResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return _not_found(session_id)

        result = session.apply(action)
        if not result.success:
            return _rejection(result)
        return self._game_to_response(session, changes=result.state_changes)

    def _game_to_response(
        self,
        session: Session,
        changes: list[str] | None = None,
    ) -> GameStateResponse:
        state = session.game_state
        rules = session.rules
        return GameStateResponse(
            session_id=session.session_id,
            game_id=state.game_id,
            round=state.round,
            max_rounds=state.max_rounds,
            phase=state.phase.value,
            mode=state.game_mode.value,
            current_player_id=state.current_player.player_id,
            players=[
                PlayerInfo(
                    player_id=p.player_id,
                    name=p.name,
                    is_human=p.is_human,
                    is_current_turn=i == state.current_player_idx,
                    budget=p.budget,
                    metrics=MetricsInfo.model_validate(p.metrics),
                    hand=list(p.hand),
                    score=calculate_score(p.metrics, rules),
                    eliminated=is_eliminated(p, rules),
                )
                for i, p in enumerate(state.players)
            ],
            deck_sizes=_deck_sizes(state),
            winner_id=state.winner_id,
            end_reason=state.end_reason,
            is_over=state.is_over,
            demo_seed=state.demo_seed,
            ruleset_version=state.ruleset_version,
            changes=changes or [],
        )


def _deck_sizes(state: GameState) -> dict[str, int]:
    decks = state.decks
    return {
        "event_deck": len(decks.event_deck),
        "event_discard": len(decks.event_discard),
        "main_deck": len(decks.main_deck),
        "main_discard": len(decks.main_discard),
    }


def _not_found(session_id: str) -> ErrorResponse:
    return ErrorResponse(
        error=f"Game {session_id} not found",
        error_code=ErrorCode.GAME_NOT_FOUND,
    )


def _rejection(result: ActionResult) -> ErrorResponse:
    code = result.error_code.value if result.error_code else ErrorCode.INTERNAL_ERROR.value
    try:
        error_code = ErrorCode(code)
    except ValueError:
        error_code = ErrorCode.INTERNAL_ERROR
    logger.debug("Action rejected: %s (%s)", result.error, error_code.value)
    return ErrorResponse(error=result.error or "Action rejected", error_code=error_code)
