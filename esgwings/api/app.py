"""
FastAPI Application - REST API for a local presentation layer.

Endpoints:
    GET    /api/v1/health                    Health check
    GET    /api/v1/catalog                   Card catalog
    POST   /api/v1/games                     Start a game
    GET    /api/v1/games                     List games
    GET    /api/v1/games/{id}                Get game state
    DELETE /api/v1/games/{id}                End game
    POST   /api/v1/games/{id}/event          Run the Event phase
    POST   /api/v1/games/{id}/play           Play a card
    POST   /api/v1/games/{id}/refresh        Refresh the hand
    POST   /api/v1/games/{id}/end-turn       End the current turn
    POST   /api/v1/games/{id}/take-control   Interrupt a demo game
    POST   /api/v1/games/{id}/demo-step      Advance a demo game one tick
    GET    /api/v1/games/{id}/auto-move      Autoplay suggestion
    GET    /api/v1/games/{id}/log            In-game audit log

Demo games are driven by the client: it calls /demo-step on its own timer.
All responses are JSON with explicit Pydantic schemas.
"""

from typing import Union
import logging
import os

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from .service import APIService
from .schemas import (
    # Request models
    CreateGameRequest,
    PlayCardRequest,
    # Response models
    AutoMoveResponse,
    CatalogResponse,
    EndGameResponse,
    ErrorResponse,
    GameListResponse,
    GameStateResponse,
    HealthResponse,
    LogResponse,
    # Enums
    ErrorCode,
)

logger = logging.getLogger(__name__)

# Environment configuration
ESGWINGS_ENV = os.getenv("ESGWINGS_ENV", "development")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")

STATUS_BY_ERROR = {
    ErrorCode.GAME_NOT_FOUND: 404,
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.INTERNAL_ERROR: 500,
}

GAME_RESPONSES = {
    404: {"model": ErrorResponse, "description": "Game not found"},
    409: {"model": ErrorResponse, "description": "Action rejected"},
}


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    app = FastAPI(
        title="ESG Wings Engine API",
        description="""
Turn-based airline ESG strategy game engine.

## Round structure

1. **Event** - `POST /event` draws an event that hits every airline
2. **Action** - each player plays cards (`/play`), refreshes (`/refresh`), then `/end-turn`
3. **Resolution** - runs automatically after the last player ends their turn

## Error Codes

| Code | Description |
|------|-------------|
| `GAME_NOT_FOUND` | Game does not exist |
| `WRONG_PHASE` | Action not valid in the current phase |
| `GAME_OVER` | Game already finished |
| `UNKNOWN_CARD` | Card id not in catalog |
| `CARD_NOT_IN_HAND` | Card not held by the current player |
| `INSUFFICIENT_BUDGET` | Not enough budget |
| `INVALID_MODE` | Game is not in Demo mode |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService()

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(error: ErrorResponse) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=STATUS_BY_ERROR.get(error.error_code, 409),
            content=error.model_dump(mode="json"),
        )

    def respond(response):
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=422,
            content=ErrorResponse(
                error="Invalid request",
                error_code=ErrorCode.VALIDATION_ERROR,
                details={"errors": jsonable_encoder(exc.errors())},
            ).model_dump(mode="json"),
        )

    # =========================================================================
    # Health and catalog
    # =========================================================================

    @app.get(
        "/api/v1/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health() -> HealthResponse:
        return HealthResponse(
            status="healthy",
            version=__version__,
            environment=ESGWINGS_ENV,
            active_games=len(api_service.session_manager.list_active_sessions()),
        )

    @app.get(
        "/api/v1/catalog",
        response_model=CatalogResponse,
        tags=["Cards"],
        summary="List the card catalog",
    )
    async def get_catalog() -> CatalogResponse:
        return api_service.get_catalog()

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/games",
        response_model=GameStateResponse,
        status_code=201,
        responses={400: {"model": ErrorResponse, "description": "Invalid parameters"}},
        tags=["Games"],
        summary="Start a new game",
    )
    async def create_game(request: CreateGameRequest) -> Union[GameStateResponse, JSONResponse]:
        """
        Start a new game.

        The game begins in round 1, Event phase. Pass `seed` to reproduce
        shuffles.
        """
        return respond(api_service.create_game(request))

    @app.get(
        "/api/v1/games",
        response_model=GameListResponse,
        tags=["Games"],
        summary="List games",
    )
    async def list_games() -> GameListResponse:
        return api_service.list_games()

    @app.get(
        "/api/v1/games/{session_id}",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Games"],
        summary="Get game state",
    )
    async def get_game(session_id: str) -> Union[GameStateResponse, JSONResponse]:
        return respond(api_service.get_game(session_id))

    @app.delete(
        "/api/v1/games/{session_id}",
        response_model=EndGameResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Games"],
        summary="End a game",
    )
    async def end_game(session_id: str) -> Union[EndGameResponse, JSONResponse]:
        """End a game and release its state."""
        response = api_service.end_game(session_id)
        if not response.success:
            return make_error_response(ErrorResponse(
                error=f"Game {session_id} not found",
                error_code=ErrorCode.GAME_NOT_FOUND,
            ))
        return response

    # =========================================================================
    # Turn Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/games/{session_id}/event",
        response_model=GameStateResponse,
        responses=GAME_RESPONSES,
        tags=["Game Loop"],
        summary="Run the Event phase",
    )
    async def process_event(session_id: str) -> Union[GameStateResponse, JSONResponse]:
        return respond(api_service.process_event(session_id))

    @app.post(
        "/api/v1/games/{session_id}/play",
        response_model=GameStateResponse,
        responses=GAME_RESPONSES,
        tags=["Game Loop"],
        summary="Play a card",
    )
    async def play_card(
        session_id: str,
        request: PlayCardRequest,
    ) -> Union[GameStateResponse, JSONResponse]:
        """Play one copy of a card from the current player's hand."""
        return respond(api_service.play_card(session_id, request.card_id))

    @app.post(
        "/api/v1/games/{session_id}/refresh",
        response_model=GameStateResponse,
        responses=GAME_RESPONSES,
        tags=["Game Loop"],
        summary="Refresh the current player's hand",
    )
    async def refresh_hand(session_id: str) -> Union[GameStateResponse, JSONResponse]:
        return respond(api_service.refresh_hand(session_id))

    @app.post(
        "/api/v1/games/{session_id}/end-turn",
        response_model=GameStateResponse,
        responses=GAME_RESPONSES,
        tags=["Game Loop"],
        summary="End the current player's turn",
    )
    async def end_turn(session_id: str) -> Union[GameStateResponse, JSONResponse]:
        """
        End the current turn.

        After the last player the Resolution phase runs and either the next
        round starts or the game ends.
        """
        return respond(api_service.end_turn(session_id))

    @app.post(
        "/api/v1/games/{session_id}/take-control",
        response_model=GameStateResponse,
        responses=GAME_RESPONSES,
        tags=["Game Loop"],
        summary="Interrupt a demo game",
    )
    async def take_control(session_id: str) -> Union[GameStateResponse, JSONResponse]:
        return respond(api_service.take_control(session_id))

    @app.post(
        "/api/v1/games/{session_id}/demo-step",
        response_model=GameStateResponse,
        responses=GAME_RESPONSES,
        tags=["Game Loop"],
        summary="Advance a demo game by one tick",
    )
    async def demo_step(session_id: str) -> Union[GameStateResponse, JSONResponse]:
        return respond(api_service.demo_step(session_id))

    @app.get(
        "/api/v1/games/{session_id}/auto-move",
        response_model=AutoMoveResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game Loop"],
        summary="Get the autoplay suggestion",
    )
    async def auto_move(session_id: str) -> Union[AutoMoveResponse, JSONResponse]:
        return respond(api_service.auto_move(session_id))

    @app.get(
        "/api/v1/games/{session_id}/log",
        response_model=LogResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game Loop"],
        summary="Get the in-game audit log",
    )
    async def get_log(session_id: str) -> Union[LogResponse, JSONResponse]:
        return respond(api_service.get_log(session_id))

    logger.info("ESG Wings API created (env=%s)", ESGWINGS_ENV)
    return app


# For running directly: uvicorn esgwings.api.app:app
app = create_app()
