"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the exact contract between a presentation layer and the
engine. All responses include explicit types for OpenAPI schema generation.

Error Codes:
- GAME_NOT_FOUND: Game does not exist or has been ended
- WRONG_PHASE: Action is not valid in the current phase
- GAME_OVER: Game already has a winner
- UNKNOWN_CARD: Card id is not in the catalog
- CARD_NOT_IN_HAND: Current player does not hold the card
- INSUFFICIENT_BUDGET: Current player cannot pay
- INVALID_MODE: Take-control requested outside Demo mode
- VALIDATION_ERROR: Request parameters are invalid
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class ErrorCode(str, Enum):
    """Structured error codes."""
    GAME_NOT_FOUND = "GAME_NOT_FOUND"
    WRONG_PHASE = "WRONG_PHASE"
    GAME_OVER = "GAME_OVER"
    UNKNOWN_CARD = "UNKNOWN_CARD"
    CARD_NOT_IN_HAND = "CARD_NOT_IN_HAND"
    INSUFFICIENT_BUDGET = "INSUFFICIENT_BUDGET"
    INVALID_MODE = "INVALID_MODE"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class GameModeName(str, Enum):
    """Game modes accepted by the API."""
    MANUAL = "Manual"
    DEMO = "Demo"


# =============================================================================
# Shared Models
# =============================================================================

class MetricsInfo(BaseModel):
    """The five ESG metrics."""
    carbon: int
    cost: int
    compliance: int
    reputation: int
    risk: int

    model_config = {"from_attributes": True}


class CardInfo(BaseModel):
    """Card information for display."""
    card_id: str
    name: str
    card_type: str
    cost: int = 0
    description: str = ""
    tags: list[str] = Field(default_factory=list)
    effects: list[str] = Field(default_factory=list, description="Readable effect summaries")
    source_note: str = ""


class PlayerInfo(BaseModel):
    """Player information for display."""
    player_id: str
    name: str
    is_human: bool
    is_current_turn: bool = False
    budget: int = 0
    metrics: MetricsInfo
    hand: list[str] = Field(default_factory=list)
    score: int = 0
    eliminated: bool = False


class LogEntryInfo(BaseModel):
    """One entry of the in-game audit log."""
    ts: float
    round: int
    phase: str
    actor: str
    action: str
    card_id: Optional[str] = None
    diff: Optional[dict[str, Any]] = None


# =============================================================================
# Request Models
# =============================================================================

class CreateGameRequest(BaseModel):
    """Request to start a new game."""
    player_count: int = Field(2, ge=2, le=4, description="Number of airlines (2-4)")
    max_rounds: int = Field(5, ge=1, description="Rounds before scoring")
    mode: GameModeName = Field(GameModeName.MANUAL, description="Manual or Demo")
    seed: Optional[int] = Field(None, description="Seed for reproducible shuffles")


class PlayCardRequest(BaseModel):
    """Request to play a card from the current player's hand."""
    card_id: str = Field(..., description="Catalog id of the card to play")


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class GameStateResponse(BaseModel):
    """Full game view."""
    session_id: str
    game_id: str
    round: int
    max_rounds: int
    phase: str
    mode: str
    current_player_id: str
    players: list[PlayerInfo] = Field(default_factory=list)
    deck_sizes: dict[str, int] = Field(default_factory=dict)
    winner_id: Optional[str] = Field(None, description="Player id or DRAW once the game is over")
    end_reason: Optional[str] = None
    is_over: bool = False
    demo_seed: int = 0
    ruleset_version: str = "1.0"
    changes: list[str] = Field(default_factory=list, description="Summary of the last applied action")


class GameSummary(BaseModel):
    """Short listing entry for a game."""
    session_id: str
    game_id: str
    round: int
    phase: str
    mode: str
    is_over: bool


class GameListResponse(BaseModel):
    """List of games held in memory."""
    games: list[GameSummary] = Field(default_factory=list)
    count: int = 0


class EndGameResponse(BaseModel):
    """Response when ending a game."""
    success: bool
    session_id: str


class AutoMoveResponse(BaseModel):
    """The autoplay suggestion for the current player."""
    action: str = Field(..., description="PLAY or END")
    card_id: Optional[str] = None


class LogResponse(BaseModel):
    """The in-game audit log."""
    session_id: str
    entries: list[LogEntryInfo] = Field(default_factory=list)
    count: int = 0


class CatalogResponse(BaseModel):
    """The card catalog games are built from."""
    catalog_id: str
    cards: list[CardInfo] = Field(default_factory=list)
    event_deck_ids: list[str] = Field(default_factory=list)
    main_deck_ids: list[str] = Field(default_factory=list)


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "healthy"
    version: str
    environment: str
    active_games: int = 0
