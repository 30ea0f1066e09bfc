"""
API Module - HTTP interface for a presentation layer.

Exposes the engine via REST API. A client:
1. Creates a game
2. Drives phases and player actions (or demo ticks)
3. Reads state, auto-move suggestions and the audit log

All state is session-scoped and held in memory.
"""

from .schemas import (
    # Requests
    CreateGameRequest,
    PlayCardRequest,
    # Responses
    GameStateResponse,
    GameListResponse,
    AutoMoveResponse,
    LogResponse,
    CatalogResponse,
    ErrorResponse,
    HealthResponse,
    # Shared
    PlayerInfo,
    MetricsInfo,
    CardInfo,
    LogEntryInfo,
    ErrorCode,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CreateGameRequest",
    "PlayCardRequest",
    # Responses
    "GameStateResponse",
    "GameListResponse",
    "AutoMoveResponse",
    "LogResponse",
    "CatalogResponse",
    "ErrorResponse",
    "HealthResponse",
    # Shared
    "PlayerInfo",
    "MetricsInfo",
    "CardInfo",
    "LogEntryInfo",
    "ErrorCode",
    # Service
    "APIService",
    "create_app",
]
