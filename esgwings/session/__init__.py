"""
Session Module - Manages ephemeral game sessions.

A session represents one play-through of a game:
- Created when the host starts a game
- Holds the current game state
- Destroyed when the host ends it

Sessions are EPHEMERAL: no persistence to database.
"""

from .manager import SessionManager, Session
from .game_loop import DemoLoop

__all__ = [
    "SessionManager",
    "Session",
    "DemoLoop",
]
