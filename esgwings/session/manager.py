"""
Session Manager - Creates and manages game sessions.

LIFECYCLE:
1. Host starts a game -> create ephemeral session (in-memory only)
2. During the game every action goes through the session's reducer
3. Game ends or host quits -> session destroyed, ALL state deleted

PERSISTENCE RULES:
- NO database for gameplay
- Game state is ephemeral (session-scoped only)
"""

from __future__ import annotations
from dataclasses import dataclass
import logging
import time
import uuid

from ..engine_core.action import Action, ActionResult
from ..engine_core.reducer import Reducer
from ..engine_core.rules import DEFAULT_RULES, RulesConfig
from ..engine_core.setup import initialize_game
from ..engine_core.state import GameMode, GameState
from ..spec_schema.catalog import CardCatalog

logger = logging.getLogger(__name__)


@dataclass
class Session:
    """
    An ephemeral game session.

    Contains:
    - The card catalog the game was built from
    - Current canonical game state

    The session is destroyed when it ends.
    State is NOT persisted.
    """
    session_id: str
    catalog: CardCatalog
    game_state: GameState
    created_at: float
    rules: RulesConfig = DEFAULT_RULES

    def is_active(self) -> bool:
        """A session is active until its game has a winner."""
        return not self.game_state.is_over

    def apply(self, action: Action) -> ActionResult:
        """
        Run an action through the reducer.

        The stored state only changes when the action is applied.
        """
        result = Reducer(catalog=self.catalog, rules=self.rules).apply(self.game_state, action)
        if result.success and result.new_state is not None:
            self.game_state = result.new_state
        return result


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions with a freshly initialized game
    - Track active sessions
    - Clean up finished or stale sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(self, catalog: CardCatalog, rules: RulesConfig = DEFAULT_RULES):
        self.catalog = catalog
        self.rules = rules
        self._sessions: dict[str, Session] = {}

    def create_session(
        self,
        player_count: int,
        max_rounds: int,
        mode: GameMode = GameMode.MANUAL,
        seed: int | None = None,
    ) -> Session:
        """
        Create a new game session.

        Raises ValueError for player or round counts the rules do not allow.
        """
        game_state = initialize_game(
            self.catalog,
            player_count,
            max_rounds,
            mode,
            rules=self.rules,
            seed=seed,
        )
        session = Session(
            session_id=uuid.uuid4().hex,
            catalog=self.catalog,
            game_state=game_state,
            created_at=time.time(),
            rules=self.rules,
        )
        self._sessions[session.session_id] = session
        logger.info("Session %s created for game %s", session.session_id, game_state.game_id)
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str) -> bool:
        """
        End a session and drop its state.

        Returns False when no such session exists.
        """
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        logger.info("Session %s ended", session_id)
        return True

    def list_sessions(self) -> list[Session]:
        """All sessions, oldest first."""
        return sorted(self._sessions.values(), key=lambda s: s.created_at)

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """
        Drop sessions with no interaction for longer than max_age_seconds.

        Returns the number of sessions removed.
        """
        current_time = time.time()
        to_remove = [
            session_id for session_id, session in self._sessions.items()
            if current_time - session.game_state.last_interaction_at > max_age_seconds
        ]
        for session_id in to_remove:
            self.end_session(session_id)
        return len(to_remove)
