"""
Session Manager - Creates and manages game sessions.

LIFECYCLE:
1. A host creates a game -> lobby with a 6-character game code
2. Players join -> next free seat, up to the seat cap
3. The host starts the game -> initial GameState is dealt
4. Every action runs as one transaction: read state -> apply -> write
5. Game ends -> session stays readable until ended or cleaned up

CONCURRENCY:
- One lock per game serializes its transactions
- A manager-wide lock guards the session table only

PERSISTENCE:
- In-memory only. GameState.to_dict() is the record a persistent
  collaborator would store.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any
import logging
import secrets
import threading
import time
import uuid

from ..config import EngineSettings, get_settings
from ..exceptions import GameNotFoundError, LobbyError
from ..game.rules import RulesConfig, DEFAULT_RULES
from ..game.setup import LobbyPlayer, setup_game
from ..engine_core.state import GameState
from ..engine_core.action import ActionResult
from ..engine_core.reducer import Reducer
from ..api.schemas import PlayerView
from ..api.view import project

logger = logging.getLogger(__name__)

# No ambiguous characters (0/O, 1/I)
GAME_CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
GAME_CODE_LENGTH = 6
MAX_NAME_LENGTH = 20


class SessionPhase(Enum):
    """Lifecycle phase of a game session."""
    LOBBY = "lobby"
    PLAYING = "playing"
    FINISHED = "finished"


@dataclass
class Session:
    """
    One game: its lobby, then its authoritative state.

    The lock must be held while reading-then-writing `state`.
    """
    game_id: str
    created_at: float
    rules: RulesConfig = field(default_factory=lambda: DEFAULT_RULES)
    seed: int | None = None
    phase: SessionPhase = SessionPhase.LOBBY
    lobby: list[LobbyPlayer] = field(default_factory=list)
    state: GameState | None = None
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    @property
    def host_id(self) -> str | None:
        return self.lobby[0].id if self.lobby else None

    def is_active(self) -> bool:
        """Check if session is still active."""
        return self.phase in {SessionPhase.LOBBY, SessionPhase.PLAYING}


def clean_player_name(name: Any) -> str:
    """
    Trim a display name and cap it at MAX_NAME_LENGTH characters.

    Raises LobbyError for missing or blank names.
    """
    if not isinstance(name, str) or not name.strip():
        raise LobbyError("Name required")
    return name.strip()[:MAX_NAME_LENGTH]


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create lobbies and seat players
    - Start games
    - Apply actions atomically per game
    - Project views
    - Clean up finished sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(
        self,
        settings: EngineSettings | None = None,
        rules: RulesConfig | None = None,
    ):
        self._settings = settings or get_settings()
        self._rules = rules or DEFAULT_RULES
        self._reducer = Reducer(settings=self._settings)
        self._sessions: dict[str, Session] = {}
        self._table_lock = threading.Lock()

    @property
    def max_seats(self) -> int:
        return min(self._settings.max_players, self._rules.max_players)

    # =========================================================================
    # Lobby
    # =========================================================================

    def create_game(self, player_name: str, seed: int | None = None) -> tuple[str, str]:
        """
        Create a lobby with the caller as host (seat 0).

        Returns (game_id, player_id).
        """
        name = clean_player_name(player_name)
        host_id = str(uuid.uuid4())

        with self._table_lock:
            for _ in range(5):
                game_id = "".join(
                    secrets.choice(GAME_CODE_ALPHABET) for _ in range(GAME_CODE_LENGTH)
                )
                if game_id not in self._sessions:
                    break
            else:
                raise LobbyError("Could not generate unique game code")

            session = Session(
                game_id=game_id,
                created_at=time.time(),
                rules=self._rules,
                seed=seed,
                lobby=[LobbyPlayer(id=host_id, name=name, seat_index=0)],
            )
            self._sessions[game_id] = session

        logger.info("Game %s created by %s", game_id, name)
        return game_id, host_id

    def join_game(self, game_id: str, player_name: str) -> str:
        """Seat a new player in a lobby. Returns the new player id."""
        name = clean_player_name(player_name)
        session = self.get_session(game_id)
        with session.lock:
            if session.phase != SessionPhase.LOBBY:
                raise LobbyError("Game already started")
            if len(session.lobby) >= self.max_seats:
                raise LobbyError(f"Game is full ({self.max_seats} players max)")
            player_id = str(uuid.uuid4())
            session.lobby.append(
                LobbyPlayer(id=player_id, name=name, seat_index=len(session.lobby))
            )
        logger.info("%s joined game %s (seat %d)", name, game_id, len(session.lobby) - 1)
        return player_id

    def start_game(self, game_id: str, player_id: str) -> GameState:
        """Deal the game. Only the host may start, with at least two seats."""
        session = self.get_session(game_id)
        with session.lock:
            if session.phase != SessionPhase.LOBBY:
                raise LobbyError("Game already started")
            if len(session.lobby) < self._rules.min_players:
                raise LobbyError(f"Need at least {self._rules.min_players} players")
            if player_id != session.host_id:
                raise LobbyError("Only the host can start")
            session.state = setup_game(session.lobby, rules=session.rules, seed=session.seed)
            session.phase = SessionPhase.PLAYING
            return session.state

    # =========================================================================
    # Play
    # =========================================================================

    def submit_action(
        self,
        game_id: str,
        player_id: str,
        action_name: str,
        payload: dict[str, Any] | None = None,
    ) -> ActionResult:
        """
        Apply one action as a transaction on the game's state.

        The stored state only changes when the action succeeds.
        """
        session = self.get_session(game_id)
        with session.lock:
            if session.phase == SessionPhase.LOBBY or session.state is None:
                raise LobbyError("Game is not in progress")
            result = self._reducer.apply(session.state, player_id, action_name, payload)
            if result.success:
                session.state = result.new_state
                if session.state.is_over and session.phase != SessionPhase.FINISHED:
                    session.phase = SessionPhase.FINISHED
                    logger.info("Game %s finished, winner=%s", game_id, session.state.winner)
            return result

    def get_view(self, game_id: str, player_id: str) -> PlayerView:
        """Project the current state for one player."""
        session = self.get_session(game_id)
        with session.lock:
            if session.state is None:
                raise LobbyError("Game is not in progress")
            return project(session.state, player_id)

    def get_state(self, game_id: str) -> GameState | None:
        """A copy of the current authoritative state (None in the lobby)."""
        session = self.get_session(game_id)
        with session.lock:
            return session.state.clone() if session.state else None

    # =========================================================================
    # Table
    # =========================================================================

    def get_session(self, game_id: str) -> Session:
        """
        Get a session by game code.

        Raises GameNotFoundError for unknown codes.
        """
        with self._table_lock:
            session = self._sessions.get(game_id)
        if session is None:
            raise GameNotFoundError(game_id)
        return session

    def end_session(self, game_id: str) -> None:
        """Remove a session from memory."""
        with self._table_lock:
            session = self._sessions.pop(game_id, None)
        if session:
            logger.info("Game %s ended", game_id)

    def list_active_sessions(self) -> list[str]:
        """List codes of games in the lobby or in progress."""
        with self._table_lock:
            return [gid for gid, s in self._sessions.items() if s.is_active()]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """
        Remove finished sessions older than max_age.

        Returns the number removed.
        """
        now = time.time()
        with self._table_lock:
            stale = [
                gid for gid, s in self._sessions.items()
                if now - s.created_at > max_age_seconds and not s.is_active()
            ]
            for gid in stale:
                del self._sessions[gid]
        return len(stale)
