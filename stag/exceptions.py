"""
Exceptions raised outside the dispatcher.

Rule violations inside a game are never raised: the reducer returns
them as ActionResult failures. These cover misuse of the lobby and
session API and lookups of players or games that do not exist.
"""

from __future__ import annotations


class StagError(Exception):
    """Base class for stag errors."""


class PlayerNotFoundError(StagError):
    """Raised when a player id is not seated in the game."""

    def __init__(self, player_id: str):
        self.player_id = player_id
        super().__init__(f"Player {player_id} not found")


class GameNotFoundError(StagError):
    """Raised when a game id or code does not exist."""

    def __init__(self, game_id: str):
        self.game_id = game_id
        super().__init__(f"Game {game_id} not found")


class LobbyError(StagError):
    """Raised for invalid lobby operations (join, start)."""
