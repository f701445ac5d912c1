"""
API Module - What a client sees of a game.

project() turns the authoritative state into one player's view,
hiding other hands and the deck order.
"""

from .schemas import PlayerView, PublicPlayerInfo, LogEntryInfo, ScoreInfo
from .view import project

__all__ = [
    "PlayerView",
    "PublicPlayerInfo",
    "LogEntryInfo",
    "ScoreInfo",
    "project",
]
