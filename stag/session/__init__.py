"""
Session Module - In-memory lobbies and games.

The session manager is the transactional wrapper around the engine:
it holds each game's authoritative state and serializes the actions
applied to it.
"""

from .manager import SessionManager, Session, SessionPhase

__all__ = [
    "SessionManager",
    "Session",
    "SessionPhase",
]
