"""
Stag - Rules engine for the Stag ante card game

An authoritative, synchronous engine for 2-6 players. It provides:
- Game setup (deck, antes, kingdom)
- Action validation and dispatch
- Multi-player interactions (drafts, hunts, tithes, king's command)
- Turn advancement and endgame scoring
- Per-player views that hide private information
"""

from .engine_core.reducer import apply
from .api.view import project
from .game.setup import setup_game, LobbyPlayer

__version__ = "0.1.0"

__all__ = ["apply", "project", "setup_game", "LobbyPlayer"]
