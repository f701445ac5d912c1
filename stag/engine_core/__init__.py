"""
Engine Core - Authoritative game state and rule enforcement.

The engine is the runtime that:
1. Holds the GameState aggregate (players, zones, pending action)
2. Validates and dispatches actions via the reducer
3. Resolves multi-step interactions through pending actions
4. Advances turn phases that need no input
5. Detects the end of the game and scores it
"""

from .state import GameState, PlayerState, TurnPhase, WinReason, LogEntry
from .pending import PendingKind, PendingAction, expected_action_name
from .action import Action, ActionType, ActionResult, ErrorCode
from .reducer import Reducer, apply, apply_action
from .action_generator import ActionGenerator, available_actions, legal_actions
from .turn import AutoAdvanceError, auto_advance

__all__ = [
    "GameState",
    "PlayerState",
    "TurnPhase",
    "WinReason",
    "LogEntry",
    "PendingKind",
    "PendingAction",
    "expected_action_name",
    "Action",
    "ActionType",
    "ActionResult",
    "ErrorCode",
    "Reducer",
    "apply",
    "apply_action",
    "ActionGenerator",
    "available_actions",
    "legal_actions",
    "AutoAdvanceError",
    "auto_advance",
]
