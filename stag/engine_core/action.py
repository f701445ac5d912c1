"""
Action System - Action names, requests, and results.

Actions represent:
1. Turn actions by the current player (draw, draft, play stag, territory)
2. Responses to a pending action (picks, discards, hunt responses, ...)

All state changes flow through actions. Results never raise for rule
violations: a failed action returns ActionResult.failure() and leaves
the state untouched.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any
import time


class ActionType(Enum):
    """Action names accepted by the dispatcher."""
    # Kingdom action (current player)
    DRAW_CARD = "drawCard"
    DRAFT_KINGDOM = "draftKingdom"
    PLAY_STAG = "playStag"

    # Territory action (current player)
    PLAY_TERRITORY = "playTerritory"
    NO_TERRITORY = "noTerritory"

    # Pending responses (designated responder)
    DRAFT_KINGDOM_PICK = "draftKingdomPick"
    STAG_KINGDOM_PICK = "stagKingdomPick"
    HUNT_RESPONSE = "huntResponse"
    HUNT_DISCARD = "huntDiscard"
    MAGI_CHOICE = "magiChoice"
    MAGI_PLACE_CARDS = "magiPlaceCards"
    TITHE_DISCARD = "titheDiscard"
    TITHE_CONTRIBUTE = "titheContribute"
    KING_COMMAND_RESPONSE = "kingCommandResponse"
    KING_COMMAND_COLLECT = "kingCommandCollect"
    DISCARD_TO_HAND_LIMIT = "discardToHandLimit"


class ErrorCode(str, Enum):
    """Structured error codes."""
    GAME_OVER = "GAME_OVER"
    PLAYER_NOT_FOUND = "PLAYER_NOT_FOUND"
    PLAYER_ELIMINATED = "PLAYER_ELIMINATED"
    NOT_YOUR_TURN = "NOT_YOUR_TURN"
    ILLEGAL_ACTION = "ILLEGAL_ACTION"
    INVALID_PAYLOAD = "INVALID_PAYLOAD"
    RULE_VIOLATION = "RULE_VIOLATION"
    HANDLER_ERROR = "HANDLER_ERROR"


@dataclass
class Action:
    """
    A complete player request: who, what, with which parameters.

    The payload is the raw JSON-like record from the client
    (camelCase keys); the reducer validates it.
    """
    player_id: str
    name: str
    payload: dict[str, Any] = field(default_factory=dict)
    timestamp: float = field(default_factory=time.time)

    @classmethod
    def draw_card(cls, player_id: str) -> Action:
        """Factory for the draw-a-card kingdom action."""
        return cls(player_id, ActionType.DRAW_CARD.value)

    @classmethod
    def draft_kingdom(cls, player_id: str, card_id: str) -> Action:
        """Factory for the draft-the-kingdom kingdom action."""
        return cls(player_id, ActionType.DRAFT_KINGDOM.value, {"cardId": card_id})

    @classmethod
    def play_stag(cls, player_id: str, card_id: str, discard_ids: list[str]) -> Action:
        """Factory for playing a stag."""
        return cls(
            player_id,
            ActionType.PLAY_STAG.value,
            {"cardId": card_id, "discardIds": list(discard_ids)},
        )

    @classmethod
    def play_territory(cls, player_id: str, card_id: str) -> Action:
        """Factory for the territory action."""
        return cls(player_id, ActionType.PLAY_TERRITORY.value, {"cardId": card_id})

    @classmethod
    def no_territory(cls, player_id: str) -> Action:
        return cls(player_id, ActionType.NO_TERRITORY.value)

    @classmethod
    def respond(cls, player_id: str, action_type: ActionType, **payload: Any) -> Action:
        """Factory for a pending-action response."""
        return cls(player_id, action_type.value, dict(payload))


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether action succeeded
    - New state (if succeeded)
    - Error message and code (if failed)
    - Log lines the action produced (for UI announcements)
    """
    success: bool
    new_state: Any | None = None  # GameState
    error: str | None = None
    error_code: ErrorCode | None = None
    state_changes: list[str] = field(default_factory=list)

    @classmethod
    def failure(cls, error: str, error_code: ErrorCode = ErrorCode.RULE_VIOLATION) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def success_with_state(cls, state: Any, changes: list[str] | None = None) -> ActionResult:
        """Create a success result with new state."""
        return cls(success=True, new_state=state, state_changes=changes or [])
