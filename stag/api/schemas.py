"""
Pydantic Schemas for the player view.

These models define the exact contract between a client and the engine:
what one player is allowed to see of a game. Field names are snake_case
in Python and camelCase on the wire (model_dump(by_alias=True)).

Hidden information:
- Only the viewer's own hand is listed; opponents show a hand count
- Deck and burned cards are counts only
- Kingdom, discard pile and territories are public
"""

from __future__ import annotations
from typing import Any, Optional

from pydantic import BaseModel, Field


class ViewModel(BaseModel):
    """Base model: camelCase aliases, populated by field name."""
    model_config = {"populate_by_name": True, "from_attributes": True}


# =============================================================================
# Shared Models
# =============================================================================

class LogEntryInfo(ViewModel):
    """One public log line."""
    msg: str
    ts: float


class PublicPlayerInfo(ViewModel):
    """What every player can see about a seat."""
    id: str
    name: str
    seat_index: int = Field(..., alias="seatIndex")
    hand_count: int = Field(..., alias="handCount")
    territory: list[str] = Field(default_factory=list)
    territory_magi_as_healing: list[str] = Field(
        default_factory=list, alias="territoryMagiAsHealing"
    )
    contributions_remaining: int = Field(..., alias="contributionsRemaining")
    contributions_made: int = Field(..., alias="contributionsMade")
    ante: int
    eliminated: bool = False
    is_me: bool = Field(False, alias="isMe")


class ScoreInfo(ViewModel):
    """One row of the final deck-exhaustion ranking."""
    player_id: str = Field(..., alias="playerId")
    name: str
    seat_index: int = Field(..., alias="seatIndex")
    stag_points: int = Field(..., alias="stagPoints")
    tithe_count: int = Field(..., alias="titheCount")
    tithe_points: int = Field(..., alias="tithePoints")
    contributions: int
    score: int
    tiebreak: list[int] = Field(default_factory=list)


# =============================================================================
# Player View
# =============================================================================

class PlayerView(ViewModel):
    """
    The projected game state for one player.

    is_my_turn is true when the viewer must act next: the pending
    action's responder if one is outstanding, else the current player.
    """
    game_over: bool = Field(False, alias="gameOver")

    # Viewer
    my_id: str = Field(..., alias="myId")
    my_seat: int = Field(..., alias="mySeat")
    my_hand: list[str] = Field(default_factory=list, alias="myHand")
    my_territory: list[str] = Field(default_factory=list, alias="myTerritory")
    my_territory_magi_as_healing: list[str] = Field(
        default_factory=list, alias="myTerritoryMagiAsHealing"
    )
    my_contributions_remaining: int = Field(..., alias="myContributionsRemaining")
    my_contributions_made: int = Field(..., alias="myContributionsMade")
    my_hand_limit: int = Field(..., alias="myHandLimit")
    my_healing_value: int = Field(0, alias="myHealingValue")
    eliminated: bool = False

    # Table
    players: list[PublicPlayerInfo] = Field(default_factory=list)
    kingdom: list[str] = Field(default_factory=list)
    discard: list[str] = Field(default_factory=list)
    deck_count: int = Field(..., alias="deckCount")
    burned_count: int = Field(..., alias="burnedCount")

    # Turn
    current_player_seat: Optional[int] = Field(None, alias="currentPlayerSeat")
    current_player_name: Optional[str] = Field(None, alias="currentPlayerName")
    is_my_turn: bool = Field(False, alias="isMyTurn")
    turn_phase: str = Field(..., alias="turnPhase")
    pending_action: Optional[dict[str, Any]] = Field(None, alias="pendingAction")
    available_actions: list[str] = Field(default_factory=list, alias="availableActions")

    # Log and result
    log: list[LogEntryInfo] = Field(default_factory=list)
    winner: Optional[str] = None
    win_reason: Optional[str] = Field(None, alias="winReason")
    final_scores: list[ScoreInfo] = Field(default_factory=list, alias="finalScores")
