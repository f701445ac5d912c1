"""Validation helpers shared by the action handlers."""

from __future__ import annotations

from ...game.cards import CardType, DISPLAY_NAMES, is_type
from ..state import GameState, PlayerState, TurnPhase


def require_phase(state: GameState, phase: TurnPhase) -> str | None:
    if state.turn_phase != phase:
        return f"Not in {phase.value} phase"
    return None


def validate_selection(
    pool: list[str],
    card_ids: list[str],
    count: int,
    where: str = "your hand",
) -> str | None:
    """
    Check an exact-count selection of distinct cards from a zone.

    Returns an error message, or None if the selection is valid.
    """
    if len(card_ids) != count:
        return f"Must select exactly {count} card(s), got {len(card_ids)}"
    if len(set(card_ids)) != len(card_ids):
        return "Duplicate cards in selection"
    for card_id in card_ids:
        if card_id not in pool:
            return f"Card {card_id} is not in {where}"
    return None


def responder_mismatch(expected_seat: int, player: PlayerState) -> str | None:
    if expected_seat != player.seat_index:
        return "Not your turn to respond"
    return None


def require_territory_card(
    state: GameState, player: PlayerState, card_id: str, card_type: CardType
) -> str | None:
    """Shared checks for playTerritory: phase, card type and ownership."""
    error = require_phase(state, TurnPhase.TERRITORY_ACTION)
    if error:
        return error
    if not is_type(card_id, card_type):
        return f"Not a {DISPLAY_NAMES[card_type]} card"
    if card_id not in player.hand:
        return "Card not in your hand"
    return None
