"""
Kingdom actions A and B: draw a card, or draft the kingdom.

Drafting: the active player takes one kingdom card, then each
non-eliminated opponent, clockwise, takes one in turn through a
draftKingdom pending action. When the queue or the kingdom runs out,
leftovers are discarded and the turn moves to the territory action.
"""

from __future__ import annotations
import logging

from ...game.cards import card_display_name
from ..state import GameState, PlayerState, TurnPhase
from ..pending import PendingDraftKingdom
from ..payloads import CardPayload, EmptyPayload
from ..scoring import trigger_deck_exhaustion
from ..turn import set_phase
from ..zones import (
    draw_card,
    take_from_kingdom,
    discard_kingdom,
    get_opponent_seats_in_order,
    live_seats,
)
from .common import require_phase, responder_mismatch

logger = logging.getLogger(__name__)


def handle_draw_card(state: GameState, player: PlayerState, payload: EmptyPayload) -> str | None:
    """Kingdom action A: draw one card from the top of the deck."""
    error = require_phase(state, TurnPhase.KINGDOM_ACTION)
    if error:
        return error

    card = draw_card(state)
    if card is None:
        trigger_deck_exhaustion(state)
        return None
    player.hand.append(card)
    state.add_log(f"{player.name} draws a card.")
    set_phase(state, TurnPhase.TERRITORY_ACTION)
    return None


def handle_draft_kingdom(state: GameState, player: PlayerState, payload: CardPayload) -> str | None:
    """Kingdom action B: take a kingdom card, then opponents draft in turn."""
    error = require_phase(state, TurnPhase.KINGDOM_ACTION)
    if error:
        return error
    if not state.kingdom:
        return "Kingdom is empty"
    if payload.card_id not in state.kingdom:
        return "Card is not in the Kingdom"

    take_from_kingdom(state, player, payload.card_id)
    state.add_log(f"{player.name} drafts {card_display_name(payload.card_id)} from the Kingdom.")

    opponents = get_opponent_seats_in_order(state, player.seat_index)
    if opponents and state.kingdom:
        state.pending_action = PendingDraftKingdom(
            current_drafter_seat=opponents[0],
            remaining_drafter_seats=opponents[1:],
        )
        return None

    _finish_draft(state)
    return None


def handle_draft_kingdom_pick(state: GameState, player: PlayerState, payload: CardPayload) -> str | None:
    """An opponent's pick during a kingdom draft."""
    pending = state.pending_action
    if not isinstance(pending, PendingDraftKingdom):
        return "No pending draft"
    error = responder_mismatch(pending.current_drafter_seat, player)
    if error:
        return error
    if payload.card_id not in state.kingdom:
        return "Card is not in the Kingdom"

    take_from_kingdom(state, player, payload.card_id)
    state.add_log(f"{player.name} drafts {card_display_name(payload.card_id)} from the Kingdom.")

    remaining = live_seats(state, pending.remaining_drafter_seats)
    if remaining and state.kingdom:
        state.pending_action = PendingDraftKingdom(
            current_drafter_seat=remaining[0],
            remaining_drafter_seats=remaining[1:],
        )
        return None

    state.pending_action = None
    _finish_draft(state)
    return None


def _finish_draft(state: GameState) -> None:
    discard_kingdom(state)
    set_phase(state, TurnPhase.TERRITORY_ACTION)
    logger.debug("Kingdom draft finished")
