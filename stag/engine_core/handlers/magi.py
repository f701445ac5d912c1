"""
Territory action: play a Magi.

The Magi leaves the hand and is held by the pending action while the
player splits six between drawing from the top, drawing from the
bottom and placing hand cards on the bottom. It enters territory once
the split is resolved (or the deck runs out mid-draw).
"""

from __future__ import annotations
import logging

from ...game.cards import CardType, card_display_name
from ..state import GameState, PlayerState, TurnPhase
from ..pending import PendingMagiChoice, PendingMagiPlaceCards
from ..payloads import CardListPayload, CardPayload, MagiChoicePayload
from ..scoring import trigger_deck_exhaustion
from ..turn import set_phase
from ..zones import draw_card, draw_bottom_card, place_on_bottom
from .common import require_territory_card, responder_mismatch, validate_selection

logger = logging.getLogger(__name__)


def handle_play_magi(state: GameState, player: PlayerState, payload: CardPayload) -> str | None:
    error = require_territory_card(state, player, payload.card_id, CardType.MAGI)
    if error:
        return error

    player.hand.remove(payload.card_id)
    state.add_log(f"{player.name} plays {card_display_name(payload.card_id)}.")
    state.pending_action = PendingMagiChoice(
        player_seat=player.seat_index,
        magi_card_id=payload.card_id,
    )
    return None


def handle_magi_choice(state: GameState, player: PlayerState, payload: MagiChoicePayload) -> str | None:
    pending = state.pending_action
    if not isinstance(pending, PendingMagiChoice):
        return "No pending magi choice"
    error = responder_mismatch(pending.player_seat, player)
    if error:
        return error

    draw_top, draw_bottom, place_bottom = payload.draw_top, payload.draw_bottom, payload.place_bottom
    if min(draw_top, draw_bottom, place_bottom) < 0:
        return "Split values must be non-negative"
    total = state.rules.magi_split_total
    if draw_top + draw_bottom + place_bottom != total:
        return f"Split must total exactly {total}"

    magi_card_id = pending.magi_card_id

    for draw, count, where in (
        (draw_card, draw_top, "top"),
        (draw_bottom_card, draw_bottom, "bottom"),
    ):
        if not count:
            continue
        for _ in range(count):
            card = draw(state)
            if card is None:
                player.territory.append(magi_card_id)
                state.pending_action = None
                trigger_deck_exhaustion(state)
                return None
            player.hand.append(card)
        state.add_log(f"{player.name} draws {count} from the {where}.")

    if place_bottom == 0:
        _magi_enters_territory(state, player, magi_card_id)
        return None

    if len(player.hand) < place_bottom:
        count = len(player.hand)
        state.deck[:0] = player.hand
        player.hand = []
        state.add_log(
            f"{player.name} places {count} card(s) on the bottom of the deck (all remaining)."
        )
        _magi_enters_territory(state, player, magi_card_id)
        return None

    state.pending_action = PendingMagiPlaceCards(
        player_seat=player.seat_index,
        place_bottom_count=place_bottom,
        magi_card_id=magi_card_id,
    )
    return None


def handle_magi_place_cards(
    state: GameState, player: PlayerState, payload: CardListPayload
) -> str | None:
    """Put the chosen hand cards on the bottom of the deck, in the given order."""
    pending = state.pending_action
    if not isinstance(pending, PendingMagiPlaceCards):
        return "No pending magi place cards"
    error = responder_mismatch(pending.player_seat, player)
    if error:
        return error
    error = validate_selection(player.hand, payload.card_ids, pending.place_bottom_count)
    if error:
        return error

    for card_id in payload.card_ids:
        place_on_bottom(state, player, card_id)
    state.add_log(
        f"{player.name} places {pending.place_bottom_count} card(s) on the bottom of the deck."
    )
    _magi_enters_territory(state, player, pending.magi_card_id)
    return None


def _magi_enters_territory(state: GameState, player: PlayerState, magi_card_id: str) -> None:
    player.territory.append(magi_card_id)
    state.add_log(f"Magi enters {player.name}'s territory (+1 hand size).")
    state.pending_action = None
    set_phase(state, TurnPhase.END_OF_TURN)
