"""
Territory action: play a Tithe.

The tithe player, then each opponent clockwise, discards up to two
cards (with atonement) and draws back as many. Afterwards the tithe
player may pay to cycle their own hand again, while it holds cards, at
most twice per tithe.
"""

from __future__ import annotations
import logging

from ...game.cards import CardType, card_display_name
from ..state import GameState, PlayerState, TurnPhase
from ..pending import PendingTitheContribute, PendingTitheDiscard
from ..payloads import CardListPayload, CardPayload, TitheContributePayload
from ..scoring import trigger_deck_exhaustion
from ..turn import set_phase
from ..zones import (
    play_to_territory,
    draw_card,
    discard_from_hand_with_atonement,
    get_opponent_seats_in_order,
    live_seats,
)
from .common import require_territory_card, responder_mismatch, validate_selection

logger = logging.getLogger(__name__)


def handle_play_tithe(state: GameState, player: PlayerState, payload: CardPayload) -> str | None:
    error = require_territory_card(state, player, payload.card_id, CardType.TITHE)
    if error:
        return error

    play_to_territory(player, payload.card_id)
    state.add_log(f"{player.name} plays {card_display_name(payload.card_id)}.")

    queue = [player.seat_index] + get_opponent_seats_in_order(state, player.seat_index)
    _next_tithe_discard(state, player.seat_index, payload.card_id, queue, 0)
    return None


def handle_tithe_discard(state: GameState, player: PlayerState, payload: CardListPayload) -> str | None:
    """Discard up to two cards and draw the same number."""
    pending = state.pending_action
    if not isinstance(pending, PendingTitheDiscard):
        return "No pending tithe discard"
    error = responder_mismatch(pending.current_discard_seat, player)
    if error:
        return error

    count = min(state.rules.tithe_cycle_size, len(player.hand))
    error = validate_selection(player.hand, payload.card_ids, count)
    if error:
        return error

    names = [card_display_name(c) for c in payload.card_ids]
    state.add_log(f"{player.name} discards {', '.join(names)} to the Tithe.")
    for card_id in payload.card_ids:
        discard_from_hand_with_atonement(state, player, card_id)
        if player.eliminated:
            break
    if state.winner:
        return None
    if player.eliminated and player.seat_index == pending.tithe_player_seat:
        # The turn has already passed on
        return None

    if not player.eliminated:
        for _ in range(count):
            card = draw_card(state)
            if card is None:
                trigger_deck_exhaustion(state)
                return None
            player.hand.append(card)
        state.add_log(f"{player.name} draws {count} card(s).")

    _next_tithe_discard(
        state,
        pending.tithe_player_seat,
        pending.tithe_card_id,
        pending.remaining_discard_seats,
        pending.contributions_so_far,
    )
    return None


def handle_tithe_contribute(
    state: GameState, player: PlayerState, payload: TitheContributePayload
) -> str | None:
    """Pay a contribution to cycle again, or decline and end the tithe."""
    pending = state.pending_action
    if not isinstance(pending, PendingTitheContribute):
        return "No pending tithe contribution"
    error = responder_mismatch(pending.player_seat, player)
    if error:
        return error

    if not payload.contribute:
        state.add_log(f"{player.name} declines to contribute.")
        _finish_tithe(state)
        return None

    if not player.contribute(state.rules.tithe_contribution_cost):
        return "No contributions remaining"
    contributions = pending.contributions_so_far + 1
    state.add_log(
        f"{player.name} contributes to the Tithe "
        f"({contributions}/{state.rules.tithe_max_contributions})."
    )
    _next_tithe_discard(state, player.seat_index, pending.tithe_card_id, [player.seat_index], contributions)
    return None


def _next_tithe_discard(
    state: GameState,
    tithe_player_seat: int,
    tithe_card_id: str,
    queue: list[int],
    contributions_so_far: int,
) -> None:
    # Empty hands have nothing to cycle
    queue = [
        seat for seat in live_seats(state, queue)
        if state.get_player_by_seat(seat).hand
    ]
    if queue:
        state.pending_action = PendingTitheDiscard(
            tithe_player_seat=tithe_player_seat,
            tithe_card_id=tithe_card_id,
            current_discard_seat=queue[0],
            remaining_discard_seats=queue[1:],
            contributions_so_far=contributions_so_far,
        )
        return
    _offer_contribution(state, tithe_player_seat, tithe_card_id, contributions_so_far)


def _offer_contribution(
    state: GameState, tithe_player_seat: int, tithe_card_id: str, contributions_so_far: int
) -> None:
    player = state.get_player_by_seat(tithe_player_seat)
    if (
        not player.eliminated
        and player.hand
        and player.contributions_remaining >= state.rules.tithe_contribution_cost
        and contributions_so_far < state.rules.tithe_max_contributions
    ):
        state.pending_action = PendingTitheContribute(
            player_seat=tithe_player_seat,
            tithe_card_id=tithe_card_id,
            contributions_so_far=contributions_so_far,
        )
        return
    _finish_tithe(state)


def _finish_tithe(state: GameState) -> None:
    state.pending_action = None
    set_phase(state, TurnPhase.END_OF_TURN)
    logger.debug("Tithe resolved")
