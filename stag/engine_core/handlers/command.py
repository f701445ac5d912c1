"""
Territory action: play a King's Command.

Each opponent, clockwise, must surrender one stag from hand if they
hold any. Surrendered stags go to the discard pile without atonement.
The commander may then take any of them from the discard pile.
"""

from __future__ import annotations
import logging

from ...game.cards import CardType, card_display_name, is_type
from ..state import GameState, PlayerState, TurnPhase
from ..pending import PendingKingCommandCollect, PendingKingCommandResponse
from ..payloads import CardListPayload, CardPayload, KingCommandResponsePayload
from ..turn import set_phase
from ..zones import play_to_territory, discard_from_hand, get_opponent_seats_in_order, live_seats
from .common import require_territory_card, responder_mismatch

logger = logging.getLogger(__name__)


def handle_play_kings_command(state: GameState, player: PlayerState, payload: CardPayload) -> str | None:
    error = require_territory_card(state, player, payload.card_id, CardType.KINGS_COMMAND)
    if error:
        return error

    play_to_territory(player, payload.card_id)
    state.add_log(f"{player.name} plays {card_display_name(payload.card_id)}.")

    opponents = get_opponent_seats_in_order(state, player.seat_index)
    if not opponents:
        _finish_command(state)
        return None
    state.pending_action = PendingKingCommandResponse(
        command_player_seat=player.seat_index,
        responding_seat=opponents[0],
        remaining_responder_seats=opponents[1:],
    )
    return None


def handle_king_command_response(
    state: GameState, player: PlayerState, payload: KingCommandResponsePayload
) -> str | None:
    """Surrender a stag, or declare having none."""
    pending = state.pending_action
    if not isinstance(pending, PendingKingCommandResponse):
        return "No pending King's Command"
    error = responder_mismatch(pending.responding_seat, player)
    if error:
        return error

    discarded = list(pending.discarded_stags)
    if payload.card_id is None:
        if player.hand_of_type(CardType.STAG):
            return "You hold a Stag and must give one up"
        state.add_log(f"{player.name} has no Stag to give up.")
    else:
        if not is_type(payload.card_id, CardType.STAG):
            return "Not a Stag card"
        if payload.card_id not in player.hand:
            return "Stag is not in your hand"
        discard_from_hand(state, player, payload.card_id)
        discarded.append(payload.card_id)
        state.add_log(f"{player.name} gives up {card_display_name(payload.card_id)}.")

    remaining = live_seats(state, pending.remaining_responder_seats)
    if remaining:
        state.pending_action = PendingKingCommandResponse(
            command_player_seat=pending.command_player_seat,
            responding_seat=remaining[0],
            remaining_responder_seats=remaining[1:],
            discarded_stags=discarded,
        )
    elif discarded:
        state.pending_action = PendingKingCommandCollect(
            command_player_seat=pending.command_player_seat,
            discarded_stags=discarded,
        )
    else:
        _finish_command(state)
    return None


def handle_king_command_collect(
    state: GameState, player: PlayerState, payload: CardListPayload
) -> str | None:
    """Take any subset of the surrendered stags into hand."""
    pending = state.pending_action
    if not isinstance(pending, PendingKingCommandCollect):
        return "No pending King's Command collection"
    error = responder_mismatch(pending.command_player_seat, player)
    if error:
        return error

    card_ids = payload.card_ids
    if len(set(card_ids)) != len(card_ids):
        return "Duplicate cards in selection"
    for card_id in card_ids:
        if card_id not in pending.discarded_stags or card_id not in state.discard:
            return f"Card {card_id} was not surrendered to this King's Command"

    for card_id in card_ids:
        state.discard.remove(card_id)
        player.hand.append(card_id)
    if card_ids:
        names = [card_display_name(c) for c in card_ids]
        state.add_log(f"{player.name} collects {', '.join(names)}.")
    else:
        state.add_log(f"{player.name} collects nothing.")
    _finish_command(state)
    return None


def _finish_command(state: GameState) -> None:
    state.pending_action = None
    set_phase(state, TurnPhase.END_OF_TURN)
    logger.debug("King's Command resolved")
