"""
Territory action: play a Hunt.

1. The hunt goes to territory. Its threat is the sum of every hunt
   value in the hunter's territory.
2. Opponents, clockwise, choose to avert (healing value >= threat) or not
3. Each opponent who did not avert discards up to N cards, with atonement
4. The hunter draws N minus one per averter

N is the base discard count plus one per King's Command in the
hunter's territory.
"""

from __future__ import annotations
import logging

from ...game.cards import CardType, card_display_name, is_type, parse_card_value
from ..state import GameState, PlayerState, TurnPhase
from ..pending import PendingHuntDiscard, PendingHuntResponse
from ..payloads import CardListPayload, CardPayload, HuntResponsePayload
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


def hunt_threat(player: PlayerState) -> int:
    """Total hunt value in a player's territory."""
    return sum(parse_card_value(c) for c in player.territory_of_type(CardType.HUNT))


def hunt_discard_count(state: GameState, player: PlayerState) -> int:
    """Cards each non-averter discards (and the hunter draws)."""
    return state.rules.hunt_base_discards + len(player.territory_of_type(CardType.KINGS_COMMAND))


def handle_play_hunt(state: GameState, player: PlayerState, payload: CardPayload) -> str | None:
    error = require_territory_card(state, player, payload.card_id, CardType.HUNT)
    if error:
        return error

    play_to_territory(player, payload.card_id)
    threat = hunt_threat(player)
    per_player = hunt_discard_count(state, player)
    state.add_log(
        f"{player.name} plays {card_display_name(payload.card_id)} "
        f"(total Hunt value {threat})."
    )

    opponents = get_opponent_seats_in_order(state, player.seat_index)
    if not opponents:
        _hunter_draws(state, player, per_player)
        return None

    state.pending_action = PendingHuntResponse(
        hunt_player_seat=player.seat_index,
        hunt_card_id=payload.card_id,
        hunt_total_value=threat,
        responding_seat=opponents[0],
        remaining_responder_seats=opponents[1:],
        discards_per_player=per_player,
        draws_for_hunter=per_player,
    )
    return None


def handle_hunt_response(
    state: GameState, player: PlayerState, payload: HuntResponsePayload
) -> str | None:
    """An opponent averts the hunt with healing, or declines and will discard."""
    pending = state.pending_action
    if not isinstance(pending, PendingHuntResponse):
        return "No pending hunt response"
    error = responder_mismatch(pending.responding_seat, player)
    if error:
        return error

    averters = pending.averters
    non_averters = list(pending.non_averter_seats)

    if payload.avert:
        error = _validate_healing(player, payload, pending.hunt_total_value)
        if error:
            return error
        for magi_id in payload.magi_ids:
            player.territory_magi_as_healing.append(magi_id)
        revealed = [card_display_name(c) for c in payload.healing_ids]
        detail = f" revealing {', '.join(revealed)}" if revealed else ""
        if payload.magi_ids:
            detail += f" and using {len(payload.magi_ids)} Magi as Healing"
        state.add_log(f"{player.name} averts the Hunt{detail}.")
        averters += 1
    else:
        state.add_log(f"{player.name} does not avert the Hunt.")
        non_averters.append(player.seat_index)

    remaining = live_seats(state, pending.remaining_responder_seats)
    if remaining:
        state.pending_action = PendingHuntResponse(
            hunt_player_seat=pending.hunt_player_seat,
            hunt_card_id=pending.hunt_card_id,
            hunt_total_value=pending.hunt_total_value,
            responding_seat=remaining[0],
            remaining_responder_seats=remaining[1:],
            discards_per_player=pending.discards_per_player,
            draws_for_hunter=pending.draws_for_hunter,
            averters=averters,
            non_averter_seats=non_averters,
        )
        return None

    _next_discarder(
        state,
        hunt_player_seat=pending.hunt_player_seat,
        hunt_card_id=pending.hunt_card_id,
        queue=non_averters,
        discards_per_player=pending.discards_per_player,
        draws_for_hunter=pending.draws_for_hunter,
        averters=averters,
    )
    return None


def _validate_healing(player: PlayerState, payload: HuntResponsePayload, threat: int) -> str | None:
    healing_ids = payload.healing_ids
    magi_ids = payload.magi_ids
    if len(set(healing_ids)) != len(healing_ids) or len(set(magi_ids)) != len(magi_ids):
        return "Duplicate cards in selection"
    for card_id in healing_ids:
        if card_id not in player.hand or not is_type(card_id, CardType.HEALING):
            return f"{card_id} is not a Healing card in your hand"
    for card_id in magi_ids:
        if card_id not in player.territory or not is_type(card_id, CardType.MAGI):
            return f"{card_id} is not a Magi in your territory"
        if card_id in player.territory_magi_as_healing:
            return f"{card_id} is already used as Healing"

    healing = player.healing_value() + len(healing_ids) + len(magi_ids)
    if healing < threat:
        return f"Not enough Healing to avert (have {healing}, need {threat})"
    return None


def handle_hunt_discard(state: GameState, player: PlayerState, payload: CardListPayload) -> str | None:
    """A non-averter discards their share for the hunt."""
    pending = state.pending_action
    if not isinstance(pending, PendingHuntDiscard):
        return "No pending hunt discard"
    error = responder_mismatch(pending.current_discard_seat, player)
    if error:
        return error

    count = min(pending.discards_per_player, len(player.hand))
    error = validate_selection(player.hand, payload.card_ids, count)
    if error:
        return error

    names = [card_display_name(c) for c in payload.card_ids]
    state.add_log(f"{player.name} discards {', '.join(names)} to the Hunt.")
    for card_id in payload.card_ids:
        discard_from_hand_with_atonement(state, player, card_id)
        if player.eliminated:
            break
    if state.winner:
        return None

    _next_discarder(
        state,
        hunt_player_seat=pending.hunt_player_seat,
        hunt_card_id=pending.hunt_card_id,
        queue=pending.remaining_discard_seats,
        discards_per_player=pending.discards_per_player,
        draws_for_hunter=pending.draws_for_hunter,
        averters=pending.averters,
    )
    return None


def _next_discarder(
    state: GameState,
    *,
    hunt_player_seat: int,
    hunt_card_id: str,
    queue: list[int],
    discards_per_player: int,
    draws_for_hunter: int,
    averters: int,
) -> None:
    # Players with nothing in hand have nothing to discard
    queue = [
        seat for seat in live_seats(state, queue)
        if state.get_player_by_seat(seat).hand
    ]
    if queue:
        state.pending_action = PendingHuntDiscard(
            hunt_player_seat=hunt_player_seat,
            hunt_card_id=hunt_card_id,
            current_discard_seat=queue[0],
            remaining_discard_seats=queue[1:],
            discards_per_player=discards_per_player,
            draws_for_hunter=draws_for_hunter,
            averters=averters,
        )
        return

    hunter = state.get_player_by_seat(hunt_player_seat)
    _hunter_draws(state, hunter, max(0, draws_for_hunter - averters))


def _hunter_draws(state: GameState, hunter: PlayerState, count: int) -> None:
    state.pending_action = None
    for _ in range(count):
        card = draw_card(state)
        if card is None:
            trigger_deck_exhaustion(state)
            return
        hunter.hand.append(card)
    if count:
        state.add_log(f"{hunter.name} draws {count} card(s) from the Hunt.")
    logger.debug("Hunt resolved, hunter %s drew %d", hunter.name, count)
    set_phase(state, TurnPhase.END_OF_TURN)
