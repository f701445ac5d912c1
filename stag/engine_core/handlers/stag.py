"""
Kingdom action C: play a Stag.

1. The stag goes from hand to territory
2. The player discards cards by the stag's value (with atonement)
3. Reaching the stag-point threshold wins on the spot
4. Opponents draft the kingdom in clockwise rounds; a new round starts
   only while the kingdom holds enough for every opponent plus one card
   for the stag player, who picks last. The rest is discarded.
"""

from __future__ import annotations
import logging

from ...game.cards import CardType, card_display_name, is_type, parse_card_value, stag_discard_cost
from ..state import GameState, PlayerState, TurnPhase
from ..pending import PendingStagKingdomDraft, PendingStagKingdomPickSelf
from ..payloads import CardPayload, PlayStagPayload
from ..scoring import check_stag_win
from ..turn import set_phase
from ..zones import (
    play_to_territory,
    discard_from_hand_with_atonement,
    discard_kingdom,
    take_from_kingdom,
    get_opponent_seats_in_order,
    live_seats,
)
from .common import require_phase, responder_mismatch, validate_selection

logger = logging.getLogger(__name__)


def handle_play_stag(state: GameState, player: PlayerState, payload: PlayStagPayload) -> str | None:
    """Play a stag from hand, paying its discard cost."""
    error = require_phase(state, TurnPhase.KINGDOM_ACTION)
    if error:
        return error

    stag_id = payload.card_id
    if not is_type(stag_id, CardType.STAG):
        return "Not a Stag card"
    if stag_id not in player.hand:
        return "Stag is not in your hand"

    stag_value = parse_card_value(stag_id)
    cost = stag_discard_cost(stag_value, state.rules)
    if len(player.hand) - 1 < cost:
        return "Not enough cards to pay the discard cost"
    if stag_id in payload.discard_ids:
        return "Cannot discard the Stag you're playing"
    error = validate_selection(player.hand, payload.discard_ids, cost)
    if error:
        return f"Stag {stag_value} costs {cost} discard(s): {error}"

    # --- Execute ---
    play_to_territory(player, stag_id)
    state.add_log(
        f"{player.name} plays {card_display_name(stag_id)} to territory "
        f"({player.stag_points} Stag Points)."
    )

    # The threshold wins as the stag lands, before atonement can eliminate
    if check_stag_win(state, player):
        return None

    for card_id in payload.discard_ids:
        discard_from_hand_with_atonement(state, player, card_id)
        if player.eliminated:
            return None
    if payload.discard_ids:
        state.add_log(
            f"{player.name} discards "
            + ", ".join(card_display_name(c) for c in payload.discard_ids)
            + "."
        )

    _setup_stag_kingdom_draft(state, player)
    return None


def _setup_stag_kingdom_draft(state: GameState, stag_player: PlayerState) -> None:
    opponents = get_opponent_seats_in_order(state, stag_player.seat_index)

    if not opponents or not state.kingdom:
        discard_kingdom(state)
        set_phase(state, TurnPhase.END_OF_TURN)
        return

    # Every opponent needs a card and one must be left for the stag player
    if len(state.kingdom) < len(opponents) + 1:
        state.pending_action = PendingStagKingdomPickSelf(stag_player_seat=stag_player.seat_index)
        return

    state.pending_action = PendingStagKingdomDraft(
        stag_player_seat=stag_player.seat_index,
        current_drafter_seat=opponents[0],
        remaining_drafter_seats=opponents[1:],
        round=1,
    )


def handle_stag_kingdom_pick(state: GameState, player: PlayerState, payload: CardPayload) -> str | None:
    """A pick in the post-stag draft: an opponent's pick or the stag player's last pick."""
    pending = state.pending_action
    if isinstance(pending, PendingStagKingdomPickSelf):
        return _handle_self_pick(state, player, pending, payload)
    if not isinstance(pending, PendingStagKingdomDraft):
        return "No pending stag kingdom draft"

    error = responder_mismatch(pending.current_drafter_seat, player)
    if error:
        return error
    if payload.card_id not in state.kingdom:
        return "Card is not in the Kingdom"

    take_from_kingdom(state, player, payload.card_id)
    state.add_log(f"{player.name} picks {card_display_name(payload.card_id)} from the Kingdom.")

    remaining = live_seats(state, pending.remaining_drafter_seats)
    if remaining and state.kingdom:
        state.pending_action = PendingStagKingdomDraft(
            stag_player_seat=pending.stag_player_seat,
            current_drafter_seat=remaining[0],
            remaining_drafter_seats=remaining[1:],
            round=pending.round,
        )
        return None

    _finish_round_or_draft(state, pending)
    return None


def _finish_round_or_draft(state: GameState, pending: PendingStagKingdomDraft) -> None:
    opponents = get_opponent_seats_in_order(state, pending.stag_player_seat)

    if opponents and len(state.kingdom) >= len(opponents) + 1:
        logger.debug("Stag draft round %d starts", pending.round + 1)
        state.pending_action = PendingStagKingdomDraft(
            stag_player_seat=pending.stag_player_seat,
            current_drafter_seat=opponents[0],
            remaining_drafter_seats=opponents[1:],
            round=pending.round + 1,
        )
    elif state.kingdom:
        state.pending_action = PendingStagKingdomPickSelf(stag_player_seat=pending.stag_player_seat)
    else:
        state.pending_action = None
        set_phase(state, TurnPhase.END_OF_TURN)


def _handle_self_pick(
    state: GameState,
    player: PlayerState,
    pending: PendingStagKingdomPickSelf,
    payload: CardPayload,
) -> str | None:
    error = responder_mismatch(pending.stag_player_seat, player)
    if error:
        return error
    if payload.card_id not in state.kingdom:
        return "Card is not in the Kingdom"

    take_from_kingdom(state, player, payload.card_id)
    state.add_log(f"{player.name} picks {card_display_name(payload.card_id)} from the Kingdom.")
    discard_kingdom(state)

    state.pending_action = None
    set_phase(state, TurnPhase.END_OF_TURN)
    return None
