"""End of turn: discard down to the hand limit."""

from __future__ import annotations

from ...game.cards import card_display_name
from ..state import GameState, PlayerState
from ..pending import PendingDiscardToHandLimit
from ..payloads import CardListPayload
from ..zones import discard_from_hand_with_atonement
from .common import responder_mismatch, validate_selection


def handle_discard_to_hand_limit(
    state: GameState, player: PlayerState, payload: CardListPayload
) -> str | None:
    pending = state.pending_action
    if not isinstance(pending, PendingDiscardToHandLimit):
        return "No pending discard to hand limit"
    error = responder_mismatch(pending.player_seat, player)
    if error:
        return error

    must_discard = len(player.hand) - player.hand_limit(state.rules)
    if must_discard <= 0:
        state.pending_action = None
        return None
    error = validate_selection(player.hand, payload.card_ids, must_discard)
    if error:
        return error

    names = [card_display_name(c) for c in payload.card_ids]
    state.add_log(f"{player.name} discarded {', '.join(names)} to hand limit.")
    for card_id in payload.card_ids:
        discard_from_hand_with_atonement(state, player, card_id)
        if player.eliminated:
            # Elimination already passed the turn on
            return None

    # Auto-advance picks the turn up from endOfTurn
    state.pending_action = None
    return None
