"""
Territory action: play Healing, or reveal a stag-only hand.

The other territory cards (hunt, magi, tithe, king's command) start
multi-step interactions and live in their own modules.
"""

from __future__ import annotations
import logging

from ...game.cards import CardType, card_display_name, is_type
from ..state import GameState, PlayerState, TurnPhase
from ..payloads import CardPayload, EmptyPayload
from ..scoring import trigger_deck_exhaustion
from ..turn import set_phase
from ..zones import play_to_territory, burn_card, draw_card
from .common import require_phase, require_territory_card

logger = logging.getLogger(__name__)

# Cards drawn after revealing a hand with nothing to play
NO_TERRITORY_DRAW = 3


def handle_play_healing(state: GameState, player: PlayerState, payload: CardPayload) -> str | None:
    """Healing has no on-play effect; it adds +1 healing value from territory."""
    error = require_territory_card(state, player, payload.card_id, CardType.HEALING)
    if error:
        return error

    play_to_territory(player, payload.card_id)
    state.add_log(f"{player.name} played {card_display_name(payload.card_id)} to territory.")
    set_phase(state, TurnPhase.END_OF_TURN)
    return None


def handle_no_territory(state: GameState, player: PlayerState, payload: EmptyPayload) -> str | None:
    """Reveal a hand with no non-stag card, burn one and draw three."""
    error = require_phase(state, TurnPhase.TERRITORY_ACTION)
    if error:
        return error
    if any(not is_type(c, CardType.STAG) for c in player.hand):
        return "You have non-Stag cards you must play"

    hand_desc = (
        ", ".join(card_display_name(c) for c in player.hand)
        if player.hand else "an empty hand"
    )
    state.add_log(f"{player.name} reveals {hand_desc} (no non-Stag cards to play).")

    if not burn_card(state):
        trigger_deck_exhaustion(state)
        return None
    for _ in range(NO_TERRITORY_DRAW):
        card = draw_card(state)
        if card is None:
            trigger_deck_exhaustion(state)
            return None
        player.hand.append(card)

    state.add_log(f"{player.name} drew {NO_TERRITORY_DRAW} cards.")
    set_phase(state, TurnPhase.END_OF_TURN)
    return None
