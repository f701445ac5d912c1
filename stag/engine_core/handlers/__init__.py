"""
Action handlers.

Every handler has the signature

    handler(state, player, payload) -> str | None

and returns an error message (state untouched) or None (state mutated).
"""

from .kingdom import handle_draw_card, handle_draft_kingdom, handle_draft_kingdom_pick
from .stag import handle_play_stag, handle_stag_kingdom_pick
from .territory import handle_play_healing, handle_no_territory
from .hunt import handle_play_hunt, handle_hunt_response, handle_hunt_discard
from .magi import handle_play_magi, handle_magi_choice, handle_magi_place_cards
from .tithe import handle_play_tithe, handle_tithe_discard, handle_tithe_contribute
from .command import (
    handle_play_kings_command,
    handle_king_command_response,
    handle_king_command_collect,
)
from .hand_limit import handle_discard_to_hand_limit

__all__ = [
    "handle_draw_card",
    "handle_draft_kingdom",
    "handle_draft_kingdom_pick",
    "handle_play_stag",
    "handle_stag_kingdom_pick",
    "handle_play_healing",
    "handle_no_territory",
    "handle_play_hunt",
    "handle_hunt_response",
    "handle_hunt_discard",
    "handle_play_magi",
    "handle_magi_choice",
    "handle_magi_place_cards",
    "handle_play_tithe",
    "handle_tithe_discard",
    "handle_tithe_contribute",
    "handle_play_kings_command",
    "handle_king_command_response",
    "handle_king_command_collect",
    "handle_discard_to_hand_limit",
]
