"""
Turn Engine - The phase state machine and the auto-advance driver.

    refreshKingdom -> kingdomAction -> territoryAction -> endOfTurn
          ^                                                  |
          +-------------------- next seat -------------------+

kingdomAction and territoryAction need player input. refreshKingdom
and endOfTurn are run by auto_advance after every successful action,
until the game needs input again or ends.
"""

from __future__ import annotations
import logging

from ..config import get_settings
from .state import GameState, TurnPhase
from .pending import PendingDiscardToHandLimit
from .scoring import trigger_deck_exhaustion
from .zones import discard_kingdom, burn_card, deal_to_kingdom

logger = logging.getLogger(__name__)

# Allowed phase moves for the current player
VALID_TRANSITIONS: dict[TurnPhase, set[TurnPhase]] = {
    TurnPhase.REFRESH_KINGDOM: {TurnPhase.KINGDOM_ACTION},
    TurnPhase.KINGDOM_ACTION: {TurnPhase.TERRITORY_ACTION, TurnPhase.END_OF_TURN},
    TurnPhase.TERRITORY_ACTION: {TurnPhase.END_OF_TURN},
    TurnPhase.END_OF_TURN: {TurnPhase.REFRESH_KINGDOM},
}


class AutoAdvanceError(RuntimeError):
    """Auto-advance did not settle within the configured step bound."""


def set_phase(state: GameState, target: TurnPhase) -> None:
    """
    Move the turn to another phase.

    Raises ValueError on a transition the state machine does not allow.
    """
    if target == state.turn_phase:
        return
    if target not in VALID_TRANSITIONS[state.turn_phase]:
        raise ValueError(
            f"Invalid phase transition: {state.turn_phase.value} -> {target.value}"
        )
    logger.debug("Phase transition: %s -> %s", state.turn_phase.value, target.value)
    state.turn_phase = target


def refresh_kingdom(state: GameState) -> bool:
    """
    Top the kingdom back up at the start of a turn.

    A kingdom that still holds enough cards is left alone. Otherwise the
    leftovers are discarded, one card is burned and a fresh kingdom is
    dealt. Returns False if the deck ran out (the game has been scored).
    """
    size = state.rules.kingdom_size
    if len(state.kingdom) >= size:
        return True
    discard_kingdom(state)
    if not burn_card(state):
        trigger_deck_exhaustion(state)
        return False
    for _ in range(size):
        if not deal_to_kingdom(state):
            trigger_deck_exhaustion(state)
            return False
    return True


def advance_turn(state: GameState) -> None:
    """Pass the turn to the next seat in player_order."""
    state.current_player_index = (state.current_player_index + 1) % len(state.player_order)
    state.pending_action = None
    state.turn_phase = TurnPhase.REFRESH_KINGDOM
    nxt = state.current_player
    state.add_log(f"--- {nxt.name}'s turn ---")
    logger.debug("Turn passes to %s (seat %d)", nxt.name, nxt.seat_index)


def end_of_turn(state: GameState) -> bool:
    """
    Enforce the hand limit, or pass the turn.

    Returns True if the turn advanced, False if a discard is required.
    """
    player = state.current_player
    limit = player.hand_limit(state.rules)
    if len(player.hand) > limit:
        state.pending_action = PendingDiscardToHandLimit(
            player_seat=player.seat_index,
            must_discard=len(player.hand) - limit,
        )
        logger.debug("%s must discard %d to hand limit", player.name, len(player.hand) - limit)
        return False
    advance_turn(state)
    return True


def step(state: GameState) -> bool:
    """
    Run one automatic phase step.

    Returns True if something progressed and another step may follow,
    False if the game now needs input (or is over).
    """
    if state.winner or state.pending_action is not None:
        return False

    if state.turn_phase == TurnPhase.REFRESH_KINGDOM:
        if not refresh_kingdom(state):
            return False
        set_phase(state, TurnPhase.KINGDOM_ACTION)
        return False

    if state.turn_phase == TurnPhase.END_OF_TURN:
        return end_of_turn(state)

    # kingdomAction / territoryAction need the player
    return False


def auto_advance(state: GameState, max_steps: int | None = None) -> None:
    """
    Progress every phase that needs no player input.

    Stops as soon as a phase or pending action needs input, or the game
    ends. Calling it again on a settled state does nothing.
    """
    limit = max_steps or get_settings().max_auto_advance_steps
    for _ in range(limit):
        if not step(state):
            return
    raise AutoAdvanceError(f"Auto-advance did not settle after {limit} steps")
