"""
Zone Primitives - Card movement between deck, kingdom, discard, hands
and territories.

Every function here moves cards; none of them validate the move
beyond what is needed to keep card conservation. Handlers validate
first, then call these.

Exhaustion: draw/burn/deal return None/False when both deck and
discard are empty. Callers hand that to scoring.trigger_deck_exhaustion.
"""

from __future__ import annotations
import logging

from ..game.cards import CardType, card_display_name, is_type
from .state import GameState, PlayerState, TurnPhase
from .scoring import check_last_standing

logger = logging.getLogger(__name__)


# =============================================================================
# Deck
# =============================================================================

def ensure_deck(state: GameState) -> bool:
    """
    Reshuffle the discard pile into the deck if the deck is empty.

    Returns True if the deck has cards, False if deck and discard are
    both empty (the game should end).
    """
    if state.deck:
        return True
    if not state.discard:
        return False
    new_deck = list(state.discard)
    state.rng.shuffle(new_deck)
    state.deck = new_deck
    state.discard = []
    state.add_log("Discard pile shuffled into deck.")
    logger.debug("Reshuffled %d discards into the deck", len(new_deck))
    return True


def draw_card(state: GameState) -> str | None:
    """Take the top card of the deck, or None on exhaustion."""
    if not ensure_deck(state):
        return None
    return state.deck.pop()


def draw_bottom_card(state: GameState) -> str | None:
    """Take the bottom card of the deck, or None on exhaustion."""
    if not ensure_deck(state):
        return None
    return state.deck.pop(0)


def burn_card(state: GameState) -> bool:
    """Burn the top card (face-down, out of the game)."""
    if not ensure_deck(state):
        return False
    state.burned.append(state.deck.pop())
    return True


def deal_to_kingdom(state: GameState) -> bool:
    """Deal the top card face-up to the kingdom."""
    if not ensure_deck(state):
        return False
    state.kingdom.append(state.deck.pop())
    return True


def place_on_bottom(state: GameState, player: PlayerState, card_id: str) -> bool:
    """Move a hand card to the bottom of the deck."""
    if card_id not in player.hand:
        return False
    player.hand.remove(card_id)
    state.deck.insert(0, card_id)
    return True


# =============================================================================
# Kingdom
# =============================================================================

def discard_kingdom(state: GameState) -> None:
    """Discard all remaining kingdom cards (no costs paid)."""
    if state.kingdom:
        state.discard.extend(state.kingdom)
        state.kingdom = []


def take_from_kingdom(state: GameState, player: PlayerState, card_id: str) -> bool:
    """Move a kingdom card into a player's hand."""
    if card_id not in state.kingdom:
        return False
    state.kingdom.remove(card_id)
    player.hand.append(card_id)
    return True


# =============================================================================
# Hand / territory
# =============================================================================

def discard_from_hand(state: GameState, player: PlayerState, card_id: str) -> bool:
    """Move a hand card to the discard pile."""
    if card_id not in player.hand:
        return False
    player.hand.remove(card_id)
    state.discard.append(card_id)
    return True


def discard_from_hand_with_atonement(
    state: GameState, player: PlayerState, card_id: str
) -> bool:
    """
    Discard a hand card; a discarded stag must be atoned for.

    Atonement costs rules.atonement_cost coins (remaining -> made).
    A player who cannot pay is eliminated. Callers must check
    player.eliminated afterwards and stop touching that player.
    """
    if not discard_from_hand(state, player, card_id):
        return False
    if is_type(card_id, CardType.STAG):
        apply_atonement(state, player, card_id)
    return True


def apply_atonement(state: GameState, player: PlayerState, card_id: str) -> None:
    cost = state.rules.atonement_cost
    if player.contribute(cost):
        state.add_log(
            f"{player.name} atones for discarding {card_display_name(card_id)} "
            f"({cost} contribution)."
        )
        return
    state.add_log(
        f"{player.name} cannot atone for discarding {card_display_name(card_id)}."
    )
    eliminate_player(state, player)


def play_to_territory(player: PlayerState, card_id: str) -> bool:
    """Move a hand card into the player's territory."""
    if card_id not in player.hand:
        return False
    player.hand.remove(card_id)
    player.territory.append(card_id)
    return True


# =============================================================================
# Seats
# =============================================================================

def get_opponent_seats_in_order(state: GameState, my_seat: int) -> list[int]:
    """Non-eliminated seats clockwise, starting after my_seat."""
    order = state.player_order
    if my_seat not in order:
        return []
    my_idx = order.index(my_seat)
    seats = []
    for i in range(1, len(order)):
        seat = order[(my_idx + i) % len(order)]
        if not state.get_player_by_seat(seat).eliminated:
            seats.append(seat)
    return seats


def live_seats(state: GameState, seats: list[int]) -> list[int]:
    """Drop eliminated seats from a queue, keeping order."""
    return [s for s in seats if not state.get_player_by_seat(s).eliminated]


def eliminate_player(state: GameState, player: PlayerState) -> None:
    """
    Remove a player from the game.

    Their hand goes to the discard pile; their territory stays where it
    is but no longer scores. If they held the turn, it passes to the
    next seat at the start of its refresh phase.
    """
    if player.eliminated:
        return
    was_current = (
        not state.winner
        and state.player_order
        and state.current_seat == player.seat_index
    )
    player.eliminated = True
    state.discard.extend(player.hand)
    player.hand = []
    state.add_log(f"{player.name} has been eliminated!")
    logger.info("Player eliminated: %s (seat %d)", player.name, player.seat_index)

    if player.seat_index in state.player_order:
        idx = state.player_order.index(player.seat_index)
        state.player_order.remove(player.seat_index)
        if idx < state.current_player_index:
            state.current_player_index -= 1

    if check_last_standing(state):
        return

    if was_current:
        state.current_player_index %= len(state.player_order)
        state.pending_action = None
        state.turn_phase = TurnPhase.REFRESH_KINGDOM
        state.add_log(f"--- {state.current_player.name}'s turn ---")
