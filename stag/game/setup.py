"""
Game setup: build the deck, seat the players and deal the antes.

Seat i antes i+1 contributions and is dealt base_deal + ante cards.
Then one card is burned and the kingdom is dealt, and the first seat
starts in the kingdom action phase.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence
import logging
import random

from .cards import create_deck
from .rules import RulesConfig, DEFAULT_RULES
from ..engine_core.state import GameState, PlayerState, TurnPhase

logger = logging.getLogger(__name__)


@dataclass
class LobbyPlayer:
    """A seated player before the game starts."""
    id: str
    name: str
    seat_index: int


def setup_game(
    lobby_players: Sequence[LobbyPlayer],
    rules: RulesConfig | None = None,
    seed: int | None = None,
) -> GameState:
    """
    Create the initial state for a game.

    Players take turns in seat order. Raises ValueError if the number of
    players is outside the rules' bounds.
    """
    rules = rules or DEFAULT_RULES
    count = len(lobby_players)
    if not rules.min_players <= count <= rules.max_players:
        raise ValueError(
            f"A game needs {rules.min_players}-{rules.max_players} players, got {count}"
        )

    rng = random.Random(seed)
    state = GameState(rules=rules, rng=rng, deck=create_deck(rules, rng))

    seated = sorted(lobby_players, key=lambda p: p.seat_index)
    for seat, lobby_player in enumerate(seated):
        ante = seat + 1
        player = PlayerState(
            id=lobby_player.id,
            name=lobby_player.name,
            seat_index=seat,
            contributions_remaining=rules.contribution_pool,
            contributions_made=ante,
            ante=ante,
        )
        for _ in range(rules.base_deal + ante):
            player.hand.append(state.deck.pop())
        state.players.append(player)

    state.player_order = [p.seat_index for p in state.players]
    state.current_player_index = 0

    state.burned.append(state.deck.pop())
    for _ in range(rules.kingdom_size):
        state.kingdom.append(state.deck.pop())
    state.turn_phase = TurnPhase.KINGDOM_ACTION

    state.add_log("Game started!")
    for p in state.players:
        state.add_log(f"{p.name} antes {p.ante} and receives {len(p.hand)} cards.")

    logger.info(
        "Game set up: %d players, %d cards in deck, seed=%s",
        count, len(state.deck), seed,
    )
    return state
