"""
Pytest fixtures for Stag tests.
"""

import random
from typing import Any, Callable

import pytest

from ..config import EngineSettings
from ..game.rules import DEFAULT_RULES
from ..game.setup import LobbyPlayer, setup_game
from ..engine_core.state import GameState, PlayerState, TurnPhase
from ..engine_core.reducer import Reducer

NAMES = ["Alice", "Bob", "Cara", "Dan", "Eve", "Finn"]


def filler(count: int, start: int = 100) -> list[str]:
    """Unique Healing tokens to pad a deck."""
    return [f"healing-1-{start + i}" for i in range(count)]


def build_state(
    hands: list[list[str]],
    *,
    territories: list[list[str]] | None = None,
    deck: list[str] | None = None,
    kingdom: list[str] | None = None,
    discard: list[str] | None = None,
    phase: TurnPhase = TurnPhase.KINGDOM_ACTION,
    current: int = 0,
    rules=DEFAULT_RULES,
) -> GameState:
    """
    A hand-built game state: seat i is player "p{i}", ante i+1.

    The deck defaults to 20 filler cards; its top is the last element.
    """
    players = []
    for seat, hand in enumerate(hands):
        ante = seat + 1
        players.append(PlayerState(
            id=f"p{seat}",
            name=NAMES[seat],
            seat_index=seat,
            hand=list(hand),
            territory=list(territories[seat]) if territories else [],
            contributions_remaining=rules.contribution_pool,
            contributions_made=ante,
            ante=ante,
        ))
    return GameState(
        players=players,
        player_order=list(range(len(hands))),
        current_player_index=current,
        turn_phase=phase,
        deck=list(deck) if deck is not None else filler(20),
        kingdom=list(kingdom or []),
        discard=list(discard or []),
        rules=rules,
        rng=random.Random(0),
    )


@pytest.fixture
def settings() -> EngineSettings:
    """Engine settings independent of the environment."""
    return EngineSettings()


@pytest.fixture
def reducer(settings: EngineSettings) -> Reducer:
    return Reducer(settings=settings)


@pytest.fixture
def make_state() -> Callable[..., GameState]:
    """Factory for hand-built states (see build_state)."""
    return build_state


@pytest.fixture
def act(reducer: Reducer) -> Callable[..., GameState]:
    """
    Apply an action that must succeed and return the new state.

    Usage: state = act(state, "p0", "drawCard")
           state = act(state, "p1", "draftKingdomPick", cardId="hunt-1-1")
    """
    def _act(state: GameState, player_id: str, action_name: str, **payload: Any) -> GameState:
        result = reducer.apply(state, player_id, action_name, payload)
        assert result.success, f"{action_name} failed: {result.error}"
        return result.new_state
    return _act


@pytest.fixture
def lobby_players() -> list[LobbyPlayer]:
    return [LobbyPlayer(id=f"p{i}", name=NAMES[i], seat_index=i) for i in range(3)]


@pytest.fixture
def new_game(lobby_players: list[LobbyPlayer]) -> GameState:
    """A freshly dealt, seeded 3-player game."""
    return setup_game(lobby_players, seed=42)
