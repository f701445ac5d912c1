"""
Tests for the session manager.

Tests:
- Lobby create/join/start rules
- Actions as transactions on the stored state
- A first turn played end to end
"""

import pytest

from ..config import EngineSettings
from ..engine_core.action import ErrorCode
from ..engine_core.state import TurnPhase
from ..exceptions import GameNotFoundError, LobbyError
from ..game.cards import CardType, is_type
from ..session.manager import GAME_CODE_ALPHABET, SessionManager, SessionPhase


@pytest.fixture
def manager(settings):
    return SessionManager(settings=settings)


@pytest.fixture
def lobby(manager):
    """A three-seat lobby: (game_id, [host_id, bob_id, cara_id])."""
    game_id, host_id = manager.create_game("Alice", seed=7)
    bob_id = manager.join_game(game_id, "Bob")
    cara_id = manager.join_game(game_id, "Cara")
    return game_id, [host_id, bob_id, cara_id]


class TestLobby:
    """Tests for creating, joining and starting games."""

    def test_game_code(self, manager):
        game_id, host_id = manager.create_game("Alice")
        assert len(game_id) == 6
        assert set(game_id) <= set(GAME_CODE_ALPHABET)
        assert manager.get_session(game_id).host_id == host_id
        assert manager.list_active_sessions() == [game_id]

    def test_names_trimmed_and_capped(self, manager):
        game_id, _ = manager.create_game("  " + "x" * 30 + "  ")
        assert manager.get_session(game_id).lobby[0].name == "x" * 20

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_name_required(self, manager, name):
        with pytest.raises(LobbyError, match="Name required"):
            manager.create_game(name)

    def test_seats_in_join_order(self, manager, lobby):
        game_id, ids = lobby
        seats = [(p.id, p.seat_index) for p in manager.get_session(game_id).lobby]
        assert seats == list(zip(ids, [0, 1, 2]))

    def test_table_full(self, manager):
        game_id, _ = manager.create_game("P0")
        for i in range(1, 6):
            manager.join_game(game_id, f"P{i}")
        with pytest.raises(LobbyError, match="Game is full"):
            manager.join_game(game_id, "P6")

    def test_seat_cap_from_settings(self):
        manager = SessionManager(settings=EngineSettings(max_players=3))
        game_id, _ = manager.create_game("P0")
        manager.join_game(game_id, "P1")
        manager.join_game(game_id, "P2")
        with pytest.raises(LobbyError, match=r"Game is full \(3 players max\)"):
            manager.join_game(game_id, "P3")

    def test_only_host_starts(self, manager, lobby):
        game_id, ids = lobby
        with pytest.raises(LobbyError, match="Only the host can start"):
            manager.start_game(game_id, ids[1])

    def test_needs_two_players(self, manager):
        game_id, host_id = manager.create_game("Alone")
        with pytest.raises(LobbyError, match="Need at least 2 players"):
            manager.start_game(game_id, host_id)

    def test_no_join_after_start(self, manager, lobby):
        game_id, ids = lobby
        manager.start_game(game_id, ids[0])
        assert manager.get_session(game_id).phase == SessionPhase.PLAYING
        with pytest.raises(LobbyError, match="Game already started"):
            manager.join_game(game_id, "Late")
        with pytest.raises(LobbyError, match="Game already started"):
            manager.start_game(game_id, ids[0])

    def test_unknown_game(self, manager):
        with pytest.raises(GameNotFoundError):
            manager.join_game("ZZZZZZ", "Bob")

    def test_no_actions_in_lobby(self, manager, lobby):
        game_id, ids = lobby
        with pytest.raises(LobbyError, match="Game is not in progress"):
            manager.submit_action(game_id, ids[0], "drawCard")
        assert manager.get_state(game_id) is None


class TestPlay:
    """Tests for submitting actions."""

    def test_failed_action_keeps_state(self, manager, lobby):
        game_id, ids = lobby
        manager.start_game(game_id, ids[0])
        before = manager.get_state(game_id).to_dict()
        result = manager.submit_action(game_id, ids[1], "drawCard")
        assert result.error_code == ErrorCode.NOT_YOUR_TURN
        assert manager.get_state(game_id).to_dict() == before

    def test_get_state_is_a_copy(self, manager, lobby):
        game_id, ids = lobby
        manager.start_game(game_id, ids[0])
        manager.get_state(game_id).deck.clear()
        assert manager.get_state(game_id).deck

    def test_first_turn_end_to_end(self, manager):
        """Draw, play a Healing, and the turn passes to seat 1."""
        game_id, host_id = manager.create_game("Alice", seed=3)
        bob_id = manager.join_game(game_id, "Bob")
        manager.join_game(game_id, "Cara")
        state = manager.start_game(game_id, host_id)

        # Make sure Alice has a Healing to play
        alice = state.players[0]
        healing = next(c for c in state.all_cards() if is_type(c, CardType.HEALING))
        _move_to_hand(state, alice, healing)

        result = manager.submit_action(game_id, host_id, "drawCard")
        assert result.success
        assert manager.get_view(game_id, host_id).turn_phase == TurnPhase.TERRITORY_ACTION.value

        result = manager.submit_action(game_id, host_id, "playTerritory", {"cardId": healing})
        assert result.success
        assert "--- Bob's turn ---" in result.state_changes

        view = manager.get_view(game_id, bob_id)
        assert view.is_my_turn
        assert view.current_player_seat == 1
        assert view.players[0].territory == [healing]

    def test_finished_game_is_cleaned_up(self, manager, lobby):
        game_id, ids = lobby
        manager.start_game(game_id, ids[0])
        session = manager.get_session(game_id)
        for card_id in ("stag-6-1", "stag-6-2", "stag-5-1"):
            _take(session.state, card_id)
            session.state.players[0].territory.append(card_id)
        _move_to_hand(session.state, session.state.players[0], "stag-1-1")

        result = manager.submit_action(game_id, ids[0], "playStag", {"cardId": "stag-1-1"})
        assert result.success
        assert session.phase == SessionPhase.FINISHED
        assert manager.list_active_sessions() == []

        session.created_at -= 7200
        assert manager.cleanup_stale_sessions(max_age_seconds=3600) == 1
        with pytest.raises(GameNotFoundError):
            manager.get_session(game_id)


def _take(state, card_id):
    """Remove a card from whichever zone holds it."""
    for zone in (state.deck, state.kingdom, state.discard, state.burned):
        if card_id in zone:
            zone.remove(card_id)
    for p in state.players:
        if card_id in p.hand:
            p.hand.remove(card_id)
        if card_id in p.territory:
            p.territory.remove(card_id)


def _move_to_hand(state, player, card_id):
    _take(state, card_id)
    player.hand.append(card_id)
