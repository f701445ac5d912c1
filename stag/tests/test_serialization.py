"""
Tests for GameState to_dict/from_dict.
"""

import json

from ..engine_core.pending import PendingHuntResponse, pending_from_dict, pending_to_dict
from ..engine_core.state import GameState, WinReason


class TestStateRecord:
    """Tests for the storable state record."""

    def test_record_restores_game_in_progress(self, act, new_game):
        """A restored state is equal, including pending action and rng."""
        state = act(new_game, "p0", "drawCard")
        state.pending_action = PendingHuntResponse(
            hunt_player_seat=0,
            hunt_card_id="hunt-2-1",
            hunt_total_value=2,
            responding_seat=1,
            remaining_responder_seats=[2],
            non_averter_seats=[1],
        )
        record = json.loads(json.dumps(state.to_dict()))
        restored = GameState.from_dict(record)

        assert restored.to_dict() == state.to_dict()
        assert restored.pending_action == state.pending_action
        assert restored.rng.random() == state.rng.random()

    def test_finished_game(self, make_state):
        state = make_state([[], []])
        state.winner = "p1"
        state.win_reason = WinReason.LAST_STANDING
        state.players[0].eliminated = True
        restored = GameState.from_dict(state.to_dict())
        assert restored.win_reason == WinReason.LAST_STANDING
        assert restored.players[0].eliminated

    def test_pending_record_is_camel_case(self):
        pending = PendingHuntResponse(
            hunt_player_seat=0,
            hunt_card_id="hunt-2-1",
            hunt_total_value=2,
            responding_seat=1,
        )
        data = pending_to_dict(pending)
        assert data["type"] == "huntResponse"
        assert data["huntTotalValue"] == 2
        assert data["nonAverterSeats"] == []
        assert pending_from_dict(data) == pending
        assert pending_from_dict(None) is None
