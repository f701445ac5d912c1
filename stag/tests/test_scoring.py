"""
Tests for final scoring and the win checks.
"""

from ..engine_core.scoring import check_stag_win, rank_players, score_player, trigger_deck_exhaustion
from ..engine_core.state import WinReason


def set_made(state, made):
    for player, amount in zip(state.players, made):
        player.contributions_made = amount
        player.contributions_remaining = 12


class TestScore:
    """Tests for a single player's score."""

    def test_breakdown(self, make_state):
        state = make_state([[], []], territories=[["stag-6-1", "stag-2-1", "tithe-1-1", "tithe-1-2"], []])
        score = score_player(state, state.players[0])
        assert score.stag_points == 8
        assert score.tithe_count == 2
        assert score.tithe_points == 6
        assert score.contributions == 1
        assert score.score == 15


class TestRanking:
    """Tests for ranking and tiebreaks."""

    def test_highest_score_first(self, make_state):
        state = make_state([[], [], []], territories=[["stag-6-1", "tithe-1-1"], ["stag-4-1"], []])
        assert [s.player_id for s in rank_players(state)] == ["p0", "p1", "p2"]

    def test_magi_break_ties(self, make_state):
        state = make_state([[], []], territories=[["stag-3-1", "healing-1-1"], ["stag-3-2", "magi-1-1"]])
        set_made(state, [2, 2])
        assert [s.player_id for s in rank_players(state)] == ["p1", "p0"]

    def test_healing_then_hunt_then_command(self, make_state):
        state = make_state(
            [[], [], []],
            territories=[["kingscommand-1-1"], ["healing-1-1"], ["hunt-1-1"]],
        )
        set_made(state, [2, 2, 2])
        assert [s.player_id for s in rank_players(state)] == ["p1", "p2", "p0"]

    def test_full_tie_keeps_seat_order(self, make_state):
        state = make_state([[], [], []])
        set_made(state, [4, 4, 4])
        assert [s.player_id for s in rank_players(state)] == ["p0", "p1", "p2"]

    def test_eliminated_players_excluded(self, make_state):
        state = make_state([[], [], []], territories=[[], ["stag-6-1"], []])
        state.players[1].eliminated = True
        assert [s.player_id for s in rank_players(state)] == ["p2", "p0"]


class TestGameEnd:
    """Tests for declaring a winner."""

    def test_deck_exhaustion_logs_scores(self, make_state):
        state = make_state([[], []], territories=[["stag-6-1", "tithe-1-1"], []])
        trigger_deck_exhaustion(state)
        messages = [e.msg for e in state.log]
        assert messages[0] == "The deck has run out! Scoring final results..."
        assert "Alice: 6 Stag + 3 Tithe(1×3) + 1 contributions = 10" in messages
        assert messages[-1] == "Alice wins!"
        assert state.winner == "p0"
        assert state.win_reason == WinReason.DECK_OUT
        assert state.final_scores[0]["score"] == 10

    def test_exhaustion_scored_once(self, make_state):
        state = make_state([[], []])
        trigger_deck_exhaustion(state)
        log_length = len(state.log)
        trigger_deck_exhaustion(state)
        assert len(state.log) == log_length

    def test_stag_threshold(self, make_state):
        state = make_state([[], []], territories=[["stag-6-1", "stag-6-2", "stag-5-1"], []])
        assert not check_stag_win(state, state.players[0])
        state.players[0].territory.append("stag-1-1")
        assert check_stag_win(state, state.players[0])
        assert state.win_reason == WinReason.STAG_18
