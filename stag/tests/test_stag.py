"""
Tests for playing a Stag and the draft that follows it.
"""

import pytest

from ..engine_core.pending import PendingStagKingdomDraft, PendingStagKingdomPickSelf
from ..engine_core.state import TurnPhase, WinReason
from ..engine_core.zones import eliminate_player

HAND = ["stag-4-1", "hunt-1-1", "healing-1-1", "tithe-1-1"]
KINGDOM = ["hunt-2-1", "magi-1-1", "kingscommand-1-1"]


class TestPlayStag:
    """Tests for kingdom action C."""

    def test_stag_to_territory_with_cost(self, act, make_state):
        state = make_state([list(HAND), [], []], kingdom=list(KINGDOM))
        state = act(state, "p0", "playStag", cardId="stag-4-1", discardIds=["hunt-1-1", "tithe-1-1"])
        alice = state.players[0]
        assert alice.territory == ["stag-4-1"]
        assert alice.hand == ["healing-1-1"]
        assert state.discard == ["hunt-1-1", "tithe-1-1"]
        messages = [e.msg for e in state.log]
        assert "Alice plays Stag (4) to territory (4 Stag Points)." in messages
        assert "Alice discards Hunt (1), Tithe." in messages

    def test_free_stag(self, act, make_state):
        """A value-1 stag costs nothing."""
        state = make_state([["stag-1-1"], []], kingdom=[])
        state = act(state, "p0", "playStag", cardId="stag-1-1", discardIds=[])
        assert state.players[0].territory == ["stag-1-1"]
        # Empty kingdom: straight to end of turn, and the turn passes
        assert state.current_seat == 1

    def test_wrong_discard_count(self, reducer, make_state):
        state = make_state([list(HAND), []])
        result = reducer.apply(state, "p0", "playStag", {"cardId": "stag-4-1", "discardIds": ["hunt-1-1"]})
        assert result.error == "Stag 4 costs 2 discard(s): Must select exactly 2 card(s), got 1"

    def test_not_enough_cards(self, reducer, make_state):
        state = make_state([["stag-6-1", "hunt-1-1"], []])
        result = reducer.apply(state, "p0", "playStag", {"cardId": "stag-6-1", "discardIds": ["hunt-1-1"]})
        assert result.error == "Not enough cards to pay the discard cost"

    def test_cannot_discard_played_stag(self, reducer, make_state):
        state = make_state([["stag-2-1", "hunt-1-1"], []])
        result = reducer.apply(state, "p0", "playStag", {"cardId": "stag-2-1", "discardIds": ["stag-2-1"]})
        assert result.error == "Cannot discard the Stag you're playing"

    @pytest.mark.parametrize("card_id,error", [
        ("hunt-1-1", "Not a Stag card"),
        ("stag-5-1", "Stag is not in your hand"),
    ])
    def test_bad_stag(self, reducer, make_state, card_id, error):
        state = make_state([list(HAND), []])
        result = reducer.apply(state, "p0", "playStag", {"cardId": card_id, "discardIds": []})
        assert result.error == error

    def test_discarding_a_stag_costs_atonement(self, act, make_state):
        state = make_state([["stag-2-1", "stag-1-1"], []], kingdom=[])
        state = act(state, "p0", "playStag", cardId="stag-2-1", discardIds=["stag-1-1"])
        assert state.players[0].contributions_remaining == 11
        assert state.players[0].contributions_made == 2

    def test_atonement_elimination_passes_turn(self, act, make_state):
        state = make_state([["stag-2-1", "stag-1-1"], [], []], kingdom=list(KINGDOM))
        state.players[0].contributions_remaining = 0
        state = act(state, "p0", "playStag", cardId="stag-2-1", discardIds=["stag-1-1"])
        assert state.players[0].eliminated
        assert state.current_seat == 1
        assert state.turn_phase == TurnPhase.KINGDOM_ACTION
        assert state.pending_action is None

    def test_reaching_threshold_wins(self, act, make_state):
        state = make_state(
            [["stag-1-1"], []],
            territories=[["stag-6-1", "stag-6-2", "stag-5-1"], []],
            kingdom=list(KINGDOM),
        )
        state = act(state, "p0", "playStag", cardId="stag-1-1", discardIds=[])
        assert state.winner == "p0"
        assert state.win_reason == WinReason.STAG_18
        assert state.pending_action is None
        assert state.log[-1].msg == "Alice reaches 18 Stag Points and wins!"

    def test_threshold_wins_before_atonement(self, act, make_state):
        """A winning stag counts even when its cost would eliminate the player."""
        state = make_state(
            [["stag-6-2", "stag-1-1", "healing-1-1", "healing-1-2"], ["hunt-1-1"]],
            territories=[["stag-6-1", "stag-4-1", "stag-2-1"], []],
            kingdom=list(KINGDOM),
        )
        state.players[0].contributions_remaining = 0
        state = act(state, "p0", "playStag", cardId="stag-6-2",
                    discardIds=["stag-1-1", "healing-1-1", "healing-1-2"])
        assert state.winner == "p0"
        assert state.win_reason == WinReason.STAG_18
        assert not state.players[0].eliminated


class TestStagKingdomDraft:
    """Tests for the draft after a stag is played."""

    def test_opponents_then_stag_player(self, act, make_state):
        """Each opponent picks once, then the stag player takes the last card."""
        state = make_state([["stag-1-1"], [], []], kingdom=list(KINGDOM))
        state = act(state, "p0", "playStag", cardId="stag-1-1")
        pending = state.pending_action
        assert isinstance(pending, PendingStagKingdomDraft)
        assert (pending.current_drafter_seat, pending.remaining_drafter_seats, pending.round) == (1, [2], 1)

        state = act(state, "p1", "stagKingdomPick", cardId="hunt-2-1")
        state = act(state, "p2", "stagKingdomPick", cardId="magi-1-1")
        assert isinstance(state.pending_action, PendingStagKingdomPickSelf)

        state = act(state, "p0", "stagKingdomPick", cardId="kingscommand-1-1")
        assert state.players[0].hand == ["kingscommand-1-1"]
        assert state.kingdom == []
        assert state.current_seat == 1

    def test_order_wraps_and_skips_eliminated(self, act, make_state):
        """From seat 2 of 4 opponents draft from seat 0, skipping eliminated seat 3."""
        state = make_state([[], [], ["stag-1-1"], []], kingdom=list(KINGDOM), current=2)
        eliminate_player(state, state.players[3])
        state = act(state, "p2", "playStag", cardId="stag-1-1")
        pending = state.pending_action
        assert isinstance(pending, PendingStagKingdomDraft)
        assert (pending.current_drafter_seat, pending.remaining_drafter_seats) == (0, [1])

        state = act(state, "p0", "stagKingdomPick", cardId="hunt-2-1")
        state = act(state, "p1", "stagKingdomPick", cardId="magi-1-1")
        assert isinstance(state.pending_action, PendingStagKingdomPickSelf)
        state = act(state, "p2", "stagKingdomPick", cardId="kingscommand-1-1")
        assert state.players[2].hand == ["kingscommand-1-1"]
        assert state.current_seat == 0

    def test_second_round(self, act, make_state):
        """A kingdom big enough for another full round starts one."""
        kingdom = list(KINGDOM) + ["tithe-1-1", "healing-1-1"]
        state = make_state([["stag-1-1"], [], []], kingdom=kingdom)
        state = act(state, "p0", "playStag", cardId="stag-1-1")
        state = act(state, "p1", "stagKingdomPick", cardId="hunt-2-1")
        state = act(state, "p2", "stagKingdomPick", cardId="magi-1-1")
        pending = state.pending_action
        assert isinstance(pending, PendingStagKingdomDraft)
        assert pending.round == 2
        assert pending.current_drafter_seat == 1

    def test_small_kingdom_goes_to_stag_player(self, act, make_state):
        """Without a card for every opponent plus one, only the stag player picks."""
        state = make_state([["stag-1-1"], [], []], kingdom=["hunt-2-1", "magi-1-1"])
        state = act(state, "p0", "playStag", cardId="stag-1-1")
        assert isinstance(state.pending_action, PendingStagKingdomPickSelf)
        state = act(state, "p0", "stagKingdomPick", cardId="magi-1-1")
        assert state.discard == ["hunt-2-1"]

    def test_wrong_drafter(self, act, reducer, make_state):
        state = make_state([["stag-1-1"], [], []], kingdom=list(KINGDOM))
        state = act(state, "p0", "playStag", cardId="stag-1-1")
        result = reducer.apply(state, "p2", "stagKingdomPick", {"cardId": "hunt-2-1"})
        assert result.error == "Not your turn to respond"
