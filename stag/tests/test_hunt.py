"""
Tests for the Hunt: threat, responses, discards and the hunter's draw.
"""

from ..engine_core.pending import PendingHuntDiscard, PendingHuntResponse
from ..engine_core.state import TurnPhase


def hunt_state(make_state, hands, territories=None):
    """Alice to play hunt-2-1 in a territory action."""
    return make_state(
        [["hunt-2-1", "stag-1-1"]] + hands,
        territories=territories,
        phase=TurnPhase.TERRITORY_ACTION,
    )


class TestPlayHunt:
    """Tests for starting a hunt."""

    def test_threat_sums_territory_hunts(self, act, make_state):
        state = hunt_state(make_state, [[], []], territories=[["hunt-3-1"], [], []])
        state = act(state, "p0", "playTerritory", cardId="hunt-2-1")
        pending = state.pending_action
        assert isinstance(pending, PendingHuntResponse)
        assert pending.hunt_total_value == 5
        assert pending.responding_seat == 1
        assert pending.remaining_responder_seats == [2]
        assert "Alice plays Hunt (2) (total Hunt value 5)." in [e.msg for e in state.log]

    def test_kings_command_adds_discards(self, act, make_state):
        state = hunt_state(make_state, [[]], territories=[["kingscommand-1-1"], []])
        state = act(state, "p0", "playTerritory", cardId="hunt-2-1")
        assert state.pending_action.discards_per_player == 3
        assert state.pending_action.draws_for_hunter == 3


class TestHuntResponse:
    """Tests for averting or declining."""

    def test_full_hunt(self, act, make_state):
        """One averter, one discarder: the hunter draws one card."""
        state = hunt_state(make_state, [
            ["healing-1-1", "healing-1-2", "stag-2-1"],
            ["tithe-1-1", "magi-1-1", "hunt-1-1"],
        ])
        state = act(state, "p0", "playTerritory", cardId="hunt-2-1")
        state = act(state, "p1", "huntResponse", avert=True, healingIds=["healing-1-1", "healing-1-2"])
        assert state.players[1].hand == ["healing-1-1", "healing-1-2", "stag-2-1"]
        assert state.pending_action.averters == 1

        state = act(state, "p2", "huntResponse", avert=False)
        pending = state.pending_action
        assert isinstance(pending, PendingHuntDiscard)
        assert pending.current_discard_seat == 2

        state = act(state, "p2", "huntDiscard", cardIds=["tithe-1-1", "magi-1-1"])
        assert state.players[2].hand == ["hunt-1-1"]
        assert len(state.players[0].hand) == 2
        assert "Alice draws 1 card(s) from the Hunt." in [e.msg for e in state.log]
        assert state.current_seat == 1

    def test_territory_magi_used_as_healing(self, act, make_state):
        """A Magi re-flagged as healing stops counting for the hand limit."""
        state = hunt_state(make_state, [["healing-1-1"]], territories=[[], ["magi-1-1"]])
        state = act(state, "p0", "playTerritory", cardId="hunt-2-1")
        state = act(state, "p1", "huntResponse", avert=True, healingIds=["healing-1-1"], magiIds=["magi-1-1"])
        bob = state.players[1]
        assert bob.territory_magi_as_healing == ["magi-1-1"]
        assert bob.healing_value() == 1
        assert bob.hand_limit() == 5

    def test_standing_healing_counts(self, act, make_state):
        """Healing already in territory averts without revealing anything."""
        state = hunt_state(make_state, [[]], territories=[[], ["healing-1-1", "healing-1-2"]])
        state = act(state, "p0", "playTerritory", cardId="hunt-2-1")
        state = act(state, "p1", "huntResponse", avert=True)
        # Nobody discards; the hunter still draws one less per averter
        assert state.pending_action is None
        assert len(state.players[0].hand) == 2

    def test_not_enough_healing(self, act, reducer, make_state):
        state = hunt_state(make_state, [["healing-1-1"]])
        state = act(state, "p0", "playTerritory", cardId="hunt-2-1")
        result = reducer.apply(state, "p1", "huntResponse", {"avert": True, "healingIds": ["healing-1-1"]})
        assert result.error == "Not enough Healing to avert (have 1, need 2)"

    def test_healing_must_be_in_hand(self, act, reducer, make_state):
        state = hunt_state(make_state, [["stag-2-1"]])
        state = act(state, "p0", "playTerritory", cardId="hunt-2-1")
        result = reducer.apply(state, "p1", "huntResponse", {"avert": True, "healingIds": ["stag-2-1"]})
        assert result.error == "stag-2-1 is not a Healing card in your hand"

    def test_magi_already_used(self, act, reducer, make_state):
        state = hunt_state(make_state, [["healing-1-1"]], territories=[[], ["magi-1-1"]])
        state.players[1].territory_magi_as_healing.append("magi-1-1")
        state = act(state, "p0", "playTerritory", cardId="hunt-2-1")
        result = reducer.apply(state, "p1", "huntResponse", {"avert": True, "magiIds": ["magi-1-1"]})
        assert result.error == "magi-1-1 is already used as Healing"


class TestHuntDiscard:
    """Tests for non-averters discarding."""

    def test_empty_hands_are_skipped(self, act, make_state):
        state = hunt_state(make_state, [[], ["tithe-1-1", "magi-1-1"]])
        state = act(state, "p0", "playTerritory", cardId="hunt-2-1")
        state = act(state, "p1", "huntResponse", avert=False)
        state = act(state, "p2", "huntResponse", avert=False)
        assert state.pending_action.current_discard_seat == 2
        assert state.pending_action.remaining_discard_seats == []

    def test_discard_capped_by_hand(self, act, reducer, make_state):
        state = hunt_state(make_state, [["tithe-1-1"]])
        state = act(state, "p0", "playTerritory", cardId="hunt-2-1")
        state = act(state, "p1", "huntResponse", avert=False)
        result = reducer.apply(state, "p1", "huntDiscard", {"cardIds": []})
        assert result.error == "Must select exactly 1 card(s), got 0"
        state = act(state, "p1", "huntDiscard", cardIds=["tithe-1-1"])
        assert len(state.players[0].hand) == 3

    def test_stag_discard_atoned(self, act, make_state):
        state = hunt_state(make_state, [["stag-3-1", "tithe-1-1"]])
        state = act(state, "p0", "playTerritory", cardId="hunt-2-1")
        state = act(state, "p1", "huntResponse", avert=False)
        state = act(state, "p1", "huntDiscard", cardIds=["stag-3-1", "tithe-1-1"])
        assert state.players[1].contributions_remaining == 11
        assert state.players[1].contributions_made == 3
