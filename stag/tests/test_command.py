"""
Tests for King's Command.
"""

from ..engine_core.pending import PendingKingCommandCollect, PendingKingCommandResponse
from ..engine_core.state import TurnPhase


def command_state(make_state, cara=("hunt-1-2",)):
    return make_state(
        [["kingscommand-1-1", "stag-1-1"], ["stag-3-1", "stag-5-1", "hunt-1-1"], list(cara)],
        phase=TurnPhase.TERRITORY_ACTION,
    )


def surrender(act, state):
    state = act(state, "p0", "playTerritory", cardId="kingscommand-1-1")
    state = act(state, "p1", "kingCommandResponse", cardId="stag-5-1")
    return act(state, "p2", "kingCommandResponse", cardId=None)


class TestKingCommandResponse:
    """Tests for opponents' responses."""

    def test_responses_in_order(self, act, make_state):
        state = act(command_state(make_state), "p0", "playTerritory", cardId="kingscommand-1-1")
        pending = state.pending_action
        assert isinstance(pending, PendingKingCommandResponse)
        assert (pending.responding_seat, pending.remaining_responder_seats) == (1, [2])

    def test_surrender_without_atonement(self, act, make_state):
        state = surrender(act, command_state(make_state))
        bob = state.players[1]
        assert bob.hand == ["stag-3-1", "hunt-1-1"]
        assert bob.contributions_remaining == 12
        messages = [e.msg for e in state.log]
        assert "Bob gives up Stag (5)." in messages
        assert "Cara has no Stag to give up." in messages
        pending = state.pending_action
        assert isinstance(pending, PendingKingCommandCollect)
        assert pending.discarded_stags == ["stag-5-1"]

    def test_must_give_up_a_held_stag(self, act, reducer, make_state):
        state = act(command_state(make_state), "p0", "playTerritory", cardId="kingscommand-1-1")
        result = reducer.apply(state, "p1", "kingCommandResponse", {})
        assert result.error == "You hold a Stag and must give one up"
        result = reducer.apply(state, "p1", "kingCommandResponse", {"cardId": "hunt-1-1"})
        assert result.error == "Not a Stag card"

    def test_nothing_surrendered_ends_command(self, act, make_state):
        state = make_state(
            [["kingscommand-1-1"], ["hunt-1-1"]],
            phase=TurnPhase.TERRITORY_ACTION,
        )
        state = act(state, "p0", "playTerritory", cardId="kingscommand-1-1")
        state = act(state, "p1", "kingCommandResponse")
        assert state.pending_action is None
        assert state.current_seat == 1


class TestKingCommandCollect:
    """Tests for the commander's collection."""

    def test_collect_surrendered_stag(self, act, make_state):
        state = surrender(act, command_state(make_state))
        state = act(state, "p0", "kingCommandCollect", cardIds=["stag-5-1"])
        assert "stag-5-1" in state.players[0].hand
        assert "stag-5-1" not in state.discard
        assert "Alice collects Stag (5)." in [e.msg for e in state.log]
        assert state.current_seat == 1

    def test_collect_nothing(self, act, make_state):
        state = surrender(act, command_state(make_state))
        state = act(state, "p0", "kingCommandCollect", cardIds=[])
        assert state.discard == ["stag-5-1"]
        assert "Alice collects nothing." in [e.msg for e in state.log]

    def test_only_surrendered_cards(self, act, reducer, make_state):
        state = command_state(make_state)
        state.discard.append("stag-2-1")
        state = surrender(act, state)
        result = reducer.apply(state, "p0", "kingCommandCollect", {"cardIds": ["stag-2-1"]})
        assert result.error == "Card stag-2-1 was not surrendered to this King's Command"
