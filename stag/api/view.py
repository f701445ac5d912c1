"""
View Projector - Read-only projection of a game state for one player.

Never mutates the state. Hidden information (other hands, deck order,
burned cards) is reduced to counts.
"""

from __future__ import annotations

from ..engine_core.state import GameState
from ..engine_core.pending import pending_to_dict
from ..engine_core.action_generator import available_actions
from ..exceptions import PlayerNotFoundError
from .schemas import LogEntryInfo, PlayerView, PublicPlayerInfo, ScoreInfo


def project(state: GameState, player_id: str) -> PlayerView:
    """
    Build the view of the game for one player.

    Raises PlayerNotFoundError if the player is not seated.
    """
    me = state.get_player(player_id)
    if me is None:
        raise PlayerNotFoundError(player_id)

    current = state.current_player if state.player_order else None
    pending = state.pending_action
    if state.winner:
        is_my_turn = False
    elif pending is not None:
        is_my_turn = pending.responder_seat == me.seat_index
    else:
        is_my_turn = current is not None and current.seat_index == me.seat_index

    players = [
        PublicPlayerInfo(
            id=p.id,
            name=p.name,
            seat_index=p.seat_index,
            hand_count=len(p.hand),
            territory=list(p.territory),
            territory_magi_as_healing=list(p.territory_magi_as_healing),
            contributions_remaining=p.contributions_remaining,
            contributions_made=p.contributions_made,
            ante=p.ante,
            eliminated=p.eliminated,
            is_me=p.id == me.id,
        )
        for p in state.players
    ]

    return PlayerView(
        game_over=state.is_over,
        my_id=me.id,
        my_seat=me.seat_index,
        my_hand=list(me.hand),
        my_territory=list(me.territory),
        my_territory_magi_as_healing=list(me.territory_magi_as_healing),
        my_contributions_remaining=me.contributions_remaining,
        my_contributions_made=me.contributions_made,
        my_hand_limit=me.hand_limit(state.rules),
        my_healing_value=me.healing_value(),
        eliminated=me.eliminated,
        players=players,
        kingdom=list(state.kingdom),
        discard=list(state.discard),
        deck_count=len(state.deck),
        burned_count=len(state.burned),
        current_player_seat=current.seat_index if current else None,
        current_player_name=current.name if current else None,
        is_my_turn=is_my_turn,
        turn_phase=state.turn_phase.value,
        pending_action=pending_to_dict(pending),
        available_actions=available_actions(state, me.seat_index),
        log=[LogEntryInfo(msg=e.msg, ts=e.ts) for e in state.log],
        winner=state.winner,
        win_reason=state.win_reason.value if state.win_reason else None,
        final_scores=[ScoreInfo.model_validate(s) for s in state.final_scores],
    )
