"""
Scoring - Win detection and final scoring.

Three ways a game ends:
- stag18: a player's territory stag points reach the threshold
- lastStanding: eliminations leave one player
- deckOut: a draw/burn/deal finds deck and discard both empty
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging

from ..game.cards import CardType
from .state import GameState, PlayerState, WinReason

logger = logging.getLogger(__name__)

# Territory counts compared, in order, when final scores tie
TIEBREAK_ORDER = (
    CardType.MAGI,
    CardType.HEALING,
    CardType.HUNT,
    CardType.KINGS_COMMAND,
)


@dataclass
class PlayerScore:
    """Final score breakdown for one player."""
    player_id: str
    name: str
    seat_index: int
    stag_points: int
    tithe_count: int
    tithe_points: int
    contributions: int
    score: int
    tiebreak: list[int] = field(default_factory=list)

    @property
    def sort_key(self) -> tuple[int, ...]:
        return (self.score, *self.tiebreak)

    def to_dict(self) -> dict:
        return {
            "playerId": self.player_id,
            "name": self.name,
            "seatIndex": self.seat_index,
            "stagPoints": self.stag_points,
            "titheCount": self.tithe_count,
            "tithePoints": self.tithe_points,
            "contributions": self.contributions,
            "score": self.score,
            "tiebreak": list(self.tiebreak),
        }


def score_player(state: GameState, player: PlayerState) -> PlayerScore:
    """Stag points + tithe value x tithes in territory + contributions made."""
    tithes = len(player.territory_of_type(CardType.TITHE))
    tithe_points = state.rules.tithe_score_value * tithes
    stag_points = player.stag_points
    return PlayerScore(
        player_id=player.id,
        name=player.name,
        seat_index=player.seat_index,
        stag_points=stag_points,
        tithe_count=tithes,
        tithe_points=tithe_points,
        contributions=player.contributions_made,
        score=stag_points + tithe_points + player.contributions_made,
        tiebreak=[len(player.territory_of_type(t)) for t in TIEBREAK_ORDER],
    )


def rank_players(state: GameState) -> list[PlayerScore]:
    """
    Rank non-eliminated players, best first.

    Ties after the four tiebreak levels keep seat order (stable sort);
    no further tiebreak is applied.
    """
    players = sorted(
        (p for p in state.players if not p.eliminated),
        key=lambda p: p.seat_index,
    )
    scores = [score_player(state, p) for p in players]
    # reverse=True keeps equal keys in seat order
    scores.sort(key=lambda s: s.sort_key, reverse=True)
    return scores


def trigger_deck_exhaustion(state: GameState) -> None:
    """Score the game because the deck ran out, and declare the winner."""
    if state.winner:
        return
    state.add_log("The deck has run out! Scoring final results...")

    ranking = rank_players(state)
    for s in ranking:
        state.add_log(
            f"{s.name}: {s.stag_points} Stag + {s.tithe_points} "
            f"Tithe({s.tithe_count}×{state.rules.tithe_score_value}) + "
            f"{s.contributions} contributions = {s.score}"
        )
    state.final_scores = [s.to_dict() for s in ranking]

    if ranking:
        best = ranking[0]
        state.winner = best.player_id
        state.win_reason = WinReason.DECK_OUT
        state.pending_action = None
        state.add_log(f"{best.name} wins!")
        logger.info("Game over by deck exhaustion, winner=%s score=%d", best.name, best.score)


def check_stag_win(state: GameState, player: PlayerState) -> bool:
    """Declare a stag18 win if the player's territory reached the threshold."""
    if state.winner or player.eliminated:
        return bool(state.winner)
    points = player.stag_points
    if points < state.rules.stag_win_points:
        return False
    state.winner = player.id
    state.win_reason = WinReason.STAG_18
    state.pending_action = None
    state.add_log(f"{player.name} reaches {points} Stag Points and wins!")
    logger.info("Game over by stag threshold, winner=%s points=%d", player.name, points)
    return True


def check_last_standing(state: GameState) -> bool:
    """Declare a win if only one non-eliminated player remains."""
    if state.winner:
        return True
    remaining = state.active_players
    if len(remaining) != 1:
        return False
    survivor = remaining[0]
    state.winner = survivor.id
    state.win_reason = WinReason.LAST_STANDING
    state.pending_action = None
    state.add_log(f"{survivor.name} is the last player standing and wins!")
    logger.info("Game over, last player standing=%s", survivor.name)
    return True
