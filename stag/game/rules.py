"""
Stag Rules - Game-design constants as configuration data.

Everything here is a number the rules document owns, not engine logic:
- Deck composition (type, value, copies)
- Stag value -> discard cost table
- Hand limit, win threshold, contribution pool
- Atonement, hunt and tithe parameters

The engine reads these through a RulesConfig instance carried by the
game state, so a variant rule set is just a different RulesConfig.

The stag discard cost table, atonement_cost and hunt_base_discards are
placeholders: the rules document does not yet give their values, so they
are kept here to be overridden once it does.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any


# (card_type, value, copies)
DEFAULT_DECK_COMPOSITION: tuple[tuple[str, int, int], ...] = (
    ("stag", 1, 4),
    ("stag", 2, 4),
    ("stag", 3, 4),
    ("stag", 4, 3),
    ("stag", 5, 3),
    ("stag", 6, 2),
    ("hunt", 1, 6),
    ("hunt", 2, 4),
    ("hunt", 3, 2),
    ("healing", 1, 14),
    ("magi", 1, 8),
    ("tithe", 1, 8),
    ("kingscommand", 1, 6),
)

# Stag value -> number of hand cards discarded to play it (monotonic)
DEFAULT_STAG_DISCARD_COST: dict[int, int] = {
    1: 0,
    2: 1,
    3: 1,
    4: 2,
    5: 2,
    6: 3,
}


@dataclass(frozen=True)
class RulesConfig:
    """
    Rule constants for one game.

    Frozen so a running game can never have its rules changed under it.
    """
    deck_composition: tuple[tuple[str, int, int], ...] = DEFAULT_DECK_COMPOSITION
    stag_discard_cost: dict[int, int] = field(
        default_factory=lambda: dict(DEFAULT_STAG_DISCARD_COST)
    )

    # Table
    min_players: int = 2
    max_players: int = 6
    base_deal: int = 2  # each seat is dealt base_deal + ante
    kingdom_size: int = 3

    # Player economy
    contribution_pool: int = 12
    base_hand_limit: int = 5

    # Win
    stag_win_points: int = 18
    tithe_score_value: int = 3

    # Atonement: coins paid per stag discarded outside of being played
    atonement_cost: int = 1

    # Hunt: discards per non-averter and draws for the hunter
    hunt_base_discards: int = 2

    # Tithe: cards cycled per discard step, coins per extra cycle, max paid repetitions
    tithe_cycle_size: int = 2
    tithe_contribution_cost: int = 1
    tithe_max_contributions: int = 2

    # Magi: drawTop + drawBottom + placeBottom must equal this
    magi_split_total: int = 6

    def discard_cost_for(self, stag_value: int) -> int:
        """
        Discard cost for a stag value.

        Values above the table use the highest listed cost, so the
        table stays monotonic for custom decks.
        """
        if stag_value in self.stag_discard_cost:
            return self.stag_discard_cost[stag_value]
        known = [v for v in self.stag_discard_cost if v <= stag_value]
        if not known:
            return 0
        return self.stag_discard_cost[max(known)]

    @property
    def deck_size(self) -> int:
        return sum(copies for _, _, copies in self.deck_composition)

    def to_dict(self) -> dict[str, Any]:
        return {
            "deckComposition": [list(entry) for entry in self.deck_composition],
            "stagDiscardCost": {str(k): v for k, v in self.stag_discard_cost.items()},
            "minPlayers": self.min_players,
            "maxPlayers": self.max_players,
            "baseDeal": self.base_deal,
            "kingdomSize": self.kingdom_size,
            "contributionPool": self.contribution_pool,
            "baseHandLimit": self.base_hand_limit,
            "stagWinPoints": self.stag_win_points,
            "titheScoreValue": self.tithe_score_value,
            "atonementCost": self.atonement_cost,
            "huntBaseDiscards": self.hunt_base_discards,
            "titheCycleSize": self.tithe_cycle_size,
            "titheContributionCost": self.tithe_contribution_cost,
            "titheMaxContributions": self.tithe_max_contributions,
            "magiSplitTotal": self.magi_split_total,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RulesConfig:
        return cls(
            deck_composition=tuple(
                (str(t), int(v), int(c)) for t, v, c in data["deckComposition"]
            ),
            stag_discard_cost={int(k): int(v) for k, v in data["stagDiscardCost"].items()},
            min_players=data["minPlayers"],
            max_players=data["maxPlayers"],
            base_deal=data["baseDeal"],
            kingdom_size=data["kingdomSize"],
            contribution_pool=data["contributionPool"],
            base_hand_limit=data["baseHandLimit"],
            stag_win_points=data["stagWinPoints"],
            tithe_score_value=data["titheScoreValue"],
            atonement_cost=data["atonementCost"],
            hunt_base_discards=data["huntBaseDiscards"],
            tithe_cycle_size=data["titheCycleSize"],
            tithe_contribution_cost=data["titheContributionCost"],
            tithe_max_contributions=data["titheMaxContributions"],
            magi_split_total=data["magiSplitTotal"],
        )


DEFAULT_RULES = RulesConfig()
