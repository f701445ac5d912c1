"""
Game State - The authoritative aggregate the engine operates on.

Design principles:
- Externally owned: the engine receives a state, the caller stores it
- Serializable: to_dict()/from_dict() produce a JSON-compatible record
- Holds hidden information: hands and deck order never leave the
  engine except through the view projector
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any
from copy import deepcopy
from enum import Enum
import random
import time

from ..game.cards import CardType, parse_card_type, parse_card_value, is_card_id
from ..game.rules import RulesConfig, DEFAULT_RULES
from .pending import PendingAction, pending_to_dict, pending_from_dict


class TurnPhase(Enum):
    """Phases of a single turn, in order."""
    REFRESH_KINGDOM = "refreshKingdom"
    KINGDOM_ACTION = "kingdomAction"  # drawCard, draftKingdom or playStag
    TERRITORY_ACTION = "territoryAction"  # play one non-stag card
    END_OF_TURN = "endOfTurn"  # discard to hand limit, then advance


class WinReason(Enum):
    """How a game ended."""
    STAG_18 = "stag18"
    LAST_STANDING = "lastStanding"
    DECK_OUT = "deckOut"


@dataclass
class LogEntry:
    """One line of the public game log. Never mutated after creation."""
    msg: str
    ts: float

    def to_dict(self) -> dict[str, Any]:
        return {"msg": self.msg, "ts": self.ts}


@dataclass
class PlayerState:
    """
    State for a single seated player.

    Contributions are a fixed pool split between remaining and made.
    Coins only ever move from remaining to made.
    """
    id: str
    name: str
    seat_index: int
    hand: list[str] = field(default_factory=list)
    territory: list[str] = field(default_factory=list)

    # Territory Magi used for healing: +1 healing, no longer +1 hand size
    territory_magi_as_healing: list[str] = field(default_factory=list)

    contributions_remaining: int = 12
    contributions_made: int = 0
    ante: int = 1
    eliminated: bool = False

    def territory_of_type(self, card_type: CardType) -> list[str]:
        """Territory cards of one type."""
        return [c for c in self.territory if parse_card_type(c) is card_type]

    def hand_of_type(self, card_type: CardType) -> list[str]:
        """Hand cards of one type."""
        return [c for c in self.hand if is_card_id(c) and parse_card_type(c) is card_type]

    @property
    def stag_points(self) -> int:
        """Sum of stag values in territory."""
        return sum(parse_card_value(c) for c in self.territory_of_type(CardType.STAG))

    def hand_limit(self, rules: RulesConfig = DEFAULT_RULES) -> int:
        """Base limit plus one per territory Magi not flagged for healing."""
        magi = [
            c for c in self.territory_of_type(CardType.MAGI)
            if c not in self.territory_magi_as_healing
        ]
        return rules.base_hand_limit + len(magi)

    def healing_value(self) -> int:
        """Standing healing value: territory Healing plus Magi flagged as healing."""
        return (
            len(self.territory_of_type(CardType.HEALING))
            + len(self.territory_magi_as_healing)
        )

    def contribute(self, coins: int = 1) -> bool:
        """Move coins from remaining to made. Returns False if not affordable."""
        if coins < 0 or self.contributions_remaining < coins:
            return False
        self.contributions_remaining -= coins
        self.contributions_made += coins
        return True

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "seatIndex": self.seat_index,
            "hand": list(self.hand),
            "territory": list(self.territory),
            "territoryMagiAsHealing": list(self.territory_magi_as_healing),
            "contributionsRemaining": self.contributions_remaining,
            "contributionsMade": self.contributions_made,
            "ante": self.ante,
            "eliminated": self.eliminated,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PlayerState:
        return cls(
            id=data["id"],
            name=data["name"],
            seat_index=data["seatIndex"],
            hand=list(data.get("hand", [])),
            territory=list(data.get("territory", [])),
            territory_magi_as_healing=list(data.get("territoryMagiAsHealing", [])),
            contributions_remaining=data.get("contributionsRemaining", 12),
            contributions_made=data.get("contributionsMade", 0),
            ante=data.get("ante", data["seatIndex"] + 1),
            eliminated=data.get("eliminated", False),
        )


@dataclass
class GameState:
    """
    Complete game state at a point in time.

    This is the canonical state that the engine operates on.
    All state changes go through the reducer.
    """
    players: list[PlayerState] = field(default_factory=list)
    player_order: list[int] = field(default_factory=list)  # seats still taking turns
    current_player_index: int = 0  # index into player_order, not a seat
    turn_phase: TurnPhase = TurnPhase.KINGDOM_ACTION

    # Shared zones. Top of deck = last element.
    deck: list[str] = field(default_factory=list)
    burned: list[str] = field(default_factory=list)
    kingdom: list[str] = field(default_factory=list)
    discard: list[str] = field(default_factory=list)

    pending_action: PendingAction | None = None
    log: list[LogEntry] = field(default_factory=list)

    winner: str | None = None
    win_reason: WinReason | None = None
    final_scores: list[dict[str, Any]] = field(default_factory=list)

    rules: RulesConfig = field(default_factory=lambda: DEFAULT_RULES)
    rng: random.Random = field(default_factory=random.Random)

    @property
    def current_seat(self) -> int:
        return self.player_order[self.current_player_index]

    @property
    def current_player(self) -> PlayerState:
        """Get the player whose turn it is."""
        return self.get_player_by_seat(self.current_seat)

    @property
    def is_over(self) -> bool:
        return self.winner is not None

    @property
    def active_players(self) -> list[PlayerState]:
        return [p for p in self.players if not p.eliminated]

    def get_player(self, player_id: str) -> PlayerState | None:
        """Get player by ID."""
        for p in self.players:
            if p.id == player_id:
                return p
        return None

    def get_player_by_seat(self, seat: int) -> PlayerState:
        for p in self.players:
            if p.seat_index == seat:
                return p
        raise KeyError(f"No player at seat {seat}")

    def add_log(self, msg: str) -> None:
        """Append a public log line."""
        self.log.append(LogEntry(msg=msg, ts=time.time()))

    def all_cards(self) -> list[str]:
        """Every card token in every zone (for conservation checks)."""
        cards = self.deck + self.burned + self.kingdom + self.discard
        for p in self.players:
            cards = cards + p.hand + p.territory
        # A Magi being resolved is held by its pending action
        magi_card_id = getattr(self.pending_action, "magi_card_id", None)
        if magi_card_id:
            cards.append(magi_card_id)
        return cards

    def clone(self) -> GameState:
        """Deep copy the state."""
        return deepcopy(self)

    def to_dict(self) -> dict[str, Any]:
        """JSON-compatible record, shaped for a row store."""
        version, internal, gauss = self.rng.getstate()
        return {
            "players": [p.to_dict() for p in self.players],
            "playerOrder": list(self.player_order),
            "currentPlayerIndex": self.current_player_index,
            "turnPhase": self.turn_phase.value,
            "deck": list(self.deck),
            "burned": list(self.burned),
            "kingdom": list(self.kingdom),
            "discard": list(self.discard),
            "pendingAction": pending_to_dict(self.pending_action),
            "log": [entry.to_dict() for entry in self.log],
            "winner": self.winner,
            "winReason": self.win_reason.value if self.win_reason else None,
            "finalScores": deepcopy(self.final_scores),
            "rules": self.rules.to_dict(),
            "rngState": [version, list(internal), gauss],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GameState:
        rng = random.Random()
        if data.get("rngState"):
            version, internal, gauss = data["rngState"]
            rng.setstate((version, tuple(internal), gauss))
        rules = RulesConfig.from_dict(data["rules"]) if data.get("rules") else DEFAULT_RULES
        return cls(
            players=[PlayerState.from_dict(p) for p in data["players"]],
            player_order=list(data["playerOrder"]),
            current_player_index=data["currentPlayerIndex"],
            turn_phase=TurnPhase(data["turnPhase"]),
            deck=list(data["deck"]),
            burned=list(data["burned"]),
            kingdom=list(data["kingdom"]),
            discard=list(data["discard"]),
            pending_action=pending_from_dict(data.get("pendingAction")),
            log=[LogEntry(msg=e["msg"], ts=e["ts"]) for e in data.get("log", [])],
            winner=data.get("winner"),
            win_reason=WinReason(data["winReason"]) if data.get("winReason") else None,
            final_scores=deepcopy(data.get("finalScores", [])),
            rules=rules,
            rng=rng,
        )
