"""
Pending Actions - Resumable multi-step interactions.

A pending action temporarily overrides normal turn-taking: while one
is set, only its responder may act, and only with the matching action
name. Each variant carries exactly the state needed to validate the
next response and continue.

Variants form a closed set discriminated by `kind`. PENDING_ACTION_NAMES
maps each kind to the action name the dispatcher accepts for it.
"""

from __future__ import annotations
from dataclasses import dataclass, field, fields, asdict
from enum import Enum
from typing import Any, Union


class PendingKind(Enum):
    """Discriminator for pending action variants."""
    DRAFT_KINGDOM = "draftKingdom"
    STAG_KINGDOM_DRAFT = "stagKingdomDraft"
    STAG_KINGDOM_PICK_SELF = "stagKingdomPickSelf"
    HUNT_RESPONSE = "huntResponse"
    HUNT_DISCARD = "huntDiscard"
    MAGI_CHOICE = "magiChoice"
    MAGI_PLACE_CARDS = "magiPlaceCards"
    TITHE_DISCARD = "titheDiscard"
    TITHE_CONTRIBUTE = "titheContribute"
    KING_COMMAND_RESPONSE = "kingCommandResponse"
    KING_COMMAND_COLLECT = "kingCommandCollect"
    DISCARD_TO_HAND_LIMIT = "discardToHandLimit"


@dataclass
class PendingDraftKingdom:
    """Opponents pick one kingdom card each after a 'draft kingdom' action."""
    current_drafter_seat: int
    remaining_drafter_seats: list[int] = field(default_factory=list)
    kind: PendingKind = field(default=PendingKind.DRAFT_KINGDOM, init=False)

    @property
    def responder_seat(self) -> int:
        return self.current_drafter_seat


@dataclass
class PendingStagKingdomDraft:
    """Opponents draft in clockwise rounds after a stag is played."""
    stag_player_seat: int
    current_drafter_seat: int
    remaining_drafter_seats: list[int] = field(default_factory=list)
    round: int = 1
    kind: PendingKind = field(default=PendingKind.STAG_KINGDOM_DRAFT, init=False)

    @property
    def responder_seat(self) -> int:
        return self.current_drafter_seat


@dataclass
class PendingStagKingdomPickSelf:
    """The stag player takes the last pick; the rest is discarded."""
    stag_player_seat: int
    kind: PendingKind = field(default=PendingKind.STAG_KINGDOM_PICK_SELF, init=False)

    @property
    def responder_seat(self) -> int:
        return self.stag_player_seat


@dataclass
class PendingHuntResponse:
    """Opponents decide, one at a time, whether to avert a hunt."""
    hunt_player_seat: int
    hunt_card_id: str
    hunt_total_value: int
    responding_seat: int
    remaining_responder_seats: list[int] = field(default_factory=list)
    discards_per_player: int = 2
    draws_for_hunter: int = 2
    averters: int = 0
    non_averter_seats: list[int] = field(default_factory=list)
    kind: PendingKind = field(default=PendingKind.HUNT_RESPONSE, init=False)

    @property
    def responder_seat(self) -> int:
        return self.responding_seat


@dataclass
class PendingHuntDiscard:
    """Players who failed to avert a hunt discard, one at a time."""
    hunt_player_seat: int
    hunt_card_id: str
    current_discard_seat: int
    remaining_discard_seats: list[int] = field(default_factory=list)
    discards_per_player: int = 2
    draws_for_hunter: int = 2
    averters: int = 0
    kind: PendingKind = field(default=PendingKind.HUNT_DISCARD, init=False)

    @property
    def responder_seat(self) -> int:
        return self.current_discard_seat


@dataclass
class PendingMagiChoice:
    """Magi player chooses the drawTop/drawBottom/placeBottom split."""
    player_seat: int
    magi_card_id: str
    kind: PendingKind = field(default=PendingKind.MAGI_CHOICE, init=False)

    @property
    def responder_seat(self) -> int:
        return self.player_seat


@dataclass
class PendingMagiPlaceCards:
    """Magi player chooses which hand cards go to the bottom of the deck."""
    player_seat: int
    place_bottom_count: int
    magi_card_id: str
    kind: PendingKind = field(default=PendingKind.MAGI_PLACE_CARDS, init=False)

    @property
    def responder_seat(self) -> int:
        return self.player_seat


@dataclass
class PendingTitheDiscard:
    """Discard-then-redraw chain started by a tithe."""
    tithe_player_seat: int
    tithe_card_id: str
    current_discard_seat: int
    remaining_discard_seats: list[int] = field(default_factory=list)
    contributions_so_far: int = 0
    kind: PendingKind = field(default=PendingKind.TITHE_DISCARD, init=False)

    @property
    def responder_seat(self) -> int:
        return self.current_discard_seat


@dataclass
class PendingTitheContribute:
    """Tithe player may pay a coin to cycle their hand again."""
    player_seat: int
    tithe_card_id: str
    contributions_so_far: int = 0
    kind: PendingKind = field(default=PendingKind.TITHE_CONTRIBUTE, init=False)

    @property
    def responder_seat(self) -> int:
        return self.player_seat


@dataclass
class PendingKingCommandResponse:
    """Opponents surrender a stag (or declare none), one at a time."""
    command_player_seat: int
    responding_seat: int
    remaining_responder_seats: list[int] = field(default_factory=list)
    discarded_stags: list[str] = field(default_factory=list)
    kind: PendingKind = field(default=PendingKind.KING_COMMAND_RESPONSE, init=False)

    @property
    def responder_seat(self) -> int:
        return self.responding_seat


@dataclass
class PendingKingCommandCollect:
    """Commanding player takes any of the surrendered stags."""
    command_player_seat: int
    discarded_stags: list[str] = field(default_factory=list)
    kind: PendingKind = field(default=PendingKind.KING_COMMAND_COLLECT, init=False)

    @property
    def responder_seat(self) -> int:
        return self.command_player_seat


@dataclass
class PendingDiscardToHandLimit:
    """End-of-turn discard down to the hand limit."""
    player_seat: int
    must_discard: int
    kind: PendingKind = field(default=PendingKind.DISCARD_TO_HAND_LIMIT, init=False)

    @property
    def responder_seat(self) -> int:
        return self.player_seat


PendingAction = Union[
    PendingDraftKingdom,
    PendingStagKingdomDraft,
    PendingStagKingdomPickSelf,
    PendingHuntResponse,
    PendingHuntDiscard,
    PendingMagiChoice,
    PendingMagiPlaceCards,
    PendingTitheDiscard,
    PendingTitheContribute,
    PendingKingCommandResponse,
    PendingKingCommandCollect,
    PendingDiscardToHandLimit,
]

PENDING_CLASSES: dict[PendingKind, type] = {
    PendingKind.DRAFT_KINGDOM: PendingDraftKingdom,
    PendingKind.STAG_KINGDOM_DRAFT: PendingStagKingdomDraft,
    PendingKind.STAG_KINGDOM_PICK_SELF: PendingStagKingdomPickSelf,
    PendingKind.HUNT_RESPONSE: PendingHuntResponse,
    PendingKind.HUNT_DISCARD: PendingHuntDiscard,
    PendingKind.MAGI_CHOICE: PendingMagiChoice,
    PendingKind.MAGI_PLACE_CARDS: PendingMagiPlaceCards,
    PendingKind.TITHE_DISCARD: PendingTitheDiscard,
    PendingKind.TITHE_CONTRIBUTE: PendingTitheContribute,
    PendingKind.KING_COMMAND_RESPONSE: PendingKingCommandResponse,
    PendingKind.KING_COMMAND_COLLECT: PendingKingCommandCollect,
    PendingKind.DISCARD_TO_HAND_LIMIT: PendingDiscardToHandLimit,
}

# The single action name accepted while each kind is pending
PENDING_ACTION_NAMES: dict[PendingKind, str] = {
    PendingKind.DRAFT_KINGDOM: "draftKingdomPick",
    PendingKind.STAG_KINGDOM_DRAFT: "stagKingdomPick",
    PendingKind.STAG_KINGDOM_PICK_SELF: "stagKingdomPick",
    PendingKind.HUNT_RESPONSE: "huntResponse",
    PendingKind.HUNT_DISCARD: "huntDiscard",
    PendingKind.MAGI_CHOICE: "magiChoice",
    PendingKind.MAGI_PLACE_CARDS: "magiPlaceCards",
    PendingKind.TITHE_DISCARD: "titheDiscard",
    PendingKind.TITHE_CONTRIBUTE: "titheContribute",
    PendingKind.KING_COMMAND_RESPONSE: "kingCommandResponse",
    PendingKind.KING_COMMAND_COLLECT: "kingCommandCollect",
    PendingKind.DISCARD_TO_HAND_LIMIT: "discardToHandLimit",
}


def expected_action_name(pending: PendingAction) -> str:
    """Action name the responder must send to resolve this pending action."""
    return PENDING_ACTION_NAMES[pending.kind]


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def pending_to_dict(pending: PendingAction | None) -> dict[str, Any] | None:
    """Serialize a pending action to a JSON-compatible dict (camelCase keys)."""
    if pending is None:
        return None
    data = {"type": pending.kind.value}
    for key, value in asdict(pending).items():
        if key == "kind":
            continue
        data[_camel(key)] = list(value) if isinstance(value, list) else value
    return data


def pending_from_dict(data: dict[str, Any] | None) -> PendingAction | None:
    """Rebuild a pending action from pending_to_dict output."""
    if data is None:
        return None
    kind = PendingKind(data["type"])
    cls = PENDING_CLASSES[kind]
    kwargs = {}
    for f in fields(cls):
        if not f.init:
            continue
        camel = _camel(f.name)
        if camel in data:
            value = data[camel]
            kwargs[f.name] = list(value) if isinstance(value, list) else value
    return cls(**kwargs)
