"""
Action payload schemas.

Payloads arrive as camelCase JSON-like records, e.g.
    {"cardId": "stag-3-1", "discardIds": ["healing-1-4"]}
Each action name maps to one model; parse_payload() turns a raw record
into a typed model or a readable error string. Rule checks (is the card
in hand, is the count right) happen in the handlers, not here.
"""

from __future__ import annotations
from typing import Any, Optional

from pydantic import BaseModel, Field, StrictBool, StrictInt, ValidationError

from .action import ActionType


class Payload(BaseModel):
    """Base payload: accepts camelCase or snake_case keys, ignores extras."""
    model_config = {"populate_by_name": True, "extra": "ignore"}


class EmptyPayload(Payload):
    """Actions with no parameters."""


class CardPayload(Payload):
    """A single card choice."""
    card_id: str = Field(..., alias="cardId", min_length=1)


class PlayStagPayload(Payload):
    """The stag to play and the hand cards paid for it."""
    card_id: str = Field(..., alias="cardId", min_length=1)
    discard_ids: list[str] = Field(default_factory=list, alias="discardIds")


class CardListPayload(Payload):
    """An ordered selection of cards."""
    card_ids: list[str] = Field(default_factory=list, alias="cardIds")


class HuntResponsePayload(Payload):
    """
    A hunt response.

    avert=False declines (the responder will discard). avert=True must
    bring enough healing: healing_ids are revealed from hand, magi_ids
    are territory Magi re-flagged as healing for good.
    """
    avert: StrictBool = False
    healing_ids: list[str] = Field(default_factory=list, alias="healingIds")
    magi_ids: list[str] = Field(default_factory=list, alias="magiIds")


class MagiChoicePayload(Payload):
    """The Magi split; sign and total are checked by the handler."""
    draw_top: StrictInt = Field(..., alias="drawTop")
    draw_bottom: StrictInt = Field(..., alias="drawBottom")
    place_bottom: StrictInt = Field(..., alias="placeBottom")


class TitheContributePayload(Payload):
    contribute: StrictBool


class KingCommandResponsePayload(Payload):
    """The stag surrendered, or None to declare having none."""
    card_id: Optional[str] = Field(None, alias="cardId")


PAYLOAD_MODELS: dict[ActionType, type[Payload]] = {
    ActionType.DRAW_CARD: EmptyPayload,
    ActionType.DRAFT_KINGDOM: CardPayload,
    ActionType.PLAY_STAG: PlayStagPayload,
    ActionType.PLAY_TERRITORY: CardPayload,
    ActionType.NO_TERRITORY: EmptyPayload,
    ActionType.DRAFT_KINGDOM_PICK: CardPayload,
    ActionType.STAG_KINGDOM_PICK: CardPayload,
    ActionType.HUNT_RESPONSE: HuntResponsePayload,
    ActionType.HUNT_DISCARD: CardListPayload,
    ActionType.MAGI_CHOICE: MagiChoicePayload,
    ActionType.MAGI_PLACE_CARDS: CardListPayload,
    ActionType.TITHE_DISCARD: CardListPayload,
    ActionType.TITHE_CONTRIBUTE: TitheContributePayload,
    ActionType.KING_COMMAND_RESPONSE: KingCommandResponsePayload,
    ActionType.KING_COMMAND_COLLECT: CardListPayload,
    ActionType.DISCARD_TO_HAND_LIMIT: CardListPayload,
}


def parse_payload(
    action_type: ActionType, raw: dict[str, Any] | None
) -> tuple[Payload | None, str | None]:
    """
    Validate a raw payload for an action.

    Returns (payload, None) on success or (None, error message).
    """
    model = PAYLOAD_MODELS[action_type]
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        return None, f"Payload for {action_type.value} must be an object"
    try:
        return model.model_validate(raw), None
    except ValidationError as e:
        problems = []
        for err in e.errors():
            loc = ".".join(str(part) for part in err["loc"]) or "payload"
            problems.append(f"{loc}: {err['msg']}")
        return None, f"Invalid payload for {action_type.value}: " + "; ".join(problems)
