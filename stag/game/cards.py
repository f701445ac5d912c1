"""
Stag Cards - Card identity, display, and deck construction.

A card is an opaque string token "{type}-{value}-{copy}":
- type: stag, hunt, healing, magi, tithe, kingscommand
- value: stag points / hunt threat (1 for the other types)
- copy: disambiguates duplicates so every token in a game is unique

All functions here are pure. The only randomness is the shuffle in
create_deck, which takes an explicit random.Random.
"""

from __future__ import annotations
import random
from enum import Enum

from .rules import RulesConfig, DEFAULT_RULES


class CardType(Enum):
    """The six card types."""
    STAG = "stag"
    HUNT = "hunt"
    HEALING = "healing"
    MAGI = "magi"
    TITHE = "tithe"
    KINGS_COMMAND = "kingscommand"


DISPLAY_NAMES = {
    CardType.STAG: "Stag",
    CardType.HUNT: "Hunt",
    CardType.HEALING: "Healing",
    CardType.MAGI: "Magi",
    CardType.TITHE: "Tithe",
    CardType.KINGS_COMMAND: "King's Command",
}

# Types whose value is shown in the display name
VALUED_TYPES = {CardType.STAG, CardType.HUNT}

# Cards that may be played in the territory action
TERRITORY_TYPES = {
    CardType.HUNT,
    CardType.HEALING,
    CardType.MAGI,
    CardType.TITHE,
    CardType.KINGS_COMMAND,
}


def make_card_id(card_type: CardType | str, value: int, copy: int) -> str:
    """Build a card token."""
    type_name = card_type.value if isinstance(card_type, CardType) else card_type
    return f"{type_name}-{value}-{copy}"


def is_card_id(card_id: object) -> bool:
    """Check that a value is a well-formed card token."""
    if not isinstance(card_id, str):
        return False
    parts = card_id.split("-")
    if len(parts) != 3:
        return False
    type_name, value, copy = parts
    if type_name not in {t.value for t in CardType}:
        return False
    return value.isdigit() and copy.isdigit() and int(value) > 0


def parse_card_type(card_id: str) -> CardType:
    """
    Get the type of a card token.

    Raises ValueError for malformed tokens.
    """
    if not is_card_id(card_id):
        raise ValueError(f"Invalid card id: {card_id!r}")
    return CardType(card_id.split("-")[0])


def parse_card_value(card_id: str) -> int:
    """Get the value of a card token (stag points, hunt threat)."""
    if not is_card_id(card_id):
        raise ValueError(f"Invalid card id: {card_id!r}")
    return int(card_id.split("-")[1])


def is_type(card_id: str, card_type: CardType) -> bool:
    """Type check that tolerates malformed tokens (returns False)."""
    return is_card_id(card_id) and parse_card_type(card_id) is card_type


def card_display_name(card_id: str) -> str:
    """Human-readable name, e.g. 'Stag (4)' or "King's Command"."""
    card_type = parse_card_type(card_id)
    name = DISPLAY_NAMES[card_type]
    if card_type in VALUED_TYPES:
        return f"{name} ({parse_card_value(card_id)})"
    return name


def stag_discard_cost(stag_value: int, rules: RulesConfig = DEFAULT_RULES) -> int:
    """Number of hand cards that must be discarded to play a stag."""
    return rules.discard_cost_for(stag_value)


def build_card_list(rules: RulesConfig = DEFAULT_RULES) -> list[str]:
    """All card tokens for the configured composition, unshuffled."""
    cards = []
    copies_seen: dict[tuple[str, int], int] = {}
    for type_name, value, copies in rules.deck_composition:
        CardType(type_name)  # reject unknown types early
        for _ in range(copies):
            key = (type_name, value)
            copy = copies_seen.get(key, 0) + 1
            copies_seen[key] = copy
            cards.append(make_card_id(type_name, value, copy))
    return cards


def create_deck(rules: RulesConfig = DEFAULT_RULES, rng: random.Random | None = None) -> list[str]:
    """Create a full shuffled deck. The top of the deck is the end of the list."""
    rng = rng or random.Random()
    deck = build_card_list(rules)
    rng.shuffle(deck)
    return deck
