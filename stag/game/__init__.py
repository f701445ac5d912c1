"""
Game Module - The Stag card set and rule constants.

Game setup lives in stag.game.setup.
"""

from .rules import RulesConfig, DEFAULT_RULES
from .cards import (
    CardType,
    card_display_name,
    create_deck,
    is_card_id,
    parse_card_type,
    parse_card_value,
    stag_discard_cost,
)

__all__ = [
    "RulesConfig",
    "DEFAULT_RULES",
    "CardType",
    "card_display_name",
    "create_deck",
    "is_card_id",
    "parse_card_type",
    "parse_card_value",
    "stag_discard_cost",
]
