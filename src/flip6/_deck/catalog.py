# Area: Deck
"""
flip6._deck.catalog — Card catalog
==================================

Static table of every card value in a Flip-to-6 deck, the display asset
clients render for it, and how many copies go into a full deck.

The engine only consumes value and count. Card values are plain strings
("0".."12" for number cards, "2x", "+4", "Freeze", ...) so they can be
stored and broadcast without conversion.
"""

from __future__ import annotations
from enum import Enum
from typing import Dict, List, Optional, Tuple


class CardKind(Enum):
    """How a drawn card behaves when it lands in a hand."""
    NUMBER        = "number"         # 0..12, busts on duplicate
    MODIFIER      = "modifier"       # 2x / +4 / +5 / -6, scored at round end
    ACTION        = "action"         # Freeze / Swap / Take3, opens a pending action
    SECOND_CHANCE = "second_chance"  # held in hand until a duplicate is drawn


TIMES_TWO = "2x"
PLUS_FOUR = "+4"
PLUS_FIVE = "+5"
MINUS_SIX = "-6"
SECOND_CHANCE = "SecondChance"
FREEZE = "Freeze"
SWAP = "Swap"
TAKE_THREE = "Take3"

MODIFIER_VALUES = (TIMES_TWO, PLUS_FOUR, PLUS_FIVE, MINUS_SIX)
ACTION_VALUES = (FREEZE, SWAP, TAKE_THREE)

MIN_NUMBER = 0
MAX_NUMBER = 12

# (value, display asset, copies in deck)
CARD_CATALOG: List[Tuple[str, str, int]] = [
    ("0", "0.png", 1),
    ("1", "1.png", 1),
    ("2", "2.png", 2),
    ("3", "3.png", 3),
    ("4", "4.png", 4),
    ("5", "5.png", 5),
    ("6", "6.png", 6),
    ("7", "7.png", 7),
    ("8", "8.png", 8),
    ("9", "9.png", 9),
    ("10", "10.png", 10),
    ("11", "11.png", 11),
    ("12", "12.png", 12),
    (TIMES_TWO, "action-2x.png", 1),
    (PLUS_FOUR, "action-4+.png", 2),
    (PLUS_FIVE, "action-5+.png", 2),
    (MINUS_SIX, "action-6-.png", 2),
    (FREEZE, "action-freeze.png", 1),
    (SECOND_CHANCE, "action-secondchance.png", 3),
    (SWAP, "action-swap.png", 1),
    (TAKE_THREE, "action-take3.png", 2),
]


def default_counts() -> Dict[str, int]:
    """Return the {value: count} map for a standard deck."""
    return {value: count for value, _, count in CARD_CATALOG}


def card_meta() -> List[Dict[str, str]]:
    """Return [{value, filename}] rows for clients, in catalog order."""
    return [{"value": value, "filename": filename} for value, filename, _ in CARD_CATALOG]


def card_number(value: str) -> Optional[int]:
    """Return the numeric face of a number card, or None for any other card."""
    if not value.isdigit():
        return None
    number = int(value)
    if MIN_NUMBER <= number <= MAX_NUMBER:
        return number
    return None


def is_number(value: str) -> bool:
    return card_number(value) is not None


def card_kind(value: str) -> CardKind:
    """
    Classify a card value.

    Raises:
        ValueError: If the value is not part of the catalog vocabulary
    """
    if is_number(value):
        return CardKind.NUMBER
    if value in MODIFIER_VALUES:
        return CardKind.MODIFIER
    if value in ACTION_VALUES:
        return CardKind.ACTION
    if value == SECOND_CHANCE:
        return CardKind.SECOND_CHANCE
    raise ValueError(f"Unknown card value: {value!r}")
