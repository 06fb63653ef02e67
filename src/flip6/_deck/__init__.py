# Area: Deck
"""
Deck engine: card catalog, hybrid shuffle and pile management.
"""

from .catalog import CARD_CATALOG, CardKind, card_kind, card_meta, default_counts
from .dealer import Dealer
from .shuffle import build_template, hybrid_shuffle

__all__ = [
    "CARD_CATALOG",
    "CardKind",
    "card_kind",
    "card_meta",
    "default_counts",
    "Dealer",
    "build_template",
    "hybrid_shuffle",
]
