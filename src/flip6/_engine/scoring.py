# Area: Engine
"""
flip6._engine.scoring — Round scoring
=====================================

Scores a hand at round end:

    numbers = sum of number cards
    x2 if a "2x" card is held
    +4 / +5 / -6 for each modifier held (each applied at most once)
    clamp at zero (configurable)
    +completion bonus when the hand holds enough cards

A busted player scores zero regardless of hand contents.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable

from .._deck.catalog import MINUS_SIX, PLUS_FIVE, PLUS_FOUR, TIMES_TWO, card_number
from .state import Player


@dataclass(frozen=True)
class ScoringRules:
    completion_bonus: int = 15
    completion_min_cards: int = 6
    clamp_at_zero: bool = True


DEFAULT_RULES = ScoringRules()


def compute_hand_score(hand: Iterable[str], rules: ScoringRules = DEFAULT_RULES) -> int:
    """Score a hand, ignoring bust state."""
    cards = list(hand)
    held = set(cards)

    score = sum(n for n in (card_number(c) for c in cards) if n is not None)
    if TIMES_TWO in held:
        score *= 2
    if PLUS_FOUR in held:
        score += 4
    if PLUS_FIVE in held:
        score += 5
    if MINUS_SIX in held:
        score -= 6
    if rules.clamp_at_zero:
        score = max(score, 0)

    if rules.completion_bonus and len(cards) >= rules.completion_min_cards:
        score += rules.completion_bonus
    return score


def score_player(player: Player, rules: ScoringRules = DEFAULT_RULES) -> int:
    if player.busted:
        return 0
    return compute_hand_score(player.hand, rules)
