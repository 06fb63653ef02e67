# Area: Deck
"""
flip6._deck.shuffle — Hybrid shuffle
====================================

Expands a catalog template into a flat card multiset and orders it with
the hybrid shuffle:

1. Split into number cards and non-number cards.
2. Permute each subset independently (Fisher-Yates via ``Random.shuffle``).
3. Force short runs of equal number cards (default lengths 2 and 3).
4. Cap the non-number subset; any surplus goes to the bottom of the pile.
5. Insert non-number cards into the number backbone in clustered batches,
   one batch per zone, so action density is bursty rather than even.

The random source is injected so callers and tests can seed it.
"""

from __future__ import annotations
import logging
import random
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .catalog import is_number

logger = logging.getLogger("flip6.deck")

DEFAULT_STREAK_LENGTHS: Tuple[int, ...] = (2, 3)
ACTION_CAP = 14
MIN_BATCH = 1
MAX_BATCH = 3

# Fractions of the number backbone: (start, end)
ACTION_ZONES: Tuple[Tuple[float, float], ...] = (
    (0.10, 0.30),
    (0.30, 0.65),
    (0.65, 0.80),
    (0.80, 1.00),
)


def build_template(counts: Dict[str, int]) -> List[str]:
    """
    Expand a {value: count} map into a flat list of card values.

    Raises:
        ValueError: If any count is negative
    """
    cards: List[str] = []
    for value, count in counts.items():
        if count < 0:
            raise ValueError(f"Negative count for card {value!r}: {count}")
        cards.extend([value] * count)
    return cards


def hybrid_shuffle(
    cards: Iterable[str],
    rng: Optional[random.Random] = None,
    streak_lengths: Sequence[int] = DEFAULT_STREAK_LENGTHS,
    action_cap: int = ACTION_CAP,
) -> List[str]:
    """
    Return a new ordering of ``cards``; index 0 is the top of the pile.

    The output is always a permutation of the input multiset.
    """
    rng = rng or random.Random()
    numbers: List[str] = []
    others: List[str] = []
    for card in cards:
        (numbers if is_number(card) else others).append(card)

    rng.shuffle(numbers)
    rng.shuffle(others)

    for length in streak_lengths:
        force_streak(numbers, length)

    clustered, surplus = others[:action_cap], others[action_cap:]
    if surplus:
        logger.debug(f"{len(surplus)} action cards over cap, placed at bottom")

    deck = insert_clustered(numbers, clustered, rng)
    deck.extend(surplus)
    return deck


def force_streak(sequence: List[str], length: int) -> bool:
    """
    Make ``length`` equal cards adjacent, in place.

    Walks windows left to right and takes the first one that is not
    already a run and whose leading value has enough later copies to
    fill it; those copies are swapped in, last slot first.

    Returns:
        True if a run was forced, False if no window could be filled
    """
    if length < 2 or len(sequence) < length:
        return False

    for start in range(len(sequence) - length + 1):
        end = start + length
        value = sequence[start]
        gaps = [i for i in range(start + 1, end) if sequence[i] != value]
        if not gaps:
            continue
        donors = [j for j in range(end, len(sequence)) if sequence[j] == value]
        if len(donors) < len(gaps):
            continue
        for gap, donor in zip(reversed(gaps), donors):
            sequence[gap], sequence[donor] = sequence[donor], sequence[gap]
        return True
    return False


def longest_run(sequence: Sequence[str]) -> int:
    """Length of the longest block of equal adjacent values."""
    best = 0
    current = 0
    previous = None
    for value in sequence:
        current = current + 1 if value == previous else 1
        previous = value
        best = max(best, current)
    return best


def insert_clustered(
    backbone: List[str], inserts: List[str], rng: random.Random
) -> List[str]:
    """
    Insert cards into the backbone in zone batches.

    Each zone receives one batch of 1-3 cards at a single random position
    inside it. Zones are revisited in order until every card is placed.
    """
    remaining = list(inserts)
    if not backbone:
        return remaining

    size = len(backbone)
    placements: Dict[int, List[str]] = {}
    while remaining:
        for low, high in ACTION_ZONES:
            if not remaining:
                break
            batch_size = min(rng.randint(MIN_BATCH, MAX_BATCH), len(remaining))
            batch, remaining = remaining[:batch_size], remaining[batch_size:]
            start = int(size * low)
            stop = max(start, int(size * high))
            placements.setdefault(rng.randint(start, stop), []).extend(batch)

    deck: List[str] = []
    for index in range(size + 1):
        deck.extend(placements.get(index, ()))
        if index < size:
            deck.append(backbone[index])
    return deck
