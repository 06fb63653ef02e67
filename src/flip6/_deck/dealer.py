# Area: Deck
"""
flip6._deck.dealer — Pile management
====================================

Owns the template, the random source and the shuffle settings for every
session served by one engine. Moves cards between a session's draw pile,
discard pile and hands without ever creating or destroying one.
"""

from __future__ import annotations
import logging
import random
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, Sequence

from .catalog import default_counts
from .shuffle import (
    ACTION_CAP,
    DEFAULT_STREAK_LENGTHS,
    build_template,
    hybrid_shuffle,
)

if TYPE_CHECKING:
    from .._engine.state import Player, Session

logger = logging.getLogger("flip6.deck")


class Dealer:
    """
    Builds, shuffles and deals decks.

    Args:
        counts: {value: count} template (defaults to the standard catalog)
        rng: Random source shared by every shuffle
        streak_lengths: Run lengths forced into the number backbone
        action_cap: Max non-number cards clustered per shuffle
    """

    def __init__(
        self,
        counts: Optional[Dict[str, int]] = None,
        rng: Optional[random.Random] = None,
        streak_lengths: Sequence[int] = DEFAULT_STREAK_LENGTHS,
        action_cap: int = ACTION_CAP,
    ):
        self.counts = dict(counts) if counts is not None else default_counts()
        self.rng = rng or random.Random()
        self.streak_lengths = tuple(streak_lengths)
        self.action_cap = action_cap

    @property
    def template_total(self) -> int:
        return sum(self.counts.values())

    def shuffle(self, cards: Iterable[str]) -> List[str]:
        return hybrid_shuffle(
            cards,
            rng=self.rng,
            streak_lengths=self.streak_lengths,
            action_cap=self.action_cap,
        )

    def ensure_deck(self, session: "Session") -> bool:
        """
        Deal a fresh deck if the draw pile is empty.

        Returns:
            True if a new deck was installed, False if the pile had cards
        """
        if session.draw_pile:
            return False
        self.reset_deck(session)
        return True

    def reset_deck(self, session: "Session") -> None:
        """Rebuild and shuffle the full template; clear discard and all hands."""
        session.draw_pile = self.shuffle(build_template(self.counts))
        session.discard_pile = []
        for player in session.players:
            player.hand = []
        logger.info(f"[{session.code}] New deck of {len(session.draw_pile)} cards")

    def draw_top(self, session: "Session") -> Optional[str]:
        """
        Pop the top card.

        An empty draw pile is refilled by shuffling the whole discard pile.
        Returns None when both piles are empty.
        """
        if not session.draw_pile:
            if not session.discard_pile:
                logger.info(f"[{session.code}] No card available to draw")
                return None
            session.draw_pile = self.shuffle(session.discard_pile)
            session.discard_pile = []
            logger.info(
                f"[{session.code}] Recycled discard pile into "
                f"{len(session.draw_pile)}-card draw pile"
            )
        return session.draw_pile.pop(0)

    def discard(self, session: "Session", player: "Player", value: str) -> bool:
        """Move one copy of ``value`` from a hand to the discard pile."""
        if value not in player.hand:
            return False
        player.hand.remove(value)
        session.discard_pile.append(value)
        return True

    def discard_hand(self, session: "Session", player: "Player") -> None:
        session.discard_pile.extend(player.hand)
        player.hand = []
