# Area: Engine
"""
flip6._engine.turn_coordinator — Turn state machine
===================================================

Applies draw / stay / pass / end_round / shuffle_deck to a session and
rotates the turn pointer through the seats.

Every transition returns True when it changed the session and False when
it was ignored (wrong actor, wrong phase, paused). Ignored commands never
touch state; clients resynchronize from the next snapshot.
"""

from __future__ import annotations
import logging
from typing import Optional

from .._deck.catalog import SECOND_CHANCE, CardKind, card_kind
from .._deck.dealer import Dealer
from .enums import ActionType, DrawOutcome
from .scoring import DEFAULT_RULES, ScoringRules, score_player
from .state import PendingAction, Player, RoundScore, Session

logger = logging.getLogger("flip6.engine.turns")


class TurnCoordinator:
    """
    Owns the per-session turn state machine.

    Args:
        dealer: Deals and recycles cards
        rules: Round scoring settings
    """

    def __init__(self, dealer: Dealer, rules: ScoringRules = DEFAULT_RULES):
        self.dealer = dealer
        self.rules = rules

    # ── Guards ───────────────────────────────────────────────

    def can_act(self, session: Session, player_id: int) -> bool:
        """True if ``player_id`` may draw, stay or pass right now."""
        return (
            not session.paused
            and not session.round_over
            and session.pending is None
            and not session.take_three_open
            and session.current_player_id == player_id
            and session.get_active_player(player_id) is not None
        )

    # ── Player commands ──────────────────────────────────────

    def draw(self, session: Session, player_id: int) -> bool:
        if not self.can_act(session, player_id):
            logger.debug(f"[{session.code}] Ignored draw from player {player_id}")
            return False

        player = session.get_player(player_id)
        outcome = self.deal_to(session, player)
        if outcome is DrawOutcome.NO_CARD:
            return False

        if not session.locked:
            session.locked = True
            logger.info(f"[{session.code}] Session locked by first draw")
        if outcome is DrawOutcome.BUST:
            self.advance_turn(session)
        return True

    def stay(self, session: Session, player_id: int) -> bool:
        if not self.can_act(session, player_id):
            logger.debug(f"[{session.code}] Ignored stay from player {player_id}")
            return False
        player = session.get_player(player_id)
        player.stayed = True
        logger.info(f"[{session.code}] {player.name} stays")
        self.advance_turn(session)
        return True

    def pass_turn(self, session: Session, player_id: int) -> bool:
        """Hand the turn on without staying; the passer comes round again."""
        if not self.can_act(session, player_id):
            logger.debug(f"[{session.code}] Ignored pass from player {player_id}")
            return False
        logger.info(f"[{session.code}] Player {player_id} passes")
        self.advance_turn(session)
        return True

    # ── Dealing ──────────────────────────────────────────────

    def deal_to(self, session: Session, player: Player) -> DrawOutcome:
        """
        Draw one card into ``player``'s hand and apply its effect.

        Used for normal draws and for Take3 forced draws. Busts the player
        on an uncovered duplicate; opens a pending action for action cards
        and covered duplicates. Never advances the turn.
        """
        card = self.dealer.draw_top(session)
        if card is None:
            return DrawOutcome.NO_CARD

        kind = card_kind(card)
        duplicate = kind is CardKind.NUMBER and player.holds(card)
        player.hand.append(card)

        if kind is CardKind.ACTION:
            session.pending = PendingAction(ActionType(card), player.player_id)
            logger.info(f"[{session.code}] {player.name} drew {card}")
            return DrawOutcome.ACTION

        if not duplicate:
            return DrawOutcome.ADDED

        if player.holds(SECOND_CHANCE):
            session.pending = PendingAction(
                ActionType.SECOND_CHANCE, player.player_id, card
            )
            logger.info(f"[{session.code}] {player.name} drew duplicate {card}, "
                        f"Second Chance decision pending")
            return DrawOutcome.SECOND_CHANCE

        self.bust(session, player)
        return DrawOutcome.BUST

    def bust(self, session: Session, player: Player) -> None:
        player.stayed = True
        player.busted = True
        logger.info(f"[{session.code}] {player.name} busts")

    # ── Rotation ─────────────────────────────────────────────

    def next_eligible(self, session: Session, after_seat: int) -> Optional[Player]:
        """
        First player still in the round, in seat order after ``after_seat``.

        Wraps around, so the player at ``after_seat`` itself is checked last.
        """
        seated = session.seated()
        rotation = ([p for p in seated if p.seat > after_seat]
                    + [p for p in seated if p.seat <= after_seat])
        for player in rotation:
            if player.in_round():
                return player
        return None

    def advance_turn(self, session: Session) -> Optional[Player]:
        """
        Move the pointer to the next eligible player.

        If nobody is left in the round, the round is over and the pointer
        is cleared.
        """
        current = session.get_player(session.current_player_id)
        if current is not None:
            after_seat = current.seat
        elif session.turn_anchor_seat is not None:
            after_seat = session.turn_anchor_seat
        else:
            after_seat = -1
        session.turn_anchor_seat = None
        nxt = self.next_eligible(session, after_seat)

        if nxt is None:
            session.current_player_id = None
            if session.active_players():
                session.round_over = True
                logger.info(f"[{session.code}] Round {session.round_number} over")
            return None

        session.current_player_id = nxt.player_id
        logger.debug(f"[{session.code}] Turn: {nxt.name}")
        return nxt

    def park_pointer(self, session: Session) -> None:
        """
        Clear the pointer of a holder who left the round mid-Take3.

        The holder's seat is kept in ``turn_anchor_seat`` so the single
        advance at the end of the sequence still rotates from it.
        """
        current = session.get_player(session.current_player_id)
        if current is None or current.in_round() or not session.take_three_open:
            return
        session.turn_anchor_seat = current.seat
        session.current_player_id = None
        logger.debug(f"[{session.code}] Turn pointer parked at seat {current.seat}")

    # ── Round end ────────────────────────────────────────────

    def end_round(self, session: Session, player_id: int) -> bool:
        """
        Score the finished round and deal the next one.

        Legal only when the round is over, the session is not paused and
        the caller is an active player.
        """
        if (not session.round_over or session.paused
                or session.get_active_player(player_id) is None):
            logger.debug(f"[{session.code}] Ignored end_round from player {player_id}")
            return False

        finished = session.round_number
        for player in session.active_players():
            score = score_player(player, self.rules)
            session.round_scores.append(
                RoundScore(session.session_id, player.player_id, finished, score)
            )
            player.total_score += score
            logger.info(f"[{session.code}] Round {finished}: {player.name} scores "
                        f"{score} (total {player.total_score})")

        for player in session.players:
            self.dealer.discard_hand(session, player)
            player.stayed = False
            player.busted = False

        session.round_number += 1
        session.round_over = False
        session.pending = None
        session.take_three_open = False
        session.forced_draws = []
        session.turn_anchor_seat = None
        self.dealer.reset_deck(session)

        starter = self._next_starter(session)
        session.round_starter_id = starter.player_id if starter else None
        session.current_player_id = session.round_starter_id
        logger.info(f"[{session.code}] Round {session.round_number} starts with "
                    f"{starter.name if starter else 'nobody'}")
        return True

    # ── Deck ─────────────────────────────────────────────────

    def shuffle_deck(self, session: Session, player_id: int) -> bool:
        """
        Rebuild and reshuffle the whole deck on request.

        Only before the first draw locks the session, when no hand holds
        a card. Once the session is locked, decks are rebuilt by
        ``end_round``.
        """
        if (session.locked or session.paused or session.pending is not None
                or session.get_active_player(player_id) is None):
            logger.debug(f"[{session.code}] Ignored shuffle_deck from player {player_id}")
            return False
        self.dealer.reset_deck(session)
        logger.info(f"[{session.code}] Deck reshuffled by player {player_id}")
        return True

    def _next_starter(self, session: Session) -> Optional[Player]:
        previous = session.get_player(session.round_starter_id)
        after_seat = previous.seat if previous else -1
        seated = session.seated()
        rotation = ([p for p in seated if p.seat > after_seat]
                    + [p for p in seated if p.seat <= after_seat])
        for player in rotation:
            if player.active:
                return player
        return None
