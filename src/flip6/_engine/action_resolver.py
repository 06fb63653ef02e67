# Area: Engine
"""
flip6._engine.action_resolver — Pending action resolution
=========================================================

Resolves the ACTION_PENDING sub-phase. Only the pending action's actor
may resolve it:

- Second Chance: accept (discard the duplicate and one Second Chance,
  keep drawing) or decline (bust, turn advances).
- Freeze(target): target stays immediately. Turn advances.
- Swap(target): actor and target exchange whole hands. Turn advances.
- Take3(target): target owes three forced draws. Turn advances once
  they are done.

Take3 draws go through an explicit queue on the session
(``forced_draws``). Draining stops whenever a forced draw opens another
pending action and resumes once that action is resolved. A nested Take3
queues its three draws ahead of the ones still owed. Draws owed by a
player who has left the round (bust, frozen, removed) are dropped.
If the turn holder leaves the round while the sequence is still open,
the pointer is cleared until the sequence ends.
"""

from __future__ import annotations
import logging
from typing import Optional

from .._deck.catalog import SECOND_CHANCE
from .enums import ActionType, DrawOutcome
from .state import PendingAction, Player, Session
from .turn_coordinator import TurnCoordinator

logger = logging.getLogger("flip6.engine.actions")

TAKE_THREE_DRAWS = 3


class ActionResolver:
    """
    Resolves pending actions on a session.

    Args:
        turns: Turn coordinator used for dealing and rotation
    """

    def __init__(self, turns: TurnCoordinator):
        self.turns = turns
        self.dealer = turns.dealer

    # ── Guards ───────────────────────────────────────────────

    def _open_action(
        self, session: Session, player_id: int, action: ActionType
    ) -> Optional[PendingAction]:
        pending = session.pending
        if (session.paused or pending is None or pending.action is not action
                or pending.actor_id != player_id):
            logger.debug(f"[{session.code}] Ignored {action.value} resolution "
                         f"from player {player_id}")
            return None
        return pending

    def _target(self, session: Session, target_id: Optional[int]) -> Optional[Player]:
        target = session.get_active_player(target_id)
        if target is None or not target.in_round():
            logger.debug(f"[{session.code}] Invalid action target {target_id}")
            return None
        return target

    # ── Second Chance ────────────────────────────────────────

    def resolve_second_chance(self, session: Session, player_id: int, accept: bool) -> bool:
        pending = self._open_action(session, player_id, ActionType.SECOND_CHANCE)
        if pending is None:
            return False

        player = session.get_player(player_id)
        session.pending = None
        if accept:
            self.dealer.discard(session, player, pending.value)
            self.dealer.discard(session, player, SECOND_CHANCE)
            logger.info(f"[{session.code}] {player.name} uses Second Chance on {pending.value}")
        else:
            self.turns.bust(session, player)
        self._finish(session, advance=not accept)
        return True

    # ── Targeted actions ─────────────────────────────────────

    def resolve_freeze(self, session: Session, player_id: int, target_id: int) -> bool:
        if self._open_action(session, player_id, ActionType.FREEZE) is None:
            return False
        target = self._target(session, target_id)
        if target is None:
            return False

        actor = session.get_player(player_id)
        self.dealer.discard(session, actor, ActionType.FREEZE.value)
        session.pending = None
        target.stayed = True
        logger.info(f"[{session.code}] {actor.name} freezes {target.name}")
        self._finish(session, advance=True)
        return True

    def resolve_swap(self, session: Session, player_id: int, target_id: int) -> bool:
        if self._open_action(session, player_id, ActionType.SWAP) is None:
            return False
        target = self._target(session, target_id)
        if target is None:
            return False

        actor = session.get_player(player_id)
        self.dealer.discard(session, actor, ActionType.SWAP.value)
        session.pending = None
        if target is not actor:
            actor.hand, target.hand = target.hand, actor.hand
            logger.info(f"[{session.code}] {actor.name} swaps hands with {target.name}")
        self._finish(session, advance=True)
        return True

    def resolve_take_three(self, session: Session, player_id: int, target_id: int) -> bool:
        if self._open_action(session, player_id, ActionType.TAKE_THREE) is None:
            return False
        target = self._target(session, target_id)
        if target is None:
            return False

        actor = session.get_player(player_id)
        self.dealer.discard(session, actor, ActionType.TAKE_THREE.value)
        session.pending = None
        session.forced_draws[0:0] = [target.player_id] * TAKE_THREE_DRAWS
        session.take_three_open = True
        logger.info(f"[{session.code}] {actor.name} makes {target.name} take three")
        self.drain_forced_draws(session)
        return True

    def cancel(self, session: Session, player_id: int) -> bool:
        """
        Withdraw an unresolved Freeze/Swap/Take3 without using it.

        The card goes to the discard pile and the actor keeps the turn.
        Second Chance decisions and actions raised inside a Take3
        sequence cannot be cancelled.
        """
        pending = session.pending
        if (session.paused or pending is None or pending.actor_id != player_id
                or pending.action is ActionType.SECOND_CHANCE
                or session.take_three_open):
            logger.debug(f"[{session.code}] Ignored cancel from player {player_id}")
            return False
        actor = session.get_player(player_id)
        self.dealer.discard(session, actor, pending.action.value)
        session.pending = None
        logger.info(f"[{session.code}] {actor.name} cancels {pending.action.value}")
        return True

    # ── Forced draws ─────────────────────────────────────────

    def drain_forced_draws(self, session: Session) -> None:
        """
        Deal queued Take3 draws until the queue is empty or an action opens.

        When the queue empties with nothing pending, the Take3 sequence is
        complete and the turn advances once.
        """
        while session.forced_draws and session.pending is None:
            target = session.get_player(session.forced_draws.pop(0))
            if target is None or not target.in_round():
                continue
            outcome = self.turns.deal_to(session, target)
            if outcome is DrawOutcome.NO_CARD:
                session.forced_draws = []

        if session.pending is None:
            session.take_three_open = False
            self.turns.advance_turn(session)
        else:
            self.turns.park_pointer(session)

    def _finish(self, session: Session, advance: bool) -> None:
        if session.take_three_open:
            self.drain_forced_draws(session)
        elif advance:
            self.turns.advance_turn(session)
