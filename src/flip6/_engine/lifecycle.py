# Area: Engine
"""
flip6._engine.lifecycle — Join, connection and removal
======================================================

Handles who is seated in a session and whether the session can run:

- join: new seat, or reconnection to an existing disconnected seat
  matched by case-insensitive name
- lock: set by the first draw; only blocks brand-new players
- connect / disconnect: flip ``connected`` and recompute ``paused``
- remove: soft-removes a player (scores are kept) and repairs the turn
"""

from __future__ import annotations
import logging
from typing import Optional, Tuple

from ..errors import JoinRejectedError
from .action_resolver import ActionResolver
from .enums import PlayerStatus
from .state import Player, Session

logger = logging.getLogger("flip6.engine.lifecycle")


def normalize_code(code: Optional[str]) -> str:
    return str(code or "").strip().upper()


def normalize_name(name: Optional[str]) -> str:
    return str(name or "").strip()


class SessionLifecycle:
    """
    Seats, reconnects and removes players.

    Args:
        resolver: Action resolver (gives access to turns and dealer)
    """

    def __init__(self, resolver: ActionResolver):
        self.resolver = resolver
        self.turns = resolver.turns
        self.dealer = resolver.dealer

    # ── Join ─────────────────────────────────────────────────

    def join(self, session: Session, name: str) -> Tuple[Player, bool]:
        """
        Seat a player or reconnect an existing one.

        Returns:
            (player, rejoined) where rejoined is True for a reconnection

        Raises:
            JoinRejectedError: name empty, name held by a connected player,
                or a new player joining a locked session
        """
        clean_name = normalize_name(name)
        if not clean_name:
            raise JoinRejectedError("missing_fields", session.code, clean_name)

        existing = session.find_active_by_name(clean_name)
        if existing is not None:
            if existing.connected:
                raise JoinRejectedError("name_in_use", session.code, clean_name)
            logger.info(f"[{session.code}] {existing.name} rejoins at seat {existing.seat}")
            return existing, True

        if session.locked:
            raise JoinRejectedError("session_locked", session.code, clean_name)

        player = Player(
            player_id=max((p.player_id for p in session.players), default=0) + 1,
            name=clean_name,
            seat=max((p.seat for p in session.players), default=-1) + 1,
        )
        session.players.append(player)
        logger.info(f"[{session.code}] {player.name} joins at seat {player.seat}")

        if session.current_player_id is None and not session.round_over:
            session.current_player_id = player.player_id
            session.round_starter_id = player.player_id
        self.dealer.ensure_deck(session)
        self.recompute_pause(session)
        return player, False

    # ── Connections ──────────────────────────────────────────

    def connect(self, session: Session, player_id: int, connection_id: str) -> bool:
        """
        Mark a player connected on ``connection_id``.

        Raises:
            JoinRejectedError: unknown player, or already connected elsewhere
        """
        player = session.get_active_player(player_id)
        if player is None:
            raise JoinRejectedError("unknown_player", session.code)
        if (player.connected and player.connection_id
                and player.connection_id != connection_id):
            raise JoinRejectedError("already_connected", session.code, player.name)

        player.connected = True
        player.connection_id = connection_id
        if not session.locked:
            self.dealer.ensure_deck(session)
        self.recompute_pause(session)
        return True

    def disconnect(
        self, session: Session, player_id: int, connection_id: Optional[str] = None
    ) -> bool:
        """Mark a player disconnected. Never removes the player."""
        player = session.get_active_player(player_id)
        if player is None or not player.connected:
            return False
        if connection_id is not None and player.connection_id != connection_id:
            return False
        player.connected = False
        player.connection_id = None
        logger.info(f"[{session.code}] {player.name} disconnected")
        self.recompute_pause(session)
        return True

    def recompute_pause(self, session: Session) -> bool:
        """
        Pause while any active player is disconnected.

        Returns:
            True if the paused flag changed
        """
        paused = bool(session.disconnected_players())
        if paused == session.paused:
            return False
        session.paused = paused
        if paused:
            names = ", ".join(p.name for p in session.disconnected_players())
            logger.warning(f"[{session.code}] Paused, waiting for: {names}")
        else:
            logger.info(f"[{session.code}] Resumed, all players connected")
        return True

    # ── Removal ──────────────────────────────────────────────

    def remove_player(self, session: Session, actor_id: int, target_id: int) -> bool:
        """
        Soft-remove ``target_id`` on behalf of any active player.

        Allowed while paused so a session can recover from a player who
        never comes back.
        """
        if session.get_active_player(actor_id) is None:
            return False
        target = session.get_active_player(target_id)
        if target is None:
            return False

        was_current = session.current_player_id == target.player_id
        if session.pending is not None and session.pending.actor_id == target.player_id:
            session.pending = None

        target.status = PlayerStatus.REMOVED
        target.connected = False
        target.connection_id = None
        self.dealer.discard_hand(session, target)
        logger.info(f"[{session.code}] {target.name} removed by player {actor_id}")

        if session.round_starter_id == target.player_id and not session.locked:
            session.round_starter_id = None

        if session.pending is None and session.take_three_open:
            self.resolver.drain_forced_draws(session)
        elif was_current and session.pending is None and not session.round_over:
            self.turns.advance_turn(session)
        else:
            self.turns.park_pointer(session)

        if session.round_starter_id is None and not session.locked:
            session.round_starter_id = session.current_player_id
        self.recompute_pause(session)
        return True
