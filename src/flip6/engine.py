"""
flip6.engine — Command entry point
==================================

``GameEngine`` is what a transport talks to. Every command runs the
same cycle while holding that session's lock:

    load aggregate → apply transition → save → snapshot → broadcast

Commands on different sessions never share a lock. A command that is
ignored (wrong actor, wrong phase, paused) is not saved and not
broadcast. A store failure aborts the command with nothing written.

Usage:
    engine = GameEngine(load_config())
    engine.subscribe(lambda code, snapshot: transport.send(code, snapshot))
    result = engine.join("ABCD", "Dana", connection_id="ws-17")
    engine.draw("ABCD", result.player_id)
"""

from __future__ import annotations
import logging
import random
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from ._deck.catalog import card_meta
from ._deck.dealer import Dealer
from ._engine.action_resolver import ActionResolver
from ._engine.enums import ActionType
from ._engine.lifecycle import SessionLifecycle, normalize_code, normalize_name
from ._engine.scoring import ScoringRules
from ._engine.snapshot import build_state_snapshot
from ._engine.state import RoundScore, Session
from ._engine.turn_coordinator import TurnCoordinator
from ._shared.logging_config import log_engine_error
from ._store.database import init_database
from ._store.memory_store import MemorySessionStore
from ._store.protocol import SessionStore
from ._store.repo_sessions import SessionRepository
from .commands import parse_command
from .config import EngineConfig
from .errors import CommandValidationError, JoinRejectedError, PersistenceError

logger = logging.getLogger("flip6.engine")

SnapshotListener = Callable[[str, Dict[str, Any]], None]


@dataclass
class CommandResult:
    """Outcome of one command."""
    applied: bool
    snapshot: Optional[Dict[str, Any]] = None
    player_id: Optional[int] = None
    error: Optional[str] = None


class GameEngine:
    """
    Serializes and applies commands for any number of sessions.

    Args:
        config: Engine settings (defaults to ``EngineConfig()``)
        store: Session store; defaults to SQLite when ``config.db_path``
            is set, otherwise an in-memory store
        rng: Random source for shuffles; defaults to one seeded with
            ``config.seed``
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        store: Optional[SessionStore] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config or EngineConfig()
        self.store = store if store is not None else self._default_store()

        self.dealer = Dealer(
            counts=self.config.catalog,
            rng=rng or random.Random(self.config.seed),
            streak_lengths=self.config.streak_lengths,
            action_cap=self.config.action_cap,
        )
        self.rules = ScoringRules(
            completion_bonus=self.config.completion_bonus,
            completion_min_cards=self.config.completion_min_cards,
            clamp_at_zero=self.config.clamp_at_zero,
        )
        self.turns = TurnCoordinator(self.dealer, self.rules)
        self.actions = ActionResolver(self.turns)
        self.lifecycle = SessionLifecycle(self.actions)

        self._locks: Dict[str, threading.RLock] = {}
        self._locks_guard = threading.Lock()
        self._listeners: List[SnapshotListener] = []
        self._router: Dict[str, Callable[[Any], CommandResult]] = {
            "join": lambda c: self.join(c.session_code, c.name, c.connection_id),
            "connect": lambda c: self.connect(c.session_code, c.player_id, c.connection_id),
            "disconnect": self._dispatch_disconnect,
            "draw": lambda c: self.draw(c.session_code, c.player_id),
            "stay": lambda c: self.stay(c.session_code, c.player_id),
            "pass": lambda c: self.pass_turn(c.session_code, c.player_id),
            "resolve_action": lambda c: self.resolve_action(
                c.session_code, c.player_id, c.action, c.target_id, c.accept
            ),
            "cancel_action": lambda c: self.cancel_action(c.session_code, c.player_id),
            "end_round": lambda c: self.end_round(c.session_code, c.player_id),
            "shuffle_deck": lambda c: self.shuffle_deck(c.session_code, c.player_id),
            "remove_player": lambda c: self.remove_player(
                c.session_code, c.player_id, c.target_id
            ),
        }

    def _default_store(self) -> SessionStore:
        if self.config.db_path:
            init_database(self.config.db_path)
            return SessionRepository(self.config.db_path)
        return MemorySessionStore()

    # ── Broadcast ────────────────────────────────────────────

    def subscribe(self, listener: SnapshotListener) -> None:
        """Register ``listener(session_code, snapshot)`` for applied commands."""
        self._listeners.append(listener)

    def _broadcast(self, code: str, snapshot: Dict[str, Any]) -> None:
        for listener in list(self._listeners):
            try:
                listener(code, snapshot)
            except Exception:
                logger.exception(f"[{code}] Snapshot listener failed")

    # ── Core cycle ───────────────────────────────────────────

    def _session_lock(self, code: str) -> threading.RLock:
        with self._locks_guard:
            lock = self._locks.get(code)
            if lock is None:
                lock = self._locks[code] = threading.RLock()
            return lock

    def _snapshot(self, session: Session) -> Dict[str, Any]:
        return build_state_snapshot(
            session, self.dealer.template_total, self.config.preview_count
        )

    def _apply(
        self,
        code: str,
        mutate: Callable[[Session], bool],
        create: bool = False,
        player_id: Optional[int] = None,
    ) -> CommandResult:
        """
        Run one command against a session under its lock.

        ``mutate`` returns True when it changed the session. Only then is
        the session saved and broadcast.
        """
        code = normalize_code(code)
        with self._session_lock(code):
            try:
                session = self.store.get_session(code)
                if session is None:
                    if not create:
                        logger.debug(f"[{code}] Command for unknown session ignored")
                        return CommandResult(applied=False, error="unknown_session")
                    session = self.store.create_session(code)

                if not mutate(session):
                    return CommandResult(
                        applied=False, snapshot=self._snapshot(session), player_id=player_id
                    )
                self.store.save_session(session)
            except JoinRejectedError as e:
                log_engine_error(e, level=logging.WARNING)
                return CommandResult(applied=False, error=e.reason)
            except PersistenceError as e:
                logger.error(f"[{code}] {e}", exc_info=True)
                return CommandResult(applied=False, error="persistence_failure")

            snapshot = self._snapshot(session)
            self._broadcast(code, snapshot)
            return CommandResult(applied=True, snapshot=snapshot, player_id=player_id)

    # ── Connection commands ──────────────────────────────────

    def join(
        self, code: str, name: str, connection_id: Optional[str] = None
    ) -> CommandResult:
        """
        Join a session (created on first join) or rejoin a seat by name.

        The result carries the joined player's id.
        """
        clean_code = normalize_code(code)
        if not clean_code or not normalize_name(name):
            error = JoinRejectedError("missing_fields", clean_code, normalize_name(name))
            log_engine_error(error, level=logging.WARNING)
            return CommandResult(applied=False, error=error.reason)

        joined: Dict[str, int] = {}

        def mutate(session: Session) -> bool:
            player, _ = self.lifecycle.join(session, name)
            joined["player_id"] = player.player_id
            if connection_id is not None:
                self.lifecycle.connect(session, player.player_id, connection_id)
            return True

        result = self._apply(clean_code, mutate, create=True)
        result.player_id = joined.get("player_id") if result.applied else None
        return result

    def connect(self, code: str, player_id: int, connection_id: str) -> CommandResult:
        return self._apply(
            code,
            lambda s: self.lifecycle.connect(s, player_id, connection_id),
            player_id=player_id,
        )

    def disconnect(self, connection_id: str) -> CommandResult:
        """Disconnect whichever player is signed in on ``connection_id``."""
        try:
            found = self.store.find_connection(connection_id)
        except PersistenceError as e:
            logger.error(f"Connection lookup failed: {e}", exc_info=True)
            return CommandResult(applied=False, error="persistence_failure")
        if found is None:
            logger.debug(f"Disconnect for unknown connection {connection_id}")
            return CommandResult(applied=False, error="unknown_connection")
        code, player_id = found
        return self._apply(
            code,
            lambda s: self.lifecycle.disconnect(s, player_id, connection_id),
            player_id=player_id,
        )

    def disconnect_player(self, code: str, player_id: int) -> CommandResult:
        return self._apply(
            code, lambda s: self.lifecycle.disconnect(s, player_id), player_id=player_id
        )

    def _dispatch_disconnect(self, command: Any) -> CommandResult:
        if command.connection_id is not None:
            return self.disconnect(command.connection_id)
        return self.disconnect_player(command.session_code, command.player_id)

    # ── Turn commands ────────────────────────────────────────

    def draw(self, code: str, player_id: int) -> CommandResult:
        return self._apply(code, lambda s: self.turns.draw(s, player_id), player_id=player_id)

    def stay(self, code: str, player_id: int) -> CommandResult:
        return self._apply(code, lambda s: self.turns.stay(s, player_id), player_id=player_id)

    def pass_turn(self, code: str, player_id: int) -> CommandResult:
        return self._apply(
            code, lambda s: self.turns.pass_turn(s, player_id), player_id=player_id
        )

    def end_round(self, code: str, player_id: int) -> CommandResult:
        return self._apply(
            code, lambda s: self.turns.end_round(s, player_id), player_id=player_id
        )

    def shuffle_deck(self, code: str, player_id: int) -> CommandResult:
        """Rebuild and reshuffle the whole deck before the session is locked."""
        return self._apply(
            code, lambda s: self.turns.shuffle_deck(s, player_id), player_id=player_id
        )

    # ── Action commands ──────────────────────────────────────

    def resolve_action(
        self,
        code: str,
        player_id: int,
        action: ActionType,
        target_id: Optional[int] = None,
        accept: Optional[bool] = None,
    ) -> CommandResult:
        """
        Resolve the open action.

        ``accept`` answers a Second Chance decision; ``target_id`` picks
        the target of Freeze, Swap and Take3.
        """
        action = ActionType(action)

        def mutate(session: Session) -> bool:
            if action is ActionType.SECOND_CHANCE:
                return accept is not None and self.actions.resolve_second_chance(
                    session, player_id, accept
                )
            if target_id is None:
                return False
            if action is ActionType.FREEZE:
                return self.actions.resolve_freeze(session, player_id, target_id)
            if action is ActionType.SWAP:
                return self.actions.resolve_swap(session, player_id, target_id)
            return self.actions.resolve_take_three(session, player_id, target_id)

        return self._apply(code, mutate, player_id=player_id)

    def cancel_action(self, code: str, player_id: int) -> CommandResult:
        return self._apply(code, lambda s: self.actions.cancel(s, player_id), player_id=player_id)

    # ── Membership ───────────────────────────────────────────

    def remove_player(self, code: str, actor_id: int, target_id: int) -> CommandResult:
        return self._apply(
            code,
            lambda s: self.lifecycle.remove_player(s, actor_id, target_id),
            player_id=actor_id,
        )

    # ── Reads ────────────────────────────────────────────────

    def card_meta(self) -> List[Dict[str, str]]:
        """Value and display asset of every card this engine deals, in catalog order."""
        return [row for row in card_meta() if self.dealer.counts.get(row["value"], 0) > 0]

    def get_snapshot(self, code: str) -> Optional[Dict[str, Any]]:
        """Current snapshot of a session, or None if it does not exist."""
        code = normalize_code(code)
        with self._session_lock(code):
            session = self.store.get_session(code)
        return self._snapshot(session) if session is not None else None

    def round_history(
        self, code: str, round_number: Optional[int] = None
    ) -> List[RoundScore]:
        """
        Recorded round scores of a session, oldest round first.

        ``round_number`` limits the result to that one round.
        """
        code = normalize_code(code)
        with self._session_lock(code):
            session = self.store.get_session(code)
        if session is None:
            return []
        scores = (session.round_scores if round_number is None
                  else session.scores_for_round(round_number))
        return sorted(scores, key=lambda s: (s.round_number, s.player_id))

    # ── Transport entry ──────────────────────────────────────

    def dispatch(self, payload: Dict[str, Any]) -> CommandResult:
        """
        Validate a raw payload and route it to its command.

        Malformed payloads are logged and reported as not applied.
        """
        try:
            command = parse_command(payload)
        except CommandValidationError as e:
            log_engine_error(e, level=logging.WARNING)
            return CommandResult(applied=False, error="invalid_command")

        logger.debug(f"Routing {command.command}")
        return self._router[command.command](command)
