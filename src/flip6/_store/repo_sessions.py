# Area: Store
"""
flip6._store.repo_sessions — Sessions Repository
================================================

Loads and saves the full session aggregate: the session row, its
players, draw and discard piles, hands and round scores.

A save rewrites every child table of the session inside one
transaction, so a failure leaves the previous state intact.
"""

import json
import logging
import sqlite3
from typing import List, Optional, Tuple

from .database import BaseRepository
from .repo_round_scores import RoundScoreRepository
from .._engine.enums import ActionType, PlayerStatus
from .._engine.state import PendingAction, Player, Session
from ..errors import PersistenceError

logger = logging.getLogger("flip6.store.sessions")


class SessionRepository(BaseRepository):
    """
    Repository for sessions and their child tables.

    Implements the ``SessionStore`` protocol on SQLite.
    """

    def __init__(self, db_path: str = "flip6.db"):
        super().__init__(db_path)
        self.scores = RoundScoreRepository(db_path)

    # ── Reads ────────────────────────────────────────────────

    def get_session(self, code: str) -> Optional[Session]:
        """
        Load a session aggregate by join code.

        Args:
            code: Normalized join code

        Returns:
            Session or None if not found

        Raises:
            PersistenceError: On any database error
        """
        try:
            with self._read() as conn:
                row = conn.execute("SELECT * FROM sessions WHERE code = ?", (code,)).fetchone()
                if row is None:
                    return None
                return self._load_aggregate(conn, row)
        except sqlite3.Error as e:
            raise PersistenceError("load", code, e) from e

    def _load_aggregate(self, conn: sqlite3.Connection, row: sqlite3.Row) -> Session:
        session_id = row["session_id"]
        pending = None
        if row["pending_action"]:
            pending = PendingAction(
                action=ActionType(row["pending_action"]),
                actor_id=row["pending_actor_id"],
                value=row["pending_value"],
            )

        players = [
            self._row_to_player(p)
            for p in conn.execute(
                "SELECT * FROM session_players WHERE session_id = ? ORDER BY seat",
                (session_id,),
            )
        ]
        by_id = {p.player_id: p for p in players}
        for card in conn.execute(
            "SELECT player_id, value FROM hand_cards WHERE session_id = ? "
            "ORDER BY player_id, position",
            (session_id,),
        ):
            by_id[card["player_id"]].hand.append(card["value"])

        return Session(
            session_id=session_id,
            code=row["code"],
            locked=bool(row["locked"]),
            round_number=row["round_number"],
            round_over=bool(row["round_over"]),
            paused=bool(row["paused"]),
            current_player_id=row["current_player_id"],
            round_starter_id=row["round_starter_id"],
            turn_anchor_seat=row["turn_anchor_seat"],
            pending=pending,
            take_three_open=bool(row["take_three_open"]),
            forced_draws=json.loads(row["forced_draws"] or "[]"),
            players=players,
            draw_pile=self._load_pile(conn, "draw_pile", session_id),
            discard_pile=self._load_pile(conn, "discard_pile", session_id),
            round_scores=self.scores.load(conn, session_id),
        )

    @staticmethod
    def _load_pile(conn: sqlite3.Connection, table: str, session_id: int) -> List[str]:
        rows = conn.execute(
            f"SELECT value FROM {table} WHERE session_id = ? ORDER BY position",
            (session_id,),
        )
        return [r["value"] for r in rows]

    def find_connection(self, connection_id: str) -> Optional[Tuple[str, int]]:
        """Find (code, player_id) of the active player on a connection."""
        try:
            with self._read() as conn:
                row = conn.execute(
                    """
                    SELECT s.code, p.player_id FROM session_players p
                    JOIN sessions s ON s.session_id = p.session_id
                    WHERE p.connection_id = ? AND p.status = 'active'
                    """,
                    (connection_id,),
                ).fetchone()
        except sqlite3.Error as e:
            raise PersistenceError("find_connection", "", e) from e
        if row is None:
            return None
        return row["code"], row["player_id"]

    def list_codes(self) -> List[str]:
        try:
            with self._read() as conn:
                rows = conn.execute("SELECT code FROM sessions ORDER BY session_id").fetchall()
        except sqlite3.Error as e:
            raise PersistenceError("list_codes", "", e) from e
        return [r["code"] for r in rows]

    # ── Writes ───────────────────────────────────────────────

    def create_session(self, code: str) -> Session:
        """
        Create an empty session row.

        Raises:
            PersistenceError: On any database error
        """
        try:
            with self._transaction() as conn:
                conn.execute("INSERT OR IGNORE INTO sessions (code) VALUES (?)", (code,))
                row = conn.execute("SELECT * FROM sessions WHERE code = ?", (code,)).fetchone()
                session = self._load_aggregate(conn, row)
        except sqlite3.Error as e:
            raise PersistenceError("create", code, e) from e
        logger.info(f"[{code}] Session created (id {session.session_id})")
        return session

    def save_session(self, session: Session) -> None:
        """
        Persist the whole aggregate in one transaction.

        Raises:
            PersistenceError: On any database error; nothing is written
        """
        sid = session.session_id
        pending = session.pending
        try:
            with self._transaction() as conn:
                conn.execute(
                    """
                    UPDATE sessions SET
                        locked = ?, round_number = ?, round_over = ?, paused = ?,
                        current_player_id = ?, round_starter_id = ?, turn_anchor_seat = ?,
                        pending_action = ?, pending_actor_id = ?, pending_value = ?,
                        take_three_open = ?, forced_draws = ?,
                        updated_at = CURRENT_TIMESTAMP
                    WHERE session_id = ?
                    """,
                    (
                        int(session.locked), session.round_number,
                        int(session.round_over), int(session.paused),
                        session.current_player_id, session.round_starter_id,
                        session.turn_anchor_seat,
                        pending.action.value if pending else None,
                        pending.actor_id if pending else None,
                        pending.value if pending else None,
                        int(session.take_three_open), json.dumps(session.forced_draws),
                        sid,
                    ),
                )
                for table in ("session_players", "hand_cards", "draw_pile", "discard_pile"):
                    conn.execute(f"DELETE FROM {table} WHERE session_id = ?", (sid,))

                conn.executemany(
                    """
                    INSERT INTO session_players
                    (session_id, player_id, name, seat, status, connected,
                     connection_id, stayed, busted, total_score)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    [
                        (sid, p.player_id, p.name, p.seat, p.status.value,
                         int(p.connected), p.connection_id, int(p.stayed),
                         int(p.busted), p.total_score)
                        for p in session.players
                    ],
                )
                conn.executemany(
                    "INSERT INTO hand_cards (session_id, player_id, position, value) "
                    "VALUES (?, ?, ?, ?)",
                    [
                        (sid, p.player_id, i, card)
                        for p in session.players for i, card in enumerate(p.hand)
                    ],
                )
                conn.executemany(
                    "INSERT INTO draw_pile (session_id, position, value) VALUES (?, ?, ?)",
                    [(sid, i, card) for i, card in enumerate(session.draw_pile)],
                )
                conn.executemany(
                    "INSERT INTO discard_pile (session_id, position, value) VALUES (?, ?, ?)",
                    [(sid, i, card) for i, card in enumerate(session.discard_pile)],
                )
                self.scores.write(conn, session.round_scores)
        except sqlite3.Error as e:
            raise PersistenceError("save", session.code, e) from e

    @staticmethod
    def _row_to_player(row: sqlite3.Row) -> Player:
        return Player(
            player_id=row["player_id"],
            name=row["name"],
            seat=row["seat"],
            status=PlayerStatus(row["status"]),
            connected=bool(row["connected"]),
            connection_id=row["connection_id"],
            stayed=bool(row["stayed"]),
            busted=bool(row["busted"]),
            total_score=row["total_score"],
        )
