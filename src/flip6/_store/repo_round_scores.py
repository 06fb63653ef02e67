# Area: Store
"""
flip6._store.repo_round_scores — Round Scores Repository
========================================================

Repository for the append-only round_scores table. Rows are written in
the same transaction as the session save that produced them and are
never updated afterwards.
"""

import sqlite3
from typing import Iterable, List

from .database import BaseRepository
from .._engine.state import RoundScore


class RoundScoreRepository(BaseRepository):
    """
    Repository for round_scores table.

    Rows are read and written on a connection owned by the session
    repository, so scores share its snapshot and its transaction.
    """

    def write(self, conn: sqlite3.Connection, scores: Iterable[RoundScore]) -> None:
        """
        Insert score rows on an open transaction.

        Existing rows for the same (session, player, round) are left
        untouched.

        Args:
            conn: Connection holding the caller's transaction
            scores: Rows to insert
        """
        conn.executemany(
            """
            INSERT OR IGNORE INTO round_scores
            (session_id, player_id, round_number, score)
            VALUES (?, ?, ?, ?)
            """,
            [(s.session_id, s.player_id, s.round_number, s.score) for s in scores],
        )

    def load(self, conn: sqlite3.Connection, session_id: int) -> List[RoundScore]:
        """Read a session's rows on an open connection, by round, then player."""
        rows = conn.execute(
            """
            SELECT * FROM round_scores
            WHERE session_id = ?
            ORDER BY round_number, player_id
            """,
            (session_id,),
        ).fetchall()
        return [self._row_to_score(row) for row in rows]

    def get_scores(self, session_id: int) -> List[RoundScore]:
        """
        Get all score rows for a session.

        Args:
            session_id: Session identifier

        Returns:
            Rows ordered by round, then player
        """
        with self._read() as conn:
            return self.load(conn, session_id)

    @staticmethod
    def _row_to_score(row: sqlite3.Row) -> RoundScore:
        return RoundScore(
            session_id=row["session_id"],
            player_id=row["player_id"],
            round_number=row["round_number"],
            score=row["score"],
        )
