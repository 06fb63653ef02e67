# Area: Store
"""
flip6._store.database — SQLite connections
==========================================

Creates the schema and hands repositories one connection per unit of
work: ``_read`` for a consistent group of SELECTs, ``_transaction`` for
an all-or-nothing group of writes.
"""

import sqlite3
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

logger = logging.getLogger("flip6.store.database")

SCHEMA_PATH = Path(__file__).parent / "schema.sql"

# Seconds to wait on a locked database before failing
BUSY_TIMEOUT = 5.0


def connect(db_path: str) -> sqlite3.Connection:
    """Open a connection whose rows support access by column name."""
    conn = sqlite3.connect(db_path, timeout=BUSY_TIMEOUT)
    conn.row_factory = sqlite3.Row
    return conn


def init_database(db_path: str = "flip6.db") -> None:
    """
    Create every table and index in ``schema.sql`` if missing.

    Args:
        db_path: Path to the SQLite database file
    """
    conn = connect(db_path)
    try:
        conn.executescript(SCHEMA_PATH.read_text(encoding="utf-8"))
        conn.commit()
        logger.info(f"Database initialized at {db_path}")
    finally:
        conn.close()


class BaseRepository:
    """Shares a database path and the read/write units of work."""

    def __init__(self, db_path: str = "flip6.db"):
        self.db_path = db_path

    @contextmanager
    def _read(self) -> Iterator[sqlite3.Connection]:
        """
        Run several SELECTs against one snapshot of the database.

        A concurrent save cannot land between the queries of the block.
        """
        conn = connect(self.db_path)
        try:
            conn.execute("BEGIN")
            yield conn
        finally:
            conn.rollback()
            conn.close()

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        """
        Run several statements as one unit.

        Commits when the block exits cleanly; rolls everything back if it
        raises.
        """
        conn = connect(self.db_path)
        try:
            conn.execute("BEGIN IMMEDIATE")
            yield conn
            conn.commit()
        except BaseException:
            conn.rollback()
            raise
        finally:
            conn.close()
