# Area: Store
"""
Session persistence: SQLite repositories and an in-memory store.
"""

from .database import connect, init_database
from .memory_store import MemorySessionStore
from .protocol import SessionStore
from .repo_round_scores import RoundScoreRepository
from .repo_sessions import SessionRepository

__all__ = [
    "connect",
    "init_database",
    "MemorySessionStore",
    "SessionStore",
    "RoundScoreRepository",
    "SessionRepository",
]
